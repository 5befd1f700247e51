"""Random variable distributions for the checkout system."""

from .random_variables import (
    RandomDraws,
    uniform_int_distribution,
    independent_streams,
    bernoulli_arrivals,
    fixed_interval_arrivals,
    service_duration,
    customer_generator,
)

__all__ = [
    'RandomDraws',
    'uniform_int_distribution',
    'independent_streams',
    'bernoulli_arrivals',
    'fixed_interval_arrivals',
    'service_duration',
    'customer_generator',
]
