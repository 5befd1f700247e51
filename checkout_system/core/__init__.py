"""Core components of the checkout system."""

from .base import (
    ConfigurationError,
    Customer,
    SimulationReport,
    SimulationStateError,
    StatisticsTracker,
)
from .station import CheckoutStation
from .policies import (
    POLICY_NAMES,
    QueueingPolicy,
    RandomQueuePolicy,
    ShortestQueuePolicy,
    SingleQueuePolicy,
    create_policy,
)

__all__ = [
    'ConfigurationError',
    'Customer',
    'SimulationReport',
    'SimulationStateError',
    'StatisticsTracker',
    'CheckoutStation',
    'POLICY_NAMES',
    'QueueingPolicy',
    'RandomQueuePolicy',
    'ShortestQueuePolicy',
    'SingleQueuePolicy',
    'create_policy',
]
