"""Grocery checkout queueing simulation package."""

from checkout_system.config import SimulationConfig, load_config
from checkout_system.core import (
    CheckoutStation,
    ConfigurationError,
    Customer,
    SimulationReport,
    SimulationStateError,
    StatisticsTracker,
)
from checkout_system.system import CheckoutSystem

__all__ = [
    'CheckoutStation',
    'CheckoutSystem',
    'ConfigurationError',
    'Customer',
    'SimulationConfig',
    'SimulationReport',
    'SimulationStateError',
    'StatisticsTracker',
    'load_config',
]
