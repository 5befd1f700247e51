"""Simulation engine for the checkout system."""

from .checkout_system import CheckoutSystem

__all__ = ['CheckoutSystem']
