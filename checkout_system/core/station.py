"""Checkout station component implementation."""

from typing import Optional

from checkout_system.core.base import Customer, SimulationStateError


class CheckoutStation:
    """A single checkout lane serving one customer at a time."""

    def __init__(self, station_id: int):
        self.station_id = station_id
        self.occupant: Optional[Customer] = None
        self.remaining_service_seconds = 0

    def is_available(self) -> bool:
        return self.occupant is None

    def assign_customer(self, customer: Customer, now: int) -> None:
        """Start serving a customer at time `now`."""
        if not self.is_available():
            raise SimulationStateError(
                f"Station {self.station_id} is serving customer "
                f"{self.occupant.customer_id}, cannot assign {customer.customer_id}"
            )
        self.occupant = customer
        customer.service_start_time = now
        customer.station_id = self.station_id
        self.remaining_service_seconds = customer.service_duration

    def tick(self) -> Optional[Customer]:
        """
        Advance service by one second.
        Returns the departing customer when service completes, otherwise None.
        """
        if self.occupant is None:
            return None

        self.remaining_service_seconds -= 1
        if self.remaining_service_seconds > 0:
            return None

        departing_customer = self.occupant
        self.occupant = None
        self.remaining_service_seconds = 0
        return departing_customer

    def status(self) -> str:
        """Short state label used in debug summaries."""
        if self.occupant is None:
            return "F"
        return str(self.remaining_service_seconds)
