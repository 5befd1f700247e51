"""Base classes for the checkout system."""

from dataclasses import dataclass, asdict
from typing import Dict, Optional


class ConfigurationError(ValueError):
    """Raised when a simulation is configured with invalid parameters."""


class SimulationStateError(RuntimeError):
    """Raised when the simulation reaches an inconsistent internal state."""


@dataclass
class Customer:
    """Represents a customer moving through the store."""
    customer_id: int
    arrival_time: int
    item_count: int
    payment_duration: int
    service_duration: int
    queue_entry_time: Optional[int] = None
    service_start_time: Optional[int] = None
    station_id: Optional[int] = None
    departure_time: Optional[int] = None

    def __post_init__(self):
        if self.queue_entry_time is None:
            self.queue_entry_time = self.arrival_time

    def wait_time(self) -> int:
        """Time spent waiting in queue before reaching a station."""
        if self.service_start_time is None:
            return 0
        return self.service_start_time - self.queue_entry_time

    def time_in_store(self) -> int:
        """Time between arrival and departure."""
        if self.departure_time is None:
            return 0
        return self.departure_time - self.arrival_time


def _ratio(numerator: float, denominator: float) -> float:
    if denominator > 0:
        return numerator / denominator
    return 0.0


@dataclass(frozen=True)
class SimulationReport:
    """Aggregate results of a single simulation run."""
    policy: str
    run_duration: int
    num_stations: int
    customers_arrived: int
    customers_departed: int
    customers_moved_to_checkout: int
    arrival_rate_per_hour: float
    departure_rate_per_hour: float
    checkout_rate_per_hour: float
    average_customers_in_queue: float
    average_customers_in_store: float
    average_wait_time: float
    average_time_in_store: float
    checkout_busy_percentage: float
    max_queue_length: int
    max_customers_in_store: int

    def as_dict(self) -> Dict:
        return asdict(self)


@dataclass
class StatisticsTracker:
    """Tracks run-wide counters sampled by the simulation loop."""
    customers_arrived: int = 0
    customers_moved_to_checkout: int = 0
    customers_departed: int = 0
    total_wait_time: int = 0
    total_time_in_store: int = 0
    busy_station_seconds: int = 0
    queue_length_samples: int = 0
    population_samples: int = 0
    max_queue_length: int = 0
    max_customers_in_store: int = 0

    def record_arrival(self):
        self.customers_arrived += 1

    def record_service(self, wait_time: int):
        """Record a customer leaving the queue for a checkout station."""
        self.customers_moved_to_checkout += 1
        self.total_wait_time += wait_time

    def record_departure(self, time_in_store: int):
        """Record a customer leaving the store."""
        self.customers_departed += 1
        self.total_time_in_store += time_in_store

    def update_max_queue(self, current_length: int):
        if current_length > self.max_queue_length:
            self.max_queue_length = current_length

    def update_max_population(self, current_population: int):
        if current_population > self.max_customers_in_store:
            self.max_customers_in_store = current_population

    def sample_queue_length(self, current_length: int):
        self.queue_length_samples += current_length
        self.update_max_queue(current_length)

    def sample_population(self, current_population: int):
        self.population_samples += current_population
        self.update_max_population(current_population)

    def sample_busy_stations(self, count: int):
        self.busy_station_seconds += count

    def average_wait_time(self) -> float:
        """Calculate average time spent in queue."""
        return _ratio(self.total_wait_time, self.customers_moved_to_checkout)

    def average_time_in_store(self) -> float:
        """Calculate average time between arrival and departure."""
        return _ratio(self.total_time_in_store, self.customers_departed)

    def average_queue_length(self, run_duration: int) -> float:
        return _ratio(self.queue_length_samples, run_duration)

    def average_population(self, run_duration: int) -> float:
        return _ratio(self.population_samples, run_duration)

    def utilization(self, run_duration: int, num_stations: int) -> float:
        """Fraction of station-seconds during which a station was busy."""
        return _ratio(self.busy_station_seconds, run_duration * num_stations)

    @staticmethod
    def hourly_rate(count: int, run_duration: int) -> float:
        """Normalize a count over the run to a per-hour figure."""
        return _ratio(3600.0 * count, run_duration)

    def report(self, policy: str, run_duration: int, num_stations: int) -> SimulationReport:
        return SimulationReport(
            policy=policy,
            run_duration=run_duration,
            num_stations=num_stations,
            customers_arrived=self.customers_arrived,
            customers_departed=self.customers_departed,
            customers_moved_to_checkout=self.customers_moved_to_checkout,
            arrival_rate_per_hour=self.hourly_rate(self.customers_arrived, run_duration),
            departure_rate_per_hour=self.hourly_rate(self.customers_departed, run_duration),
            checkout_rate_per_hour=self.hourly_rate(self.customers_moved_to_checkout, run_duration),
            average_customers_in_queue=self.average_queue_length(run_duration),
            average_customers_in_store=self.average_population(run_duration),
            average_wait_time=self.average_wait_time(),
            average_time_in_store=self.average_time_in_store(),
            checkout_busy_percentage=100.0 * self.utilization(run_duration, num_stations),
            max_queue_length=self.max_queue_length,
            max_customers_in_store=self.max_customers_in_store,
        )
