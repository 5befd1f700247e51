"""Main checkout system coordinator and tick-stepped simulation engine."""

import logging
from typing import Callable, Dict, Optional

from checkout_system.config import SimulationConfig
from checkout_system.core import (
    CheckoutStation,
    ConfigurationError,
    Customer,
    SimulationReport,
    SimulationStateError,
    StatisticsTracker,
    create_policy,
)
from checkout_system.distributions import (
    bernoulli_arrivals,
    customer_generator,
    fixed_interval_arrivals,
    independent_streams,
)

logger = logging.getLogger(__name__)


class CheckoutSystem:
    """Store with checkout stations, waiting lines and a queueing policy.

    Each simulated second runs four phases in a fixed order: arrival,
    departure, assignment of waiting customers to free stations, and
    sampling of queue and station occupancy.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        if config is None:
            config = SimulationConfig()
        self.config = config.validate()
        self.reset()

    def reset(self) -> None:
        """Reset the system to initial state, reseeding the random source."""
        config = self.config
        self.current_time = 0
        # Routing has its own stream so every policy sees the same arrivals for a seed
        self.draws, self.routing_draws = independent_streams(config.seed, 2)
        self.policy = create_policy(config.policy, self.routing_draws)
        self.stations = [CheckoutStation(i) for i in range(config.num_stations)]
        self.queues = self.policy.create_queues(config.num_stations)
        self.customers: Dict[int, Customer] = {}  # {customer_id: Customer}
        self.next_customer_id = 1
        self.statistics = StatisticsTracker()

        self._customer_generator = customer_generator(
            self.draws, config.item_range, config.payment_range, config.scan_range
        )
        self._arrivals = self._create_arrival_process()

    def _create_arrival_process(self) -> Callable[[int], bool]:
        if self.config.arrival_model == 'bernoulli':
            return bernoulli_arrivals(self.draws, self.config.inter_arrival_time)
        elif self.config.arrival_model == 'fixed':
            return fixed_interval_arrivals(self.config.inter_arrival_time)
        raise ConfigurationError(f"Unknown arrival model: {self.config.arrival_model}")

    def waiting_count(self) -> int:
        """Total number of customers across all waiting lines."""
        return sum(len(queue) for queue in self.queues)

    def busy_count(self) -> int:
        return sum(1 for station in self.stations if not station.is_available())

    def simulate(self, max_time: Optional[int] = None) -> None:
        """Run the simulation until `max_time` ticks have elapsed."""
        if max_time is None:
            max_time = self.config.run_duration
        if max_time < 0:
            raise ConfigurationError(f"max_time must not be negative, got {max_time}")

        while self.current_time < max_time:
            self.step()

    def step(self) -> None:
        """Advance the simulation by exactly one second."""
        now = self.current_time
        self._process_arrival(now)
        self._process_departures(now)
        self._process_assignments(now)
        self._sample(now)
        self.current_time += 1

    def _process_arrival(self, now: int) -> None:
        if not self._arrivals(now):
            return

        customer = self._customer_generator(self.next_customer_id, now)
        self.next_customer_id += 1
        customer.queue_entry_time = now
        self.customers[customer.customer_id] = customer
        self.statistics.record_arrival()

        queue_index = self.policy.route_arrival(customer, self.queues, self.stations)
        if not 0 <= queue_index < len(self.queues):
            raise SimulationStateError(
                f"Policy {self.policy.name} routed customer {customer.customer_id} "
                f"to missing queue {queue_index}"
            )
        self.queues[queue_index].append(customer)

        logger.debug("[Arrive Event] %d: customer %d arrived at queue %d, service %d sec",
                     now, customer.customer_id, queue_index, customer.service_duration)

    def _process_departures(self, now: int) -> None:
        for station in self.stations:
            departing_customer = station.tick()
            if departing_customer is None:
                continue

            departing_customer.departure_time = now
            time_in_store = departing_customer.time_in_store()
            self.statistics.record_departure(time_in_store)

            logger.debug("[Leave Event] %d: customer %d is leaving checkout %d, total store time %d",
                         now, departing_customer.customer_id, station.station_id, time_in_store)

    def _process_assignments(self, now: int) -> None:
        for i, station in enumerate(self.stations):
            if not station.is_available():
                continue

            customer = self.policy.select_for_station(i, self.queues)
            if customer is None:
                continue

            station.assign_customer(customer, now)
            wait_time = customer.wait_time()
            self.statistics.record_service(wait_time)

            logger.debug("[Move Event] %d: customer %d is moving to checkout %d, waiting time %d",
                         now, customer.customer_id, i, wait_time)

    def _sample(self, now: int) -> None:
        waiting = self.waiting_count()
        busy = self.busy_count()
        self.statistics.sample_queue_length(waiting)
        self.statistics.sample_busy_stations(busy)
        self.statistics.sample_population(waiting + busy)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[Summary] %d: queue size=[%s], checkout=[%s]", now,
                         ",".join(str(len(queue)) for queue in self.queues),
                         ",".join(station.status() for station in self.stations))

    def get_report(self) -> SimulationReport:
        """Summarize the ticks run so far."""
        return self.statistics.report(self.policy.name, self.current_time,
                                      self.config.num_stations)

    def get_metrics_summary(self) -> Dict:
        """Get a summary of all run metrics as a plain dict."""
        metrics = self.get_report().as_dict()
        metrics['customers_waiting'] = self.waiting_count()
        metrics['customers_in_service'] = self.busy_count()
        return metrics
