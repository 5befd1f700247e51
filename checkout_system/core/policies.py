"""Queueing policies deciding where customers wait and which line a station serves."""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List, Optional, Sequence

from checkout_system.core.base import ConfigurationError, Customer
from checkout_system.core.station import CheckoutStation


class QueueingPolicy(ABC):
    """Base class for all queueing policies."""

    name = ""

    @abstractmethod
    def num_queues(self, num_stations: int) -> int:
        """Number of waiting lines the policy needs for `num_stations` stations."""
        pass

    @abstractmethod
    def route_arrival(self,
                      customer: Customer,
                      queues: Sequence[Deque[Customer]],
                      stations: Sequence[CheckoutStation]) -> int:
        """Return the index of the queue an arriving customer joins."""
        pass

    @abstractmethod
    def queue_for_station(self, station_index: int) -> int:
        """Return the index of the queue a station pulls from."""
        pass

    def create_queues(self, num_stations: int) -> List[Deque[Customer]]:
        return [deque() for _ in range(self.num_queues(num_stations))]

    def select_for_station(self,
                           station_index: int,
                           queues: Sequence[Deque[Customer]]) -> Optional[Customer]:
        """Pop the customer waiting longest in the station's queue, if any."""
        queue = queues[self.queue_for_station(station_index)]
        if queue:
            return queue.popleft()
        return None


class SingleQueuePolicy(QueueingPolicy):
    """One shared line; the next free station takes the head of the line."""

    name = "single"

    def num_queues(self, num_stations: int) -> int:
        return 1

    def route_arrival(self, customer, queues, stations) -> int:
        return 0

    def queue_for_station(self, station_index: int) -> int:
        return 0


class PerStationPolicy(QueueingPolicy):
    """One line per station; each station only serves its own line."""

    def num_queues(self, num_stations: int) -> int:
        return num_stations

    def queue_for_station(self, station_index: int) -> int:
        return station_index


class ShortestQueuePolicy(PerStationPolicy):
    """Customers join the shortest line, lowest index on ties."""

    name = "shortest"

    def route_arrival(self, customer, queues, stations) -> int:
        shortest = 0
        for i in range(1, len(queues)):
            if len(queues[i]) < len(queues[shortest]):
                shortest = i
        return shortest


class RandomQueuePolicy(PerStationPolicy):
    """Customers join a uniformly random line."""

    name = "random"

    def __init__(self, draws):
        self.draws = draws

    def route_arrival(self, customer, queues, stations) -> int:
        return self.draws.index(len(queues))


POLICY_NAMES = (SingleQueuePolicy.name, ShortestQueuePolicy.name, RandomQueuePolicy.name)


def create_policy(name: str, draws) -> QueueingPolicy:
    """Build a queueing policy by name."""
    if name == SingleQueuePolicy.name:
        return SingleQueuePolicy()
    elif name == ShortestQueuePolicy.name:
        return ShortestQueuePolicy()
    elif name == RandomQueuePolicy.name:
        return RandomQueuePolicy(draws)
    else:
        raise ConfigurationError(f"Unknown queueing policy: {name}")
