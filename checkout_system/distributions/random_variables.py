"""
Random variable generators for the checkout simulation.
Draws go through injected numpy Generators so runs are reproducible.
"""

import numpy as np
from typing import Callable, List, Optional, Tuple

from checkout_system.core.base import Customer


class RandomDraws:
    """Uniform integer and Bernoulli draws backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None,
                 generator: Optional[np.random.Generator] = None):
        if generator is None:
            generator = np.random.default_rng(seed)
        self.rng = generator

    def integer(self, low: int, high: int) -> int:
        """Generate an integer uniformly distributed in [low, high)."""
        return int(self.rng.integers(low, high))

    def chance(self, p: float) -> bool:
        """Return True with probability p."""
        return bool(self.rng.random() < p)

    def index(self, n: int) -> int:
        """Generate an index uniformly distributed in [0, n)."""
        return self.integer(0, n)


def independent_streams(seed: Optional[int], count: int) -> List[RandomDraws]:
    """
    Derive `count` statistically independent random sources from one seed.
    Draws taken from one stream never shift the values of another.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [RandomDraws(generator=np.random.default_rng(child)) for child in children]


# Distribution factory functions
def uniform_int_distribution(draws: RandomDraws, low: int, high: int) -> Callable[[], int]:
    """Create a uniform integer distribution over [low, high)."""
    return lambda: draws.integer(low, high)


# Arrival processes: called once per tick, return whether a customer arrives
def bernoulli_arrivals(draws: RandomDraws, inter_arrival_time: float) -> Callable[[int], bool]:
    """
    Arrivals as an independent trial every second.

    Args:
        draws: Random source
        inter_arrival_time: Mean seconds between arrivals; the per-tick
            arrival probability is its reciprocal.
    """
    probability = 1.0 / inter_arrival_time
    return lambda now: draws.chance(probability)


def fixed_interval_arrivals(inter_arrival_time: int) -> Callable[[int], bool]:
    """
    Arrivals exactly every `inter_arrival_time` seconds, starting at tick 0.
    """
    countdown = 0

    def arrives(now: int) -> bool:
        nonlocal countdown
        if countdown > 0:
            countdown -= 1
            return False
        countdown = inter_arrival_time - 1
        return True

    return arrives


# Customer-dependent distributions
def service_duration(item_count: int,
                     payment_duration: int,
                     scan_time: Callable[[], int]) -> int:
    """Payment time plus one independent scan draw per item."""
    return payment_duration + sum(scan_time() for _ in range(item_count))


def customer_generator(draws: RandomDraws,
                       item_range: Tuple[int, int],
                       payment_range: Tuple[int, int],
                       scan_range: Tuple[int, int]) -> Callable[[int, int], Customer]:
    """
    Create a customer factory.

    Args:
        draws: Random source shared with the rest of the run
        item_range: [min, max) number of items in a basket
        payment_range: [min, max) seconds spent paying
        scan_range: [min, max) seconds to scan a single item

    Returns:
        Function that takes (customer_id, arrival_time) and returns a Customer
        whose service duration is fixed at creation
    """
    items = uniform_int_distribution(draws, *item_range)
    payment = uniform_int_distribution(draws, *payment_range)
    scan_time = uniform_int_distribution(draws, *scan_range)

    def generate(customer_id: int, arrival_time: int) -> Customer:
        item_count = items()
        payment_duration = payment()
        return Customer(
            customer_id=customer_id,
            arrival_time=arrival_time,
            item_count=item_count,
            payment_duration=payment_duration,
            service_duration=service_duration(item_count, payment_duration, scan_time),
        )

    return generate
