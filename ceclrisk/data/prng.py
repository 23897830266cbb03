"""
Seeded linear-congruential generator.

Every generator owns one instance seeded with its own constant, so the same
seed and call sequence always reproduce the same synthetic dataset.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar('T')

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRandom:
    """
    LCG with state = (state * 9301 + 49297) mod 233280.

    Draws are state / 233280, i.e. in [0, 1).
    """

    def __init__(self, seed: int = 42):
        self.state = seed

    def seed(self, seed: int) -> None:
        self.state = seed

    def next(self) -> float:
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS

    def between(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)

    def integer(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive"""
        return math.floor(self.between(low, high + 1))

    def weighted_pick(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """
        Cumulative draw over raw (unnormalised) weights.

        The draw is scaled by the total weight and each weight is subtracted
        in order; the first item that takes the remainder to <= 0 wins.
        """
        remaining = self.next() * sum(weights)
        for item, weight in zip(items, weights):
            remaining -= weight
            if remaining <= 0:
                return item
        return items[-1]

    def pick(self, items: Sequence[T]) -> T:
        return items[math.floor(self.next() * len(items))]
