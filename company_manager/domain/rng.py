"""Seedable random source shared by the contract and employee rules.

Every draw the game makes goes through ``RandomProvider`` so a fixed seed
replays a whole run. ``spawn`` hands out an independent child stream; the
service layer takes one per request so turns on different sessions never
read from the same stream.
"""

from typing import Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")


class InvalidRangeError(ValueError):
    """Raised when a draw is requested over an empty or malformed range."""


class RandomProvider:
    def __init__(self, seed: int | None = None, *, seed_sequence: np.random.SeedSequence | None = None):
        self.seed_sequence = seed_sequence if seed_sequence is not None else np.random.SeedSequence(seed)
        self.generator = np.random.default_rng(self.seed_sequence)

    def spawn(self) -> "RandomProvider":
        """Return a provider drawing from an independent child stream"""
        child = self.seed_sequence.spawn(1)[0]
        return RandomProvider(seed_sequence=child)

    def uniform_int(self, low: int, high: int) -> int:
        """Draw an integer from [low, high] (both ends inclusive)

        Raises:
            InvalidRangeError: low is greater than high
        """
        if low > high:
            raise InvalidRangeError(f"invalid inclusive range [{low}, {high}]")
        return int(self.generator.integers(low, high, endpoint=True))

    def uniform_long(self, low: int, high: int) -> int:
        """Draw an integer from [low, high) (high exclusive)

        Raises:
            InvalidRangeError: the range is empty
        """
        if low >= high:
            raise InvalidRangeError(f"invalid exclusive range [{low}, {high})")
        return int(self.generator.integers(low, high))

    def pick(self, alternatives: Sequence[Tuple[T, int]]) -> T:
        """Pick one value from (value, weight) pairs.

        One draw over 1..sum(weights) is compared against the cumulative
        thresholds, so weights 50/30/20 behave like a 1-100 roll.

        Raises:
            InvalidRangeError: no alternatives, or a weight is not positive
        """
        if not alternatives:
            raise InvalidRangeError("cannot pick from an empty list")
        if any(weight <= 0 for _, weight in alternatives):
            raise InvalidRangeError("weights must be positive")

        draw = self.uniform_int(1, sum(weight for _, weight in alternatives))
        cumulative = 0
        for value, weight in alternatives:
            cumulative += weight
            if draw <= cumulative:
                return value
        return alternatives[-1][0]

    def choice(self, values: Sequence[T]) -> T:
        return values[self.uniform_long(0, len(values))]
