"""Seeded randomness helpers for deterministic games."""

import random
from typing import Optional


def build_rng(*, seed: int | None = None) -> random.Random:
    """Return a deterministic random generator."""
    return random.Random(seed)


class RandomIntegerError(ValueError):
    """Raised when random integer bounds are unusable."""


class RandomInteger:
    """Generate random integers within fixed inclusive bounds.

    Args:
        min_value: Lowest value that can be generated
        max_value: Highest value that can be generated
        rng: Random number generator (a fresh unseeded one by default)

    Raises:
        RandomIntegerError: If a bound is not an integer or min exceeds max
    """

    def __init__(self, min_value: int, max_value: int, *, rng: Optional[random.Random] = None) -> None:
        _check_bounds(min_value, max_value)
        self.min_value = min_value
        self.max_value = max_value
        self._rng = rng or build_rng()

    def generate(self) -> int:
        """Return one uniformly distributed integer within the bounds."""
        return self._rng.randint(self.min_value, self.max_value)


def is_integer(value: object) -> bool:
    """Return True for real integers; booleans do not count."""
    return isinstance(value, int) and not isinstance(value, bool)


def _check_bounds(min_value: object, max_value: object) -> None:
    if not all(is_integer(n) for n in (min_value, max_value)):
        raise RandomIntegerError("Min and max values must be integers")
    if min_value > max_value:  # type: ignore[operator]
        raise RandomIntegerError("Min value must not exceed max value")
