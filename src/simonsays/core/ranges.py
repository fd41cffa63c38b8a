"""Inclusive integer ranges used as the domain of game secrets."""

from __future__ import annotations

import random
from typing import Iterator, Optional, Tuple

from ..utils.rng import RandomInteger, build_rng, is_integer


class ConfigurationError(ValueError):
    """Raised when a game is configured with unusable settings."""

    def __init__(self, message: str, errors: Optional[list] = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidRangeError(ConfigurationError):
    """Raised when range bounds are not integers or are inverted."""


class IntegerRange:
    """Inclusive range of integers ``[min, max]``.

    Bounds are validated once on construction; sampling never rechecks them.

    >>> digits = IntegerRange(0, 9)
    >>> digits.includes(9), digits.includes(10)
    (True, False)
    >>> 3 in digits
    True
    >>> list(IntegerRange(2, 4))
    [2, 3, 4]
    >>> list(IntegerRange(5, 6).enumerate_values())
    [(5, 0), (6, 1)]
    >>> len(IntegerRange(-1, 1))
    3
    """

    __slots__ = ("min", "max")

    def __init__(self, min: int, max: int) -> None:
        if not is_valid_range(min, max):
            raise InvalidRangeError(f"Invalid integer range: min={min!r} max={max!r}")
        self.min = min
        self.max = max

    def includes(self, n: int) -> bool:
        return self.min <= n <= self.max

    def enumerate_values(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(value, index)`` pairs from min to max in ascending order."""
        for index, value in enumerate(range(self.min, self.max + 1)):
            yield value, index

    def random(self, rng: Optional[random.Random] = None) -> int:
        """Return a uniformly distributed value from the range."""
        return RandomInteger(self.min, self.max, rng=rng or _DEFAULT_RNG).generate()

    def __contains__(self, n: object) -> bool:
        return is_integer(n) and self.includes(n)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.min, self.max + 1))

    def __len__(self) -> int:
        return self.max - self.min + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegerRange):
            return NotImplemented
        return (self.min, self.max) == (other.min, other.max)

    def __hash__(self) -> int:
        return hash((self.min, self.max))

    def __repr__(self) -> str:
        return f"IntegerRange(min={self.min}, max={self.max})"


def is_valid_range(min: object, max: object) -> bool:
    """Return True when both bounds are integers and ``min <= max``.

    >>> is_valid_range(0, 9)
    True
    >>> is_valid_range(3, 3)
    True
    >>> is_valid_range(9, 0)
    False
    >>> is_valid_range(0.5, 9)
    False
    >>> is_valid_range(True, 9)
    False
    """
    return is_integer(min) and is_integer(max) and min <= max  # type: ignore[operator]


_DEFAULT_RNG = build_rng()


# Doctests
def _test_sampling():
    """
    Seeded sampling stays inside the range.

    >>> rng = build_rng(seed=7)
    >>> domain = IntegerRange(0, 3)
    >>> all(domain.includes(domain.random(rng)) for _ in range(200))
    True
    >>> IntegerRange(4, 4).random(rng)
    4
    """
    pass


if __name__ == "__main__":
    import doctest
    doctest.testmod()
