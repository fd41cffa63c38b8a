"""Append-only storage for the secrets of the current game."""

from __future__ import annotations

from typing import Iterator, List, Tuple


class SequenceStore:
    """Ordered list of round secrets.

    Secrets are only ever appended during a game; :meth:`clear` empties the
    store when a game is reset or restarted after a defeat.
    """

    def __init__(self) -> None:
        self._values: List[int] = []

    def append(self, value: int) -> None:
        self._values.append(value)

    def clear(self) -> None:
        self._values = []

    def as_tuple(self) -> Tuple[int, ...]:
        """Return an immutable copy of the stored secrets."""
        return tuple(self._values)

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SequenceStore({self._values!r})"
