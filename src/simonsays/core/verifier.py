"""Incremental verification of replayed guesses."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class GuessOutcome(str, Enum):
    """Result of submitting a single guess."""

    CONTINUE = "continue"
    COMPLETE = "complete"
    INCORRECT = "incorrect"


class VerifierExhaustedError(RuntimeError):
    """Raised when a guess is submitted after every position was consumed."""


class GuessVerifier:
    """Compare guesses against a sequence one position at a time.

    A verifier is single-use: it is created when listening begins and the
    cursor moves forward by one on every submission, right or wrong.
    """

    def __init__(self, sequence: Sequence[int]) -> None:
        self._sequence = sequence
        self.cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._sequence) - self.cursor

    def submit(self, guess: int) -> GuessOutcome:
        if self.cursor >= len(self._sequence):
            raise VerifierExhaustedError(
                f"All {len(self._sequence)} positions have already been checked"
            )

        expected = self._sequence[self.cursor]
        self.cursor += 1

        if guess != expected:
            return GuessOutcome.INCORRECT
        if self.cursor == len(self._sequence):
            return GuessOutcome.COMPLETE
        return GuessOutcome.CONTINUE
