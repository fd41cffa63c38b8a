"""Default game constants."""

from __future__ import annotations

from typing import Dict

DEFAULT_PACING_MS = 1000

DEFAULT_NUMBER_RANGE: Dict[str, int] = {"min": 0, "max": 9}


def key_duration_ms(pacing_interval: int) -> float:
    """Return how long an announced key stays highlighted for a pacing interval."""

    return (pacing_interval / 10) * 9
