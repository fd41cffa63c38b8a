"""Pydantic contracts for game configuration and guess results."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, model_validator

from .constants import DEFAULT_NUMBER_RANGE, DEFAULT_PACING_MS
from .ranges import ConfigurationError, IntegerRange
from .verifier import GuessOutcome


class NumberRange(BaseModel):
    """Inclusive bounds for the secrets of a game."""

    model_config = ConfigDict(frozen=True)

    min: StrictInt
    max: StrictInt

    @model_validator(mode="after")
    def check_order(self) -> "NumberRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    def to_domain(self) -> IntegerRange:
        return IntegerRange(self.min, self.max)


class GameSettings(BaseModel):
    """Immutable settings for one game session."""

    model_config = ConfigDict(frozen=True)

    number_range: NumberRange = Field(default_factory=lambda: NumberRange(**DEFAULT_NUMBER_RANGE))
    pacing_interval: StrictInt = Field(
        DEFAULT_PACING_MS,
        gt=0,
        description="Milliseconds between announcements and before listening begins",
    )
    seed: Optional[int] = Field(None, description="Seed for a deterministic secret sequence")

    @property
    def pacing_seconds(self) -> float:
        return self.pacing_interval / 1000


class CheckAnswer(BaseModel):
    """Answer to a single guess made while listening."""

    model_config = ConfigDict(frozen=True)

    is_right: bool
    is_victory: bool
    is_defeat: bool

    @classmethod
    def from_outcome(cls, outcome: GuessOutcome) -> "CheckAnswer":
        return cls(
            is_right=outcome is not GuessOutcome.INCORRECT,
            is_victory=outcome is GuessOutcome.COMPLETE,
            is_defeat=outcome is GuessOutcome.INCORRECT,
        )


def validate_settings(data: Optional[Dict[str, Any]] = None, **overrides: Any) -> GameSettings:
    """Build :class:`GameSettings` or raise :class:`ConfigurationError`."""
    payload = dict(data or {})
    payload.update(overrides)
    try:
        return GameSettings(**payload)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid game settings: {e.errors()}", e.errors()) from e
