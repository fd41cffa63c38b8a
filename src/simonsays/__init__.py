"""Simon Says memory game engine."""

from .core import constants, fsm, ranges, scheduler, schemas, sequence, verifier
from .core.fsm import GameSession, Handlers, Status
from .core.ranges import ConfigurationError, IntegerRange, InvalidRangeError
from .core.schemas import CheckAnswer, GameSettings, NumberRange
from .core.verifier import GuessOutcome, GuessVerifier

__all__ = [
    "constants",
    "fsm",
    "ranges",
    "scheduler",
    "schemas",
    "sequence",
    "verifier",
    "CheckAnswer",
    "ConfigurationError",
    "GameSession",
    "GameSettings",
    "GuessOutcome",
    "GuessVerifier",
    "Handlers",
    "IntegerRange",
    "InvalidRangeError",
    "NumberRange",
    "Status",
]
