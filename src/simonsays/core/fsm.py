"""Finite state machine driving a Simon Says game."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

import structlog

from ..utils.rng import build_rng
from .ranges import ConfigurationError, IntegerRange
from .scheduler import AnnouncementScheduler, SleepFunc
from .schemas import CheckAnswer, GameSettings, validate_settings
from .sequence import SequenceStore
from .verifier import GuessOutcome, GuessVerifier

LOGGER = structlog.get_logger(__name__)


class Status(str, Enum):
    """Game statuses."""

    INITIAL = "initial"
    SPEAKING = "speaking"
    LISTENING = "listening"
    VICTORY = "victory"
    DEFEAT = "defeat"


AnnounceHandler = Callable[[int], Any]
RoundHandler = Callable[[int, int], Any]
StatusHandler = Callable[[Status, Status], Any]


def _noop(*_args: Any) -> None:
    return None


@dataclass(frozen=True)
class Handlers:
    """Notification callbacks invoked by the session.

    ``on_announce_number`` is required; the change handlers default to no-ops.
    """

    on_announce_number: AnnounceHandler
    on_round_change: Optional[RoundHandler] = None
    on_status_change: Optional[StatusHandler] = None

    def __post_init__(self) -> None:
        if not callable(self.on_announce_number):
            raise ConfigurationError("on_announce_number handler must be callable")
        for name in ("on_round_change", "on_status_change"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, _noop)
            elif not callable(value):
                raise ConfigurationError(f"{name} handler must be callable")


class GameSession:
    """Coordinates one game: status, round counter, secrets and guesses.

    ``run`` starts a game or the next round and schedules the announcement on
    the running asyncio loop. ``check`` verifies one guess while listening and
    ``reset`` abandons whatever is in progress.

    Calling ``run`` while the session is speaking or listening is ignored.
    """

    def __init__(
        self,
        settings: Union[GameSettings, Mapping[str, Any], None] = None,
        *,
        handlers: Handlers,
        rng: Optional[random.Random] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        if not isinstance(settings, GameSettings):
            settings = validate_settings(dict(settings or {}))
        if not isinstance(handlers, Handlers):
            raise ConfigurationError("handlers must be a Handlers instance")

        self.settings = settings
        self.handlers = handlers
        self.domain: IntegerRange = settings.number_range.to_domain()
        self.rng = rng or build_rng(seed=settings.seed)

        self._status = Status.INITIAL
        self._round = 0
        self._sequence = SequenceStore()
        self._verifier: Optional[GuessVerifier] = None
        self._scheduler = AnnouncementScheduler(settings.pacing_seconds, sleep=sleep)
        self._log = LOGGER.bind(range=(self.domain.min, self.domain.max))

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def status(self) -> Status:
        return self._status

    @property
    def round(self) -> int:
        return self._round

    @property
    def sequence(self) -> tuple[int, ...]:
        return self._sequence.as_tuple()

    @property
    def cursor(self) -> Optional[int]:
        return self._verifier.cursor if self._verifier is not None else None

    def is_status(self, status: Status) -> bool:
        return self._status is status

    def snapshot(self, *, reveal_sequence: bool = True) -> Dict[str, Any]:
        """Return a plain representation of the session state.

        With ``reveal_sequence`` false the secrets are only included once the
        game is decided.
        """
        reveal = reveal_sequence or self._status in (Status.VICTORY, Status.DEFEAT)
        return {
            "status": self._status.value,
            "round": self._round,
            "sequence": list(self._sequence) if reveal else None,
            "cursor": self.cursor,
            "numberRange": {"min": self.domain.min, "max": self.domain.max},
            "pacingInterval": self.settings.pacing_interval,
        }

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Start a new game or move on to the next round."""

        if self._status in (Status.SPEAKING, Status.LISTENING):
            self._log.warning("session.run_ignored", status=self._status.value, round=self._round)
            return

        # Fail before touching state when there is no loop to announce on.
        asyncio.get_running_loop()

        if self._status is Status.DEFEAT:
            self._reset_round_data()
        self._next_round()
        # Speaking always has a pending announcement, even if a listener raises.
        self._scheduler.start(self._sequence.as_tuple(), self._announce, self._start_listening)
        self._log.info("session.run", round=self._round)
        self._set_status(Status.SPEAKING)

    def check(self, guess: int) -> Optional[CheckAnswer]:
        """Verify one guess; returns ``None`` unless the session is listening."""

        if self._status is not Status.LISTENING or self._verifier is None:
            return None

        outcome = self._verifier.submit(guess)
        answer = CheckAnswer.from_outcome(outcome)

        if outcome is GuessOutcome.COMPLETE:
            self._verifier = None
            self._set_status(Status.VICTORY)
        elif outcome is GuessOutcome.INCORRECT:
            self._verifier = None
            self._set_status(Status.DEFEAT)

        return answer

    def reset(self) -> None:
        """Abandon the current game and return to the initial status."""

        self._scheduler.cancel()
        self._reset_round_data()
        self._set_status(Status.INITIAL)
        self._log.info("session.reset")

    async def wait_until_listening(self) -> None:
        """Wait for the pending announcement to finish.

        Exceptions raised by the announce handler are re-raised here. Returns
        immediately when nothing is pending or when ``reset`` cancelled it.
        """

        task = self._scheduler.task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _set_status(self, status: Status) -> None:
        previous = self._status
        if previous is status:
            return
        self._status = status
        self._log.debug("session.status", status=status.value, previous=previous.value)
        self.handlers.on_status_change(status, previous)

    def _set_round(self, value: int) -> None:
        previous = self._round
        if previous == value:
            return
        self._round = value
        self._log.debug("session.round", round=value, previous=previous)
        self.handlers.on_round_change(value, previous)

    def _reset_round_data(self) -> None:
        self._verifier = None
        self._sequence.clear()
        self._set_round(0)

    def _next_round(self) -> None:
        self._sequence.append(self.domain.random(self.rng))
        self._set_round(self._round + 1)

    def _announce(self, value: int) -> None:
        self.handlers.on_announce_number(value)

    def _start_listening(self) -> None:
        self._verifier = GuessVerifier(self._sequence.as_tuple())
        self._set_status(Status.LISTENING)
