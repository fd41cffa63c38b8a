"""Self-playing driver used by the ``simulate`` command."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from ..core.constants import key_duration_ms
from ..core.fsm import GameSession, Handlers, Status
from ..core.scheduler import SleepFunc
from ..core.schemas import GameSettings
from .narrator import GameNarrator

LOGGER = structlog.get_logger(__name__)


@dataclass(slots=True)
class RoundRecord:
    """Outcome of a single simulated round."""

    round: int
    sequence: List[int]
    guesses: List[int] = field(default_factory=list)
    status: str = Status.SPEAKING.value


@dataclass(slots=True)
class SimulationResult:
    """All rounds played by :class:`AutoPlayer`."""

    rounds: List[RoundRecord] = field(default_factory=list)
    final_status: Status = Status.INITIAL

    @property
    def rounds_won(self) -> int:
        return sum(1 for record in self.rounds if record.status == Status.VICTORY.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "finalStatus": self.final_status.value,
            "roundsWon": self.rounds_won,
            "rounds": [
                {
                    "round": record.round,
                    "sequence": record.sequence,
                    "guesses": record.guesses,
                    "status": record.status,
                }
                for record in self.rounds
            ],
        }


class AutoPlayer:
    """Plays a :class:`GameSession` by replaying what it heard.

    Args:
        settings: Game settings for the session
        mistake_at: Round in which the last guess is deliberately wrong
        sleep: Delay primitive for the session's announcement pacing
        key_sleep: Delay primitive used between simulated key presses
        narrator: Optional narrator receiving the session notifications
    """

    def __init__(
        self,
        settings: GameSettings,
        *,
        mistake_at: Optional[int] = None,
        sleep: Optional[SleepFunc] = None,
        key_sleep: Optional[SleepFunc] = None,
        narrator: Optional[GameNarrator] = None,
    ) -> None:
        self.settings = settings
        self.mistake_at = mistake_at
        self.narrator = narrator
        self.heard: List[int] = []
        self._key_sleep: SleepFunc = key_sleep or asyncio.sleep
        self._key_seconds = key_duration_ms(settings.pacing_interval) / 1000

        handlers = Handlers(
            on_announce_number=self._hear,
            on_round_change=narrator.round_change if narrator else None,
            on_status_change=narrator.status_change if narrator else None,
        )
        self.session = GameSession(settings, handlers=handlers, sleep=sleep)

    def _hear(self, number: int) -> None:
        self.heard.append(number)
        if self.narrator is not None:
            self.narrator.announce(number)

    def _wrong_guess(self, expected: int) -> int:
        domain = self.session.domain
        if len(domain) == 1:
            return expected + 1
        return expected + 1 if expected < domain.max else domain.min

    async def play_round(self) -> RoundRecord:
        """Run one round and replay the announced numbers."""

        self.heard = []
        self.session.run()
        await self.session.wait_until_listening()

        record = RoundRecord(round=self.session.round, sequence=list(self.session.sequence))
        blunder = self.mistake_at is not None and self.session.round == self.mistake_at
        last = len(self.heard) - 1

        for position, value in enumerate(self.heard):
            guess = self._wrong_guess(value) if blunder and position == last else value
            await self._key_sleep(self._key_seconds)
            answer = self.session.check(guess)
            record.guesses.append(guess)
            if self.narrator is not None and answer is not None:
                self.narrator.guess(guess, answer)
            if answer is None or not answer.is_right:
                break

        record.status = self.session.status.value
        LOGGER.info("autoplayer.round", round=record.round, status=record.status, length=len(record.sequence))
        return record

    async def play(self, rounds: int) -> SimulationResult:
        """Play up to ``rounds`` rounds, stopping at the first defeat."""

        result = SimulationResult()
        for _ in range(rounds):
            record = await self.play_round()
            result.rounds.append(record)
            if self.session.is_status(Status.DEFEAT):
                break
        result.final_status = self.session.status
        return result
