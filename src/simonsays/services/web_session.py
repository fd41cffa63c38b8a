"""Session registry backing the Simon Says web API."""

from __future__ import annotations

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from ..core.fsm import GameSession, Handlers, Status
from ..core.scheduler import SleepFunc
from ..core.schemas import CheckAnswer, GameSettings

LOGGER = structlog.get_logger(__name__)

DEFAULT_IDLE_TIMEOUT = 60 * 60.0


@dataclass(slots=True)
class StatusEvent:
    """A status transition observed by a web session."""

    status: str
    previous: str
    at: float = field(default_factory=time.time)


class WebGameSession:
    """A :class:`GameSession` that records notifications for polling clients."""

    def __init__(
        self,
        settings: GameSettings,
        *,
        session_id: Optional[str] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.created_at = time.time()
        self.last_active = self.created_at
        self.announced: List[int] = []
        self.events: List[StatusEvent] = []
        self.game = GameSession(
            settings,
            handlers=Handlers(
                on_announce_number=self._on_announce,
                on_round_change=self._on_round_change,
                on_status_change=self._on_status_change,
            ),
            sleep=sleep,
        )

    # ------------------------------------------------------------------
    # Notification recording
    # ------------------------------------------------------------------

    def _on_announce(self, number: int) -> None:
        self.announced.append(number)

    def _on_round_change(self, new_round: int, old_round: int) -> None:
        self.announced = []

    def _on_status_change(self, new_status: Status, old_status: Status) -> None:
        self.events.append(StatusEvent(status=new_status.value, previous=old_status.value))

    # ------------------------------------------------------------------
    # Game operations
    # ------------------------------------------------------------------

    def touch(self) -> None:
        self.last_active = time.time()

    def run(self) -> None:
        self.game.run()

    def check(self, guess: int) -> Optional[CheckAnswer]:
        return self.game.check(guess)

    def reset(self) -> None:
        self.game.reset()
        self.announced = []

    def status(self) -> Dict[str, Any]:
        snapshot = self.game.snapshot(reveal_sequence=False)
        snapshot.update(
            {
                "sessionId": self.session_id,
                "announced": list(self.announced),
                "events": [
                    {"status": event.status, "previous": event.previous, "at": event.at}
                    for event in self.events[-20:]
                ],
            }
        )
        return snapshot


class SessionManager:
    """Registry for multiple independent :class:`WebGameSession` instances.

    Sessions untouched for ``idle_timeout`` seconds are reset and dropped the
    next time a session is created or :meth:`expire_idle` runs.
    """

    def __init__(self, *, idle_timeout: Optional[float] = DEFAULT_IDLE_TIMEOUT) -> None:
        self.idle_timeout = idle_timeout
        self._sessions: Dict[str, WebGameSession] = {}
        self._lock = asyncio.Lock()

    async def create_session(self, settings: GameSettings, **kwargs: Any) -> WebGameSession:
        await self.expire_idle()
        session = WebGameSession(settings, **kwargs)
        async with self._lock:
            self._sessions[session.session_id] = session
        LOGGER.info("web_session.created", session_id=session.session_id)
        return session

    async def get(self, session_id: str) -> WebGameSession:
        async with self._lock:
            if session_id not in self._sessions:
                raise KeyError(f"Unknown session {session_id}")
            session = self._sessions[session_id]
            session.touch()
            return session

    async def list_sessions(self) -> List[WebGameSession]:
        async with self._lock:
            return list(self._sessions.values())

    async def expire_idle(self, now: Optional[float] = None) -> List[str]:
        """Drop sessions idle for longer than ``idle_timeout``; returns their ids."""

        if self.idle_timeout is None:
            return []
        now = time.time() if now is None else now
        async with self._lock:
            expired = [
                session
                for session in self._sessions.values()
                if now - session.last_active > self.idle_timeout
            ]
            for session in expired:
                del self._sessions[session.session_id]
        for session in expired:
            session.reset()
            LOGGER.info("web_session.expired", session_id=session.session_id)
        return [session.session_id for session in expired]

    async def stop(self, session_id: str) -> None:
        async with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Unknown session {session_id}")
        session.reset()
        LOGGER.info("web_session.stopped", session_id=session_id)


SESSION_MANAGER = SessionManager()
