from __future__ import annotations

import asyncio
import random
from typing import Any, List, Tuple

import pytest

from simonsays.core.fsm import Handlers, Status


class FakeSleep:
    """Records requested delays and yields to the loop without waiting."""

    def __init__(self, log: List[Tuple[str, Any]] | None = None) -> None:
        self.calls: List[float] = []
        self.log = log if log is not None else []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.log.append(("sleep", seconds))
        await asyncio.sleep(0)


class ManualSleep:
    """Delay primitive that only resumes when the test calls :meth:`tick`."""

    def __init__(self) -> None:
        self.pending: List[asyncio.Future] = []
        self.requested: List[float] = []

    async def __call__(self, seconds: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self.requested.append(seconds)
        self.pending.append(future)
        await future

    async def tick(self) -> None:
        if not self.pending:
            await self.settle()
        future = self.pending.pop(0)
        if not future.done():
            future.set_result(None)
        for _ in range(3):
            await asyncio.sleep(0)

    async def settle(self) -> None:
        for _ in range(3):
            await asyncio.sleep(0)


class ScriptedRandom(random.Random):
    """Random source whose ``randint`` returns scripted values in order."""

    def __init__(self, values: List[int]) -> None:
        super().__init__(0)
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        return self.values.pop(0)


class Recorder:
    """Collects every notification a session fires, in order."""

    def __init__(self, log: List[Tuple[str, Any]] | None = None) -> None:
        self.log = log if log is not None else []
        self.announced: List[int] = []
        self.rounds: List[Tuple[int, int]] = []
        self.statuses: List[Tuple[Status, Status]] = []

    def announce(self, number: int) -> None:
        self.announced.append(number)
        self.log.append(("announce", number))

    def round_change(self, new: int, old: int) -> None:
        self.rounds.append((new, old))
        self.log.append(("round", new))

    def status_change(self, new: Status, old: Status) -> None:
        self.statuses.append((new, old))
        self.log.append(("status", new.value))

    def handlers(self) -> Handlers:
        return Handlers(
            on_announce_number=self.announce,
            on_round_change=self.round_change,
            on_status_change=self.status_change,
        )


@pytest.fixture()
def event_log() -> List[Tuple[str, Any]]:
    return []


@pytest.fixture()
def fake_sleep(event_log) -> FakeSleep:
    return FakeSleep(event_log)


@pytest.fixture()
def manual_sleep() -> ManualSleep:
    return ManualSleep()


@pytest.fixture()
def recorder(event_log) -> Recorder:
    return Recorder(event_log)
