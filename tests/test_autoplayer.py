from __future__ import annotations

import asyncio
import io

from rich.console import Console

from simonsays.core.fsm import Status
from simonsays.core.schemas import validate_settings
from simonsays.services.autoplayer import AutoPlayer
from simonsays.services.narrator import GameNarrator

from conftest import FakeSleep


def test_perfect_player_wins_every_round():
    settings = validate_settings(pacing_interval=200, seed=11)
    key_sleep = FakeSleep()
    player = AutoPlayer(settings, sleep=FakeSleep(), key_sleep=key_sleep)

    result = asyncio.run(player.play(4))

    assert result.final_status is Status.VICTORY
    assert result.rounds_won == 4
    assert [len(r.sequence) for r in result.rounds] == [1, 2, 3, 4]
    for record in result.rounds:
        assert record.guesses == record.sequence
    # One key press per guess, each held for nine tenths of the pacing interval.
    assert key_sleep.calls == [0.18] * 10


def test_player_heard_whole_sequence_each_round():
    settings = validate_settings(seed=5)
    player = AutoPlayer(settings, sleep=FakeSleep(), key_sleep=FakeSleep())

    async def scenario():
        for _ in range(3):
            await player.play_round()
            assert player.heard == list(player.session.sequence)

    asyncio.run(scenario())


def test_mistake_ends_the_game():
    settings = validate_settings(seed=21)
    player = AutoPlayer(settings, mistake_at=3, sleep=FakeSleep(), key_sleep=FakeSleep())

    result = asyncio.run(player.play(10))

    assert result.final_status is Status.DEFEAT
    assert len(result.rounds) == 3
    assert result.rounds_won == 2
    last = result.rounds[-1]
    assert last.status == "defeat"
    assert last.guesses[:-1] == last.sequence[:-1]
    assert last.guesses[-1] != last.sequence[-1]


def test_mistake_in_single_value_range():
    settings = validate_settings({"number_range": {"min": 3, "max": 3}})
    player = AutoPlayer(settings, mistake_at=1, sleep=FakeSleep(), key_sleep=FakeSleep())

    result = asyncio.run(player.play(2))

    assert result.final_status is Status.DEFEAT
    assert result.rounds[0].guesses == [4]


def test_result_serializes_to_camel_case():
    settings = validate_settings(seed=2)
    player = AutoPlayer(settings, sleep=FakeSleep(), key_sleep=FakeSleep())
    data = asyncio.run(player.play(2)).to_dict()

    assert data["finalStatus"] == "victory"
    assert data["roundsWon"] == 2
    assert [r["round"] for r in data["rounds"]] == [1, 2]


def test_narrator_receives_notifications():
    buffer = io.StringIO()
    narrator = GameNarrator(Console(file=buffer, force_terminal=False, width=80))
    settings = validate_settings({"number_range": {"min": 7, "max": 7}})
    player = AutoPlayer(settings, sleep=FakeSleep(), key_sleep=FakeSleep(), narrator=narrator)

    asyncio.run(player.play(2))

    text = buffer.getvalue()
    assert "ROUND 1" in text
    assert "ROUND 2" in text
    assert "Simon says 7" in text
    assert "Your turn" in text
