from __future__ import annotations

import asyncio

import pytest

from simonsays.core.scheduler import AnnouncementScheduler


def test_announces_in_order_with_a_delay_before_each(fake_sleep, event_log):
    completed = []

    async def scenario():
        scheduler = AnnouncementScheduler(0.5, sleep=fake_sleep)
        task = scheduler.start([4, 7, 1], lambda n: event_log.append(("announce", n)), lambda: completed.append(True))
        await task
        assert not scheduler.pending

    asyncio.run(scenario())

    assert event_log == [
        ("sleep", 0.5),
        ("announce", 4),
        ("sleep", 0.5),
        ("announce", 7),
        ("sleep", 0.5),
        ("announce", 1),
        ("sleep", 0.5),
    ]
    assert completed == [True]


def test_nothing_is_delivered_before_the_first_delay_elapses(manual_sleep):
    announced = []
    completed = []

    async def scenario():
        scheduler = AnnouncementScheduler(1.0, sleep=manual_sleep)
        scheduler.start([2, 3], announced.append, lambda: completed.append(True))
        await manual_sleep.settle()
        assert announced == []

        await manual_sleep.tick()
        assert announced == [2]

        await manual_sleep.tick()
        assert announced == [2, 3]
        assert completed == []

        await manual_sleep.tick()
        assert completed == [True]
        assert manual_sleep.requested == [1.0, 1.0, 1.0]

    asyncio.run(scenario())


def test_cancel_stops_pending_delivery(manual_sleep):
    announced = []
    completed = []

    async def scenario():
        scheduler = AnnouncementScheduler(1.0, sleep=manual_sleep)
        task = scheduler.start([5, 6, 7], announced.append, lambda: completed.append(True))
        await manual_sleep.tick()
        assert announced == [5]

        scheduler.cancel()
        await manual_sleep.settle()
        assert task.cancelled()
        assert not scheduler.pending
        assert scheduler.task is None

    asyncio.run(scenario())

    assert announced == [5]
    assert completed == []


def test_only_one_announcement_at_a_time(manual_sleep):
    async def scenario():
        scheduler = AnnouncementScheduler(1.0, sleep=manual_sleep)
        scheduler.start([1], lambda n: None, lambda: None)
        with pytest.raises(RuntimeError):
            scheduler.start([1], lambda n: None, lambda: None)
        scheduler.cancel()

    asyncio.run(scenario())


def test_completion_callback_can_start_the_next_announcement(fake_sleep):
    announced = []

    async def scenario():
        scheduler = AnnouncementScheduler(0.1, sleep=fake_sleep)
        follow_ups = []

        def restart():
            if not follow_ups:
                follow_ups.append(scheduler.start([2, 7], announced.append, lambda: None))

        first = scheduler.start([2], announced.append, restart)
        await first
        assert scheduler.task is follow_ups[0]
        await scheduler.task
        assert not scheduler.pending

    asyncio.run(scenario())
    assert announced == [2, 2, 7]


def test_listener_errors_propagate_through_the_task(fake_sleep):
    def explode(n):
        raise ValueError(f"bad {n}")

    async def scenario():
        scheduler = AnnouncementScheduler(0.1, sleep=fake_sleep)
        task = scheduler.start([3], explode, lambda: None)
        with pytest.raises(ValueError, match="bad 3"):
            await task

    asyncio.run(scenario())


def test_start_requires_a_running_loop():
    scheduler = AnnouncementScheduler(0.1)
    with pytest.raises(RuntimeError):
        scheduler.start([1], lambda n: None, lambda: None)
