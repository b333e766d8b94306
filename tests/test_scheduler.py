# Area: Session Tests
"""Tests for DeferredActionScheduler — cancellable delayed actions keyed by session."""

import asyncio
from unittest.mock import AsyncMock

from dilemma_client._session.scheduler import DeferredActionScheduler


class TestDeferredActionScheduler:
    """Unit tests for DeferredActionScheduler."""

    def test_nothing_pending_initially(self):
        scheduler = DeferredActionScheduler()
        assert scheduler.pending_keys() == []
        assert scheduler.is_pending("s1") is False

    def test_action_runs_after_delay(self):
        action = AsyncMock()

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0.01, action)
            assert scheduler.is_pending("s1") is True
            action.assert_not_awaited()
            await scheduler.drain()
            return scheduler

        scheduler = asyncio.run(scenario())
        action.assert_awaited_once()
        assert scheduler.is_pending("s1") is False

    def test_cancel_prevents_action(self):
        action = AsyncMock()

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0.01, action)
            scheduler.cancel("s1")
            await scheduler.drain()
            return scheduler

        scheduler = asyncio.run(scenario())
        action.assert_not_awaited()
        assert scheduler.pending_keys() == []

    def test_cancel_unknown_key_is_noop(self):
        scheduler = DeferredActionScheduler()
        scheduler.cancel("nope")
        assert scheduler.pending_keys() == []

    def test_reschedule_replaces_previous(self):
        first, second = AsyncMock(), AsyncMock()

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0.01, first)
            scheduler.schedule("s1", 0.01, second)
            assert scheduler.pending_keys() == ["s1"]
            await scheduler.drain()

        asyncio.run(scenario())
        first.assert_not_awaited()
        second.assert_awaited_once()

    def test_keys_are_independent(self):
        a, b = AsyncMock(), AsyncMock()

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0.01, a)
            scheduler.schedule("s2", 0.01, b)
            scheduler.cancel("s1")
            await scheduler.drain()

        asyncio.run(scenario())
        a.assert_not_awaited()
        b.assert_awaited_once()

    def test_failing_action_is_logged_not_raised(self):
        action = AsyncMock(side_effect=RuntimeError("boom"))

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0, action)
            await scheduler.drain()

        asyncio.run(scenario())
        action.assert_awaited_once()

    def test_drain_waits_for_running_action(self):
        finished = []

        async def slow_action():
            await asyncio.sleep(0.01)
            finished.append(True)

        async def scenario():
            scheduler = DeferredActionScheduler()
            scheduler.schedule("s1", 0, slow_action)
            await asyncio.sleep(0.001)
            await scheduler.drain()

        asyncio.run(scenario())
        assert finished == [True]
