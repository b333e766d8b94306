# Area: Session
"""
dilemma_client._session.scheduler — Deferred action scheduling
===============================================================

Runs an async action after a fixed delay, keyed by session id. Used for
the pause between the final round and the summary fetch. A rematch or a
navigation away during the delay cancels the pending action instead of
racing it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Set

logger = logging.getLogger("dilemma_client.session.scheduler")

DeferredAction = Callable[[], Awaitable[None]]


class DeferredActionScheduler:
    """
    Tracks pending deferred actions keyed by session id.

    Each key holds at most one pending action; scheduling again for the
    same key replaces (cancels) the previous one. Must be used from
    within a running event loop.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, asyncio.Task] = {}
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, key: str, delay_seconds: float, action: DeferredAction) -> None:
        """Schedule (or reschedule) ``action`` to run after ``delay_seconds``."""
        self.cancel(key)
        task = asyncio.get_running_loop().create_task(
            self._run_later(key, delay_seconds, action)
        )
        self._pending[key] = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Deferred action scheduled for %s (%.2fs)", key, delay_seconds)

    async def _run_later(self, key: str, delay_seconds: float, action: DeferredAction) -> None:
        try:
            await asyncio.sleep(delay_seconds)
            # Dropped from tracking before the action runs so it can reschedule itself
            if self._pending.get(key) is asyncio.current_task():
                del self._pending[key]
            await action()
        except asyncio.CancelledError:
            logger.debug("Deferred action for %s cancelled", key)
            raise
        except Exception as e:
            logger.error(f"Deferred action for {key} failed: {e}", exc_info=True)

    def is_pending(self, key: str) -> bool:
        task = self._pending.get(key)
        return task is not None and not task.done()

    def cancel(self, key: str) -> None:
        """Cancel the pending action for ``key``. No-op if none."""
        task = self._pending.pop(key, None)
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Deferred action cancelled for %s", key)

    def pending_keys(self) -> List[str]:
        return [key for key, task in self._pending.items() if not task.done()]

    async def drain(self) -> None:
        """Wait until every scheduled action has run or been cancelled."""
        while True:
            tasks = [task for task in self._tasks if not task.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
