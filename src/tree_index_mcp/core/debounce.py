"""
Per-key debouncing on the asyncio event loop.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Hashable, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 200


class DebounceScheduler:
    """
    Coalesces bursts of schedule() calls for the same key.

    Only the most recently scheduled action of a key runs, once, after the
    key has been quiet for the delay. Keys are independent. Actions may be
    plain callables or coroutine functions; coroutines run as tasks.
    """

    def __init__(self, delay_ms: int = DEFAULT_DELAY_MS):
        self.delay_ms = delay_ms
        self._timers: Dict[Hashable, asyncio.TimerHandle] = {}
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, key: Hashable, action: Callable[[], Any], delay_ms: Optional[int] = None) -> None:
        """Cancel key's pending timer, then arm a new one. Must run inside the loop."""
        loop = asyncio.get_running_loop()
        self.cancel(key)
        delay = (self.delay_ms if delay_ms is None else delay_ms) / 1000.0
        self._timers[key] = loop.call_later(delay, self._fire, key, action)

    def cancel(self, key: Hashable) -> bool:
        """Drop key's pending timer without running it. True if one was pending."""
        handle = self._timers.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug(f"Cancelled pending action for {key}")
        return True

    def is_pending(self, key: Hashable) -> bool:
        return key in self._timers

    def pending_keys(self):
        return list(self._timers)

    def cancel_all(self) -> None:
        for key in list(self._timers):
            self.cancel(key)

    async def drain(self) -> None:
        """Wait for coroutine actions that already fired."""
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.difference_update(tasks)

    def _fire(self, key: Hashable, action: Callable[[], Any]) -> None:
        self._timers.pop(key, None)
        logger.debug(f"Debounce fired for {key}")
        try:
            result = action()
        except Exception:
            logger.exception(f"Debounced action for {key} failed")
            return
        if asyncio.iscoroutine(result):
            task = asyncio.get_running_loop().create_task(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced task failed: {task.exception()}")
