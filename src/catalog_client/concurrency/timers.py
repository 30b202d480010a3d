"""
Cancellable timers and a keyed debouncer on top of asyncio.

Scheduling a key cancels the timer previously registered under that key, so
within a burst only the last pending timer ever fires. A cancelled timer never
runs its callback; a timer whose callback has already started is left to
finish.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Union

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Union[None, Awaitable[Any]]]


class CancellableTimer:
    def __init__(self, delay: float, callback: TimerCallback, *, name: Optional[str] = None):
        self.delay = max(0.0, float(delay))
        self.callback = callback
        self.name = name
        self._fired = False
        self._cancelled = False
        self._task: asyncio.Task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        if self._cancelled:
            return
        self._fired = True
        result = self.callback()
        if inspect.isawaitable(result):
            await result

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        return not self._fired and not self._cancelled

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> bool:
        """Cancel if the callback has not started yet; returns True on success."""
        if self._fired or self._cancelled:
            return False
        self._cancelled = True
        self._task.cancel()
        return True

    async def wait(self) -> None:
        """Wait for the timer to fire (and its callback to finish) or be cancelled."""
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._cancelled:
                raise


class Debouncer:
    """Keyed registry of CancellableTimers; one live timer per key."""

    def __init__(self) -> None:
        self._timers: Dict[Hashable, CancellableTimer] = {}

    def schedule(self, key: Hashable, delay: float, callback: TimerCallback) -> CancellableTimer:
        previous = self._timers.get(key)
        if previous is not None and previous.cancel():
            logger.debug("Debounce timer %r restarted", key)
        timer = CancellableTimer(delay, callback, name=str(key))
        self._timers[key] = timer
        return timer

    def cancel(self, key: Hashable) -> bool:
        timer = self._timers.pop(key, None)
        return timer.cancel() if timer is not None else False

    def cancel_all(self) -> None:
        for key in list(self._timers):
            self.cancel(key)

    def pending(self, key: Hashable) -> bool:
        timer = self._timers.get(key)
        return timer is not None and timer.pending

    def timer(self, key: Hashable) -> Optional[CancellableTimer]:
        return self._timers.get(key)

    async def wait(self, key: Hashable) -> None:
        timer = self._timers.get(key)
        if timer is not None:
            await timer.wait()
