"""Trailing-edge debouncer for consumers of the realtime layer.

The realtime layer delivers every event. A consumer that redraws
something expensive wraps its handler in a Debouncer so a burst of
events causes a single refresh.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

DASHBOARD_REFRESH_DELAY = 1.0


class Debouncer(Generic[T]):

    def __init__(self, action: Callable[[T], Any], delay: float = DASHBOARD_REFRESH_DELAY) -> None:
        self._action = action
        self._delay = delay
        self._timer: asyncio.TimerHandle | None = None
        self._latest: T | None = None
        self._tasks: set[asyncio.Task] = set()
        self.fired = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self, value: T) -> None:
        """Restart the timer; the action later runs once with the latest value."""
        self._latest = value
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self.fired += 1
        result = self._action(self._latest)  # type: ignore[arg-type]
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
