"""
Deferred tasks for the auto-advance timer.

The session controller never touches a clock directly: it asks a
TaskScheduler to run a callback later and keeps the returned handle so it
can cancel it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class DeferredTask(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


class TaskScheduler(Protocol):
    """Source of deferred tasks."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> DeferredTask:
        """Run `callback` after `delay` seconds."""
        ...


class AsyncioTaskScheduler:
    """Schedules callbacks on an asyncio event loop (loop.call_later)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)
