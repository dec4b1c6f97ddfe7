"""Kernel time – Timer port used for debouncing.

The debouncer never sleeps; it asks a :class:`Timer` to call it back later
and keeps the returned handle so it can cancel a pending emission.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    """Port: schedule a callback after *delay* seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioTimer:
    """Schedules callbacks on the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = ["AsyncioTimer", "Timer", "TimerHandle"]
