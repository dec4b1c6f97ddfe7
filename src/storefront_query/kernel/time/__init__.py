"""Kernel time – Clock and Timer ports + implementations."""
from storefront_query.kernel.time.clock import Clock, FrozenClock, SystemClock
from storefront_query.kernel.time.timer import AsyncioTimer, Timer, TimerHandle

__all__ = ["AsyncioTimer", "Clock", "FrozenClock", "SystemClock", "Timer", "TimerHandle"]
