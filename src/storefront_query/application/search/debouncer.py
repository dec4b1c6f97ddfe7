"""Application search – SearchDebouncer.

Raw keystrokes go in through :meth:`SearchDebouncer.push`; the latest value
comes out through ``on_settle`` once no new value has arrived for ``window``
seconds. Superseded values are never emitted. At most one emission is
pending at any time: a new value cancels and reschedules it.

Clearing the box (blank input) is emitted straight away so the listing
drops the term without waiting for the window.
"""
from __future__ import annotations

from typing import Callable

from storefront_query.kernel.time import AsyncioTimer, Timer, TimerHandle
from storefront_query.observability.logging import get_logger

__all__ = ["SearchDebouncer"]

logger = get_logger(__name__)


class SearchDebouncer:
    def __init__(
        self,
        on_settle: Callable[[str], object],
        *,
        window: float = 0.3,
        timer: Timer | None = None,
        clear_immediately: bool = True,
    ) -> None:
        self._on_settle = on_settle
        self._window = window
        self._timer: Timer = timer or AsyncioTimer()
        self._clear_immediately = clear_immediately
        self._handle: TimerHandle | None = None
        self._pending: str | None = None

    @property
    def pending(self) -> str | None:
        """Value waiting for the window to elapse, if any."""
        return self._pending

    @property
    def window(self) -> float:
        return self._window

    def push(self, text: str) -> None:
        self.cancel()
        if self._clear_immediately and not text.strip():
            self._emit(text)
            return
        self._pending = text
        self._handle = self._timer.call_later(self._window, self._fire)

    def flush(self) -> str | None:
        """Emit the pending value now (e.g. the shopper pressed Enter)."""
        value = self._pending
        if value is None:
            return None
        self.cancel()
        self._emit(value)
        return value

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def _fire(self) -> None:
        value = self._pending
        self._handle = None
        self._pending = None
        if value is not None:
            self._emit(value)

    def _emit(self, value: str) -> None:
        logger.debug("search_input_settled", length=len(value.strip()))
        self._on_settle(value)
