"""Trailing-edge debouncing for text validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple
import asyncio
import threading
import warnings

from .constants import DEBOUNCE_MS

__all__ = ["DebouncedCall"]


@dataclass
class _PendingCall:
    args: Tuple[Any, ...]
    kwargs: dict[str, Any]


class DebouncedCall:
    """Run *callback* once input has been quiet for ``delay_ms``.

    Every call replaces the pending arguments and restarts the timer, so only
    the latest input is delivered. Timers use ``loop.call_later`` inside a
    running asyncio loop and a daemon :class:`threading.Timer` otherwise.

    Parameters
    ----------
    callback:
        Callable receiving the arguments of the most recent call.
    delay_ms:
        Quiet period in milliseconds.
    """

    def __init__(self, callback: Callable[..., Any], *, delay_ms: int = DEBOUNCE_MS) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be > 0")
        self._callback = callback
        self._delay_s = delay_ms / 1000.0

        self._pending: Optional[_PendingCall] = None
        self._lock = threading.Lock()
        self._timer: Optional[Any] = None
        self._ticket = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._pending = _PendingCall(args=args, kwargs=dict(kwargs))
            self._cancel_timer_locked()
            self._schedule_locked()

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            self._pending = None
            self._cancel_timer_locked()

    def flush(self) -> None:
        """Deliver the pending call immediately on the calling thread."""
        with self._lock:
            self._cancel_timer_locked()
        self._on_tick(None)

    def _cancel_timer_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule_locked(self) -> None:
        self._ticket += 1
        ticket = self._ticket
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(self._delay_s, self._on_tick, args=(ticket,))
            timer.daemon = True
            self._timer = timer
            timer.start()
            return

        self._timer = loop.call_later(self._delay_s, self._on_tick, ticket)

    def _on_tick(self, ticket: int | None) -> None:
        with self._lock:
            # a timer superseded while waiting for the lock
            if ticket is not None and ticket != self._ticket:
                return
            self._timer = None
            call = self._pending
            self._pending = None
        if call is None:
            return

        try:
            self._callback(*call.args, **call.kwargs)
        except Exception as exc:
            warnings.warn(f"DebouncedCall callback failed: {exc}", RuntimeWarning)
