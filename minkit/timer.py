"""A one-shot timer that fires a callback after a delay in milliseconds."""

from __future__ import annotations

import threading
from typing import Callable, Optional


class Timer:
    """Schedule a callback to run once after a delay.

    Calling :meth:`delay` again before the timer fires replaces the pending
    run; :meth:`stop` cancels it. The callback may call :meth:`delay` itself
    to keep the timer going.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._pending: Optional[threading.Timer] = None
        self._generation = 0

    def delay(self, milliseconds: float) -> None:
        """Fire the callback once after ``milliseconds`` (negative means now)."""
        seconds = max(0.0, float(milliseconds)) / 1000.0
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            pending = threading.Timer(seconds, self._fire, args=(generation,))
            pending.daemon = True
            self._pending = pending
            pending.start()

    def stop(self) -> None:
        """Cancel any pending run."""
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
        self._callback()