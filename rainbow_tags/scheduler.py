"""Debounced scheduling of rescans after rapid edits."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .logger import get_logger

logger = get_logger(__name__)


class Debouncer:
    """Run a callback once input has been quiet for `delay` seconds.

    Each call to `schedule` cancels the pending callback and starts a new
    timer, so a burst of edits triggers a single rescan. Callbacks run on a
    timer thread.

    Examples:
        debouncer = Debouncer(0.01)
        debouncer.schedule(lambda: print("rescan"))
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._callback: Callable[[], None] | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._callback = callback
            timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()
        logger.debug("Scheduled callback in %.3fs", self.delay)

    def cancel(self) -> bool:
        """Cancel the pending callback.

        Returns:
            bool: True when a pending callback was cancelled.
        """
        with self._lock:
            return self._cancel_locked()

    def flush(self) -> bool:
        """Run the pending callback immediately on the calling thread.

        Returns:
            bool: True when a pending callback was run.
        """
        with self._lock:
            callback = self._callback
            self._cancel_locked()
        if callback is None:
            return False
        callback()
        return True

    def _cancel_locked(self) -> bool:
        cancelled = self._callback is not None
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._callback = None
        # A timer that already fired must not run a superseded callback
        self._generation += 1
        return cancelled

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._callback is None:
                return
            callback = self._callback
            self._timer = None
            self._callback = None
        callback()
