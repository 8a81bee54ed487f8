"""
Scheduler
=========

Timer abstraction used by the network printer to simulate print time.

Anything with a ``call_later(delay, callback, *args)`` method can drive a
job queue. ``TimerScheduler`` uses daemon threads so HTTP request handlers
never wait on a print. An ``asyncio`` event loop also fits the interface
when the queue is only used from the loop's own thread.
"""

import logging
import threading
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


class TimerScheduler:
    """Runs callbacks after a delay on daemon ``threading.Timer`` threads."""

    def __init__(self):
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[..., Any], *args) -> threading.Timer:
        """Schedule ``callback(*args)`` after ``delay`` seconds."""
        timer = threading.Timer(delay, self._run, args=(callback, args))
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()
        return timer

    def _run(self, callback, args):
        try:
            callback(*args)
        except Exception:
            logger.exception('Scheduled callback %r failed', callback)

    def cancel_all(self):
        """Cancel timers that have not fired yet."""
        with self._lock:
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()
