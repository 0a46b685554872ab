"""
Time sources — every expiry decision in the daemon goes through one of these.
"""

from __future__ import annotations

import threading
import time


class SystemClock:
    """Wall clock in whole Unix seconds."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """
    Manually driven clock for tests and simulations.

    Usage:
        clock = FixedClock(1000)
        clock.advance(61)
        clock.now()  # 1061
    """

    def __init__(self, start: int = 0):
        self._now = int(start)
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._now

    def set(self, timestamp: int) -> None:
        with self._lock:
            self._now = int(timestamp)

    def advance(self, seconds: int) -> int:
        with self._lock:
            self._now += int(seconds)
            return self._now
