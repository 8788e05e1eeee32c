"""
Fixed-window request limiter.

Each key gets ``max_requests`` calls per ``window_seconds``. The limiter is an
owned object (one per app) rather than module state. Expired windows are swept
from inside allow() at most once per window length, so the table stays bounded
by the clients seen in the last two windows.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + window_seconds

    def allow(self, key: str) -> bool:
        """Count one request for *key*; False once the window's quota is used up."""
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._evict(now)
            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
                return True
            if window.count < self.max_requests:
                window.count += 1
                return True
        logger.warning("Rate limit exceeded for %s", key)
        return False

    def remaining(self, key: str) -> int:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                return self.max_requests
            return self.max_requests - window.count

    def clear(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def evict_expired(self) -> int:
        """Drop windows that have run out; returns how many were removed."""
        with self._lock:
            return self._evict(self._clock())

    def _evict(self, now: float) -> int:
        expired = [k for k, w in self._windows.items() if now >= w.reset_at]
        for k in expired:
            del self._windows[k]
        self._next_sweep = now + self.window_seconds
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
