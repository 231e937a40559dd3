"""
Short-lived in-memory cache for catalogue lookups.

Entries expire a fixed number of seconds after they were written
(absolute expiry, not sliding).  An expired entry is dropped when its
key is read, and writes sweep out every expired entry at most once per
TTL period, so the store never holds much more than one period of keys.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


DEFAULT_TTL_SECONDS = 60.0


class TTLCache:
    """Thread-safe key/value store with a fixed time-to-live.

    ``clock`` must be monotonic; tests pass a fake one to move time
    forward without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            self._entries[key] = (value, now + self.ttl_seconds)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self.ttl_seconds

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
