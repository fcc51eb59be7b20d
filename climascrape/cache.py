"""In-memory response cache with a fixed time-to-live."""

import hashlib
import threading
import time
from collections.abc import Callable
from typing import Any

KEY_PREFIX = "climatempo:15d"


def make_key(url: str, city: str, state: str, prefix: str = KEY_PREFIX) -> str:
    """Stable cache key for a scrape request."""
    digest = hashlib.sha1("|".join([url, city, state]).encode("utf-8")).hexdigest()
    return f"{prefix}:{digest}"


class TTLCache:
    """Thread-safe dict cache; expired entries are dropped on every write.

    Concurrent misses for the same key may both compute; the later write wins.
    """

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() < expires_at:
                return value
            self._entries.pop(key, None)
            return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = (now + self.ttl_seconds, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (exp, _) in self._entries.items() if now >= exp]
        for k in expired:
            del self._entries[k]

    def fetch(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the cached value or compute and store it.

        Failed computations are not cached. The lock is not held while
        computing, so a slow fetch does not block other keys.
        """
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
