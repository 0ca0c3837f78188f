"""
Small TTL cache for catalog lookups.

Owned by whoever constructs it; nothing here is module-level state.
The clock is injectable so expiry can be tested without sleeping.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple

_MISSING = object()


class TTLCache:
    """Key → value, each entry valid for ttl_seconds after it was set."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Any, Tuple[float, Any]] = {}

    def get(self, key, default: Optional[Any] = None):
        entry = self._entries.get(key)
        if entry is None:
            return default
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return default
        return value

    def set(self, key, value) -> None:
        self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)
