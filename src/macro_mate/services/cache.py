"""Bounded in-memory cache with insertion-order eviction."""

import logging
import threading
from collections import OrderedDict
from typing import Protocol

logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def add(self, key: str, value: object) -> bool:
        """Store a value only if the key is absent."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present."""

    def pop(self, key: str) -> object | None:
        """Remove and return a cached value if present."""

    def clear(self) -> None:
        """Drop every cached value."""


class BoundedCache(Cache):
    """Thread-safe cache holding at most ``capacity`` entries.

    When an insertion pushes the size over ``capacity`` the oldest inserted
    entries are dropped in one batch until ``watermark`` entries remain.
    Reads never change eviction order.
    """

    def __init__(self, capacity: int = 1000, watermark: int = 500) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        if not 1 <= watermark <= capacity:
            raise ValueError("watermark must be between 1 and capacity")
        self.capacity = capacity
        self.watermark = watermark
        self._entries: OrderedDict[str, object] = OrderedDict()
        self._lock = threading.Lock()

    def add(self, key: str, value: object) -> bool:
        """Insert a value unless the key is already live."""
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = value
            if len(self._entries) > self.capacity:
                self._evict_locked()
            return True

    def get(self, key: str) -> object | None:
        """Return the value stored under key, if any."""
        with self._lock:
            return self._entries.get(key)

    def pop(self, key: str) -> object | None:
        """Remove the entry and return its value, if any."""
        with self._lock:
            return self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Return live keys, oldest first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _evict_locked(self) -> None:
        evicted = 0
        while len(self._entries) > self.watermark:
            self._entries.popitem(last=False)
            evicted += 1
        logger.info(
            "Evicted oldest cache entries",
            extra={"evicted": evicted, "remaining": len(self._entries)},
        )
