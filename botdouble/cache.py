"""In-memory cache used by the bot runtime.

Conversation steps are kept here, keyed by user and chat. Values are stored
as-is (callables included), so this cache never serializes anything.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any


@dataclass
class CacheStats:
    """Hit/miss counters of a MemoryCache."""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


class MemoryCache:
    """Dictionary-backed cache with optional per-key TTL."""

    def __init__(self, default_ttl: int | None = None) -> None:
        self.default_ttl = default_ttl
        self._cache: dict[str, tuple[Any, float | None]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str, default: Any = None) -> Any:
        if not self.has(key):
            self._misses += 1
            return default
        self._hits += 1
        return self._cache[key][0]

    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        ttl = ttl if ttl is not None else self.default_ttl
        expiry = time.time() + ttl if ttl else None
        self._cache[key] = (value, expiry)
        return True

    def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def has(self, key: str) -> bool:
        if key not in self._cache:
            return False
        _, expiry = self._cache[key]
        if expiry and time.time() > expiry:
            del self._cache[key]
            return False
        return True

    def clear(self) -> bool:
        self._cache.clear()
        self._hits = 0
        self._misses = 0
        return True

    def get_stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._cache))

    def __len__(self) -> int:
        return len(self._cache)
