"""Caches for noodl search results.

Each hook invocation is a fresh process, so the default is NullSearchCache.
Long-lived callers (a daemon, the diagnostic CLI looping over inputs) can
pass a MemorySearchCache to reuse results for repeated ``cwd:query`` pairs.

Example usage:
    cache = MemorySearchCache(max_entries=100, ttl_seconds=60.0)
    client = NoodlClient(result_cache=cache)
"""

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Any


def search_cache_key(cwd: str, query: str) -> str:
    """Key used for a search in ``cwd``."""
    return f"{cwd}:{query}"


class SearchResultCache(ABC):
    """Interface for search result caches."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value."""

    @abstractmethod
    def expire(self, key: str | None = None) -> int:
        """Drop one key, or every entry when ``key`` is None.

        Returns:
            Number of entries removed.
        """


class NullSearchCache(SearchResultCache):
    """Cache that never stores anything."""

    def get(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any) -> None:
        return None

    def expire(self, key: str | None = None) -> int:
        return 0


@dataclass
class CacheEntry:
    """Cached search result with metadata.

    Attributes:
        value: The cached search outcome.
        created_at: Timestamp when entry was created.
        access_count: Number of times this entry has been read.
    """

    value: Any
    created_at: float
    access_count: int = 0


class MemorySearchCache(SearchResultCache):
    """In-process LRU cache with TTL expiration.

    Attributes:
        max_entries: Maximum number of cache entries.
        ttl_seconds: Time-to-live for cache entries in seconds.
    """

    def __init__(self, max_entries: int = 100, ttl_seconds: float = 60.0):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Get a cached value if present and not expired.

        On hit, the entry is moved to the end (LRU) and its access count
        incremented.
        """
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self._misses += 1
                return None

            if time.time() - entry.created_at > self.ttl_seconds:
                del self._cache[key]
                self._misses += 1
                return None

            self._cache.move_to_end(key)
            entry.access_count += 1
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]

            while len(self._cache) >= self.max_entries:
                self._cache.popitem(last=False)

            self._cache[key] = CacheEntry(value=value, created_at=time.time())

    def expire(self, key: str | None = None) -> int:
        with self._lock:
            if key is None:
                count = len(self._cache)
                self._cache.clear()
                return count

            if key in self._cache:
                del self._cache[key]
                return 1
            return 0

    def prune_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries pruned.
        """
        with self._lock:
            now = time.time()
            expired = [
                key
                for key, entry in self._cache.items()
                if now - entry.created_at > self.ttl_seconds
            ]
            for key in expired:
                del self._cache[key]
            return len(expired)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "entries": len(self._cache),
                "max_entries": self.max_entries,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "hit_ratio": self._hits / total if total > 0 else 0.0,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        """Check if a key exists in cache (does not update LRU)."""
        with self._lock:
            return key in self._cache


__all__ = [
    "SearchResultCache",
    "NullSearchCache",
    "MemorySearchCache",
    "CacheEntry",
    "search_cache_key",
]
