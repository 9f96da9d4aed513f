"""
query_cache.py — Client-side query cache
Entries are keyed by tuples such as ("/api/tasks", "2026-10-18"). Invalidating a
key prefix marks every entry under it stale so the next read refetches.
Optimistic edits snapshot the affected entries so they can be restored.
"""

import copy
import sys
import time
from typing import Any, Callable

QueryKey = tuple


class QueryCache:
    """In-memory query cache with prefix invalidation and hit tracking."""

    def __init__(self):
        # key → {data, timestamp, stale}
        self._cache: dict[QueryKey, dict] = {}
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    @staticmethod
    def _matches(key: QueryKey, prefix: QueryKey) -> bool:
        return key[: len(prefix)] == prefix

    def keys(self, prefix: QueryKey = ()) -> list[QueryKey]:
        return [k for k in self._cache if self._matches(k, prefix)]

    # ------------------------------------------------------------------
    def peek(self, key: QueryKey) -> Any | None:
        """Cached data for *key*, stale or not, without counting a lookup."""
        entry = self._cache.get(key)
        return entry["data"] if entry else None

    def is_stale(self, key: QueryKey) -> bool:
        entry = self._cache.get(key)
        return entry is None or entry["stale"]

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Return fresh cached data, or call *loader* and cache its result."""
        if not self.is_stale(key):
            self._hits += 1
            return self._cache[key]["data"]

        self._misses += 1
        data = loader()
        self.set(key, data)
        return data

    def set(self, key: QueryKey, data: Any):
        self._cache[key] = {"data": data, "timestamp": time.time(), "stale": False}

    def remove(self, key: QueryKey):
        self._cache.pop(key, None)

    # ------------------------------------------------------------------
    def invalidate(self, prefix: QueryKey) -> int:
        """Mark every entry under *prefix* stale. Returns how many were marked."""
        matched = self.keys(prefix)
        for k in matched:
            self._cache[k]["stale"] = True
        return len(matched)

    def set_optimistic(self, prefix: QueryKey, updater: Callable[[Any], Any]) -> dict:
        """Apply *updater* to every cached entry under *prefix*.

        Returns a snapshot of the previous data to hand to rollback().
        """
        snapshot = {}
        for k in self.keys(prefix):
            previous = self._cache[k]["data"]
            snapshot[k] = copy.deepcopy(previous)
            self._cache[k]["data"] = updater(previous)
        return snapshot

    def rollback(self, snapshot: dict):
        """Restore entries captured by set_optimistic()."""
        for k, data in snapshot.items():
            if k in self._cache:
                self._cache[k]["data"] = data
            else:
                self.set(k, data)

    # ------------------------------------------------------------------
    def get_stats(self) -> dict:
        """Cache statistics: entries, stale entries, hit rate, estimated memory."""
        total_lookups = self._hits + self._misses
        return {
            "total_entries": len(self._cache),
            "stale_entries": sum(1 for v in self._cache.values() if v["stale"]),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total_lookups, 4) if total_lookups else 0.0,
            "estimated_memory_bytes": sys.getsizeof(self._cache),
        }
