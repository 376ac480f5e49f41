"""Bounded result cache keyed by normalized query."""

import threading
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from ..config.logging import get_logger, truncate_for_log
from .models import MatchResult

logger = get_logger(__name__)

CachedResults = Tuple[MatchResult, ...]


class SearchResultCache:
    """FIFO cache of ranked results.

    The oldest inserted key is evicted first once ``max_size`` is reached.
    Reads and check-then-insert writes are serialized by a lock, so concurrent
    callers cannot corrupt the eviction order.
    """

    def __init__(self, max_size: int = 100):
        """Initialize result cache.

        Args:
            max_size: Maximum number of cached queries (0 disables caching)
        """
        self.max_size = max(0, max_size)
        self._entries: "OrderedDict[str, CachedResults]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: str) -> Optional[CachedResults]:
        """Return cached results for ``key``, or None on a miss."""
        with self._lock:
            results = self._entries.get(key)
            if results is None:
                self.misses += 1
            else:
                self.hits += 1

        if results is None:
            logger.debug("Cache miss", query=truncate_for_log(key))
        else:
            logger.debug("Cache hit", query=truncate_for_log(key))
        return results

    def put(self, key: str, results: CachedResults) -> None:
        """Store results for ``key``, evicting the oldest key when full.

        Re-storing an existing key keeps its original position.
        """
        if self.max_size == 0:
            return

        evicted = None
        with self._lock:
            if key in self._entries:
                self._entries[key] = results
                return
            if len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
            self._entries[key] = results

        if evicted is not None:
            logger.debug("Evicted cache entry", query=truncate_for_log(evicted))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
            self.evictions = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> Tuple[str, ...]:
        """Cached keys, oldest first."""
        with self._lock:
            return tuple(self._entries)

    def stats(self) -> Dict[str, Any]:
        """Cache usage statistics."""
        with self._lock:
            lookups = self.hits + self.misses
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "hit_rate": self.hits / lookups if lookups else 0.0,
            }
