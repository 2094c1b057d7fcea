"""In-process cache for backend reads.

Entries are keyed by tuples such as ("mealplans", 3, "recipes"). After a
mutation the affected keys are invalidated by prefix and fetched again on the
next read; cached values are never patched in place.
"""
import logging
import time
from threading import Lock
from typing import Any, Callable, Dict, Hashable, Tuple

from mealdesk.utilities.config import CACHE_TTL

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]


class QueryCache:
    def __init__(self, ttl: float = CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = Lock()
        self._entries: Dict[QueryKey, Tuple[float, Any]] = {}
        # Bumped by every invalidate/clear; a load that straddles one is not stored
        self._epoch = 0

    def _fresh(self, stored_at: float) -> bool:
        return self.ttl <= 0 or (self._clock() - stored_at) < self.ttl

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Return the cached value for key, calling loader on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._fresh(entry[0]):
                return entry[1]
            epoch = self._epoch
        # Loader runs outside the lock; a concurrent miss may fetch twice
        value = loader()
        with self._lock:
            if epoch == self._epoch:
                self._entries[key] = (self._clock(), value)
            else:
                logger.debug("Dropped load of %s that raced an invalidation", key)
        return value

    def invalidate(self, *prefix: Hashable) -> int:
        """Drop every entry whose key starts with prefix. Returns how many went."""
        n = len(prefix)
        with self._lock:
            stale = [k for k in self._entries if k[:n] == prefix]
            self._epoch += 1
            for k in stale:
                del self._entries[k]
        if stale:
            logger.debug("Invalidated %d cache entries for %s", len(stale), prefix)
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def __contains__(self, key: QueryKey) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._fresh(entry[0])
