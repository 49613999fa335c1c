"""
In-memory cache for NAICS taxonomy lookups.

The NAICS hierarchy changes once every five years, so lookups are kept
for the life of the process: no TTL and no eviction. Keys are strings
such as 'all-2022' (the sector list) or 'children-62' (direct children
of a code).

Thread-safe, since Flask may serve requests from several threads and
every service instance shares the module-level singleton.
"""

import logging
import threading
import time
from typing import Dict, List, Optional

from countyscope.models import NaicsCode

logger = logging.getLogger(__name__)


class TaxonomyCache:
    """
    Unbounded, thread-safe map of cache keys to NAICS code lists.

    An empty list is a valid cached value (a leaf code has no
    children), so `get` returns None only on a miss.
    """

    def __init__(self):
        self._cache: Dict[str, List[NaicsCode]] = {}
        self._lock = threading.RLock()
        self._last_write: Optional[float] = None

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[List[NaicsCode]]:
        """Get a cached code list, or None if not cached."""
        with self._lock:
            if key in self._cache:
                self._hits += 1
                return list(self._cache[key])
            self._misses += 1
        return None

    def set(self, key: str, codes: List[NaicsCode]) -> None:
        """Store a code list under `key`, replacing any previous value."""
        with self._lock:
            self._cache[key] = list(codes)
            self._last_write = time.time()
        logger.debug(f'Cached {len(codes)} codes under {key!r}')

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._cache

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def invalidate(self, key: str) -> None:
        """Remove specific entry from cache."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear entire cache and reset statistics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'entries': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / lookups if lookups > 0 else 0,
                'last_write': self._last_write,
            }


# Singleton instance
taxonomy_cache = TaxonomyCache()
