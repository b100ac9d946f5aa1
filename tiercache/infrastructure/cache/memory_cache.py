"""In-memory cache tier.

Holds every item in a dict guarded by a single re-entrant lock. Expired
items are swept lazily when accessed; there is no background cleanup and no
capacity bound.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

# Domain Layer Imports
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.common import CacheItem, CacheKey

logger = logging.getLogger(__name__)


class MemoryCache(CacheService):
    """Thread-safe dict-backed cache with lazy TTL expiry.

    The lock is re-entrant so an expiry discovered during a read can delete
    the entry without releasing the lock first. The file tier reuses the same
    lock to serialize its file I/O.

    Args:
        clock: Returns the current Unix time in seconds (default ``time.time``).
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._items: Dict[str, CacheItem] = {}
        self._clock = clock
        self._last_error: Optional[Exception] = None
        self.lock = threading.RLock()

    # --- Item-level access (shared with the file tier) ---

    def now(self) -> float:
        return self._clock()

    def get_item(self, key: CacheKey) -> Optional[CacheItem]:
        """Returns the live item for a key, deleting it if it has expired."""
        with self.lock:
            item = self._items.get(key)
            if item is None:
                return None
            if item.is_expired(self.now()):
                logger.debug(f"Memory cache EXPIRED key: {key}")
                self.delete(key)
                return None
            return item

    def put_item(self, key: CacheKey, item: CacheItem) -> None:
        """Stores an already-built item, replacing any previous one."""
        with self.lock:
            self._items[key] = item

    def keys(self) -> List[str]:
        """Snapshot of the keys currently held, expired or not."""
        with self.lock:
            return list(self._items)

    def record_error(self, error: Exception) -> None:
        """Overwrites the shared last-error slot."""
        self._last_error = error

    # --- CacheService Interface Implementation ---

    def has(self, key: CacheKey) -> bool:
        return self.get_item(key) is not None

    def get(self, key: CacheKey, default: Any = None) -> Any:
        item = self.get_item(key)
        if item is None:
            logger.debug(f"Memory cache MISS for key: {key}")
            return default
        logger.debug(f"Memory cache HIT for key: {key}")
        return item.value

    def store(self, key: CacheKey, value: Any, ttl: float = 0) -> CacheItem:
        """Same as `set`, returning the item now held for the key."""
        with self.lock:
            item = CacheItem.new(value, ttl, now=self.now())
            self._items[key] = item
        logger.debug(f"Memory cache PUT key: {key} TTL: {ttl}s")
        return item

    def set(self, key: CacheKey, value: Any, ttl: float = 0) -> None:
        self.store(key, value, ttl)

    def delete(self, key: CacheKey) -> None:
        with self.lock:
            self._items.pop(key, None)

    def delete_multi(self, keys: Iterable[CacheKey]) -> None:
        for key in keys:
            self.delete(key)

    def clear(self) -> None:
        with self.lock:
            self._items = {}
        logger.debug("Cleared memory cache.")

    def count(self) -> int:
        with self.lock:
            return len(self._items)

    @property
    def last_error(self) -> Optional[Exception]:
        return self._last_error
