"""tiercache: in-process key/value cache with TTL expiry.

A memory tier that every operation passes through, and a file tier that
mirrors it to one file per key for persistence across restarts.
"""

from tiercache.core.cache_factory import create_cache, get_cache, reset_cache
from tiercache.core.decorators import cache_result
from tiercache.domain.models.common import CacheItem
from tiercache.domain.models.errors import (
    CacheConfigurationError,
    CacheError,
    CacheSerializationError,
    CacheStorageError,
)
from tiercache.infrastructure.cache import FileCache, MemoryCache

__version__ = "0.1.0"

__all__ = [
    'CacheItem',
    'MemoryCache',
    'FileCache',
    'CacheError',
    'CacheSerializationError',
    'CacheStorageError',
    'CacheConfigurationError',
    'create_cache',
    'get_cache',
    'reset_cache',
    'cache_result',
]
