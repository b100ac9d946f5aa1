"""Cache Tier Implementations.

Provides concrete implementations of the CacheService interface:
an in-memory tier and a file tier that mirrors it to disk.
Bounded Context: Cache Management
"""

from tiercache.infrastructure.cache.memory_cache import MemoryCache
from tiercache.infrastructure.cache.file_cache import FileCache

__all__ = ['MemoryCache', 'FileCache']
