"""Builds cache tiers from configuration.

Provides a process-wide cache instance for calling code that does not want to
wire one up itself.
"""

import logging
from typing import Any, Optional

# Domain Layer Imports
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.errors import CacheConfigurationError

# Infrastructure Layer Imports
from tiercache.infrastructure.cache.file_cache import FileCache
from tiercache.infrastructure.cache.memory_cache import MemoryCache
from tiercache.infrastructure.config import settings
from tiercache.infrastructure.serialization.codecs import get_serializer

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "file")

# Global cache instance
_cache: Optional[CacheService] = None


def create_cache(backend: Optional[str] = None, **overrides: Any) -> CacheService:
    """Creates a cache tier.

    Args:
        backend: 'memory' or 'file'. Defaults to the 'cache.backend' setting.
        **overrides: Constructor arguments that take precedence over settings
            (cache_dir, prefix, security_key, serializer, clock).

    Raises:
        CacheConfigurationError: If the backend or serializer name is unknown.
    """
    backend = (backend or settings.get_cache_backend()).lower()

    if backend == "memory":
        logger.debug("Using in-memory cache")
        clock = overrides.get("clock")
        return MemoryCache(clock=clock) if clock else MemoryCache()

    if backend == "file":
        options = dict(overrides)
        options.setdefault("cache_dir", settings.get_cache_dir())
        options.setdefault("prefix", settings.get_cache_prefix())
        options.setdefault("security_key", settings.get_security_key())
        if options.get("serializer") is None:
            options["serializer"] = settings.get_serializer_name()
        if isinstance(options["serializer"], str):
            options["serializer"] = get_serializer(options["serializer"])
        logger.info(f"Using file cache at {options['cache_dir'] or '<system temp dir>'}")
        return FileCache(**options)

    raise CacheConfigurationError(f"Unknown cache backend '{backend}'. Expected one of: {', '.join(BACKENDS)}")


def get_cache() -> CacheService:
    """Get or create the global cache instance."""
    global _cache

    if _cache is None:
        _cache = create_cache()

    return _cache


def reset_cache() -> None:
    """Reset the global cache instance. Useful for testing."""
    global _cache
    _cache = None
