"""Function result caching on top of a cache tier.

Usage:
    @cache_result(ttl=60, prefix="user:")
    def get_user(user_id: str) -> dict:
        return fetch_user_from_db(user_id)
"""

import functools
import hashlib
import logging
from typing import Any, Callable, Optional, TypeVar

from tiercache.core.cache_factory import get_cache
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.errors import CacheError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def make_cache_key(func: Callable, args: tuple, kwargs: dict, prefix: str = "") -> str:
    """Builds a deterministic key from the function and its call arguments."""
    parts = [repr(arg) for arg in args]
    parts.extend(f"{k}={v!r}" for k, v in sorted(kwargs.items()))
    args_hash = hashlib.md5("|".join(parts).encode("utf-8")).hexdigest()
    return f"{prefix}{func.__module__}.{func.__qualname__}:{args_hash}"


def cache_result(
    cache: Optional[CacheService] = None,
    ttl: float = 0,
    prefix: str = "",
) -> Callable[[F], F]:
    """Decorator to cache the result of a function.

    A ``None`` result is never cached. A failed cache write is logged and the
    function result is still returned.

    Args:
        cache: Cache tier to use. Defaults to the global cache from `get_cache`.
        ttl: Time-to-live in seconds for stored results (0 = no expiry).
        prefix: Prepended to every generated key.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            target = cache if cache is not None else get_cache()
            key = make_cache_key(func, args, kwargs, prefix)

            cached_value = target.get(key)
            if cached_value is not None:
                logger.debug(f"Cache hit: {key}")
                return cached_value

            result = func(*args, **kwargs)
            if result is None:
                return result

            try:
                target.set(key, result, ttl)
            except CacheError as e:
                logger.warning(f"Could not cache result of {func.__qualname__}: {e}")
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
