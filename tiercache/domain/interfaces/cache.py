"""Interface for the cache tiers.

Defines the contract for storing, retrieving, and removing cached data with
optional time-to-live expiry. Both the memory tier and the file tier
implement it, so calling code can swap one for the other.
"""

import abc
from typing import Any, Iterable, List, Mapping, Optional

from ..models.common import CacheKey


class CacheService(abc.ABC):
    """Abstract Base Class for cache operations."""

    @abc.abstractmethod
    def has(self, key: CacheKey) -> bool:
        """Checks whether a live entry exists for the key.

        Args:
            key: The cache key to look up.

        Returns:
            True if the key is cached and not expired.
        """
        pass

    @abc.abstractmethod
    def get(self, key: CacheKey, default: Any = None) -> Any:
        """Retrieves a cached value.

        Expired entries are removed on discovery and reported as missing.

        Args:
            key: The cache key to retrieve.
            default: Returned when the key is missing or expired.

        Returns:
            The cached value, or ``default``.
        """
        pass

    @abc.abstractmethod
    def set(self, key: CacheKey, value: Any, ttl: float = 0) -> None:
        """Stores a value, replacing any previous entry for the key.

        Args:
            key: The cache key to store the value under.
            value: The payload to store.
            ttl: Time-to-live in seconds; 0 or less means no expiry.

        Raises:
            CacheError: If the value could not be stored.
        """
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> None:
        """Removes the entry for a key. A missing key is not an error.

        Raises:
            CacheError: If the backing storage could not be updated.
        """
        pass

    def get_multi(self, keys: Iterable[CacheKey], default: Any = None) -> List[Any]:
        """Retrieves several values, one result per key in input order."""
        return [self.get(key, default) for key in keys]

    def set_multi(self, values: Mapping[CacheKey, Any], ttl: float = 0) -> None:
        """Stores several values. Stops at the first failure; earlier writes stay applied."""
        for key, value in values.items():
            self.set(key, value, ttl)

    @abc.abstractmethod
    def delete_multi(self, keys: Iterable[CacheKey]) -> None:
        """Removes several keys, continuing past individual failures."""
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes every entry held by the cache."""
        pass

    @abc.abstractmethod
    def count(self) -> int:
        """Number of entries currently held in memory, expired or not."""
        pass

    @property
    @abc.abstractmethod
    def last_error(self) -> Optional[Exception]:
        """The most recent error recorded by a failing operation."""
        pass
