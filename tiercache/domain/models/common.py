"""Defines common Value Objects used across the cache tiers.

These objects represent simple values like cache keys and file paths, plus
the CacheItem entity that both tiers store and the file tier serializes.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, NewType, Optional

# === Core Value Objects ===

CacheKey = NewType("CacheKey", str)        # Key as supplied by the caller
CachePrefix = NewType("CachePrefix", str)  # Prepended to derived file names
FilePath = NewType("FilePath", str)        # Derived on-disk location of a key

# Sentinel for "no expiry"
NO_EXPIRY = 0


@dataclass
class CacheItem:
    """The unit of stored data: a payload plus its absolute expiry instant."""
    value: Any
    expires_at: float = NO_EXPIRY  # Unix timestamp, 0 = never expires

    @classmethod
    def new(cls, value: Any, ttl: float = 0, now: Optional[float] = None) -> "CacheItem":
        """Creates an item, computing the expiry from a TTL in seconds."""
        if ttl and ttl > 0:
            now = time.time() if now is None else now
            return cls(value=value, expires_at=now + ttl)
        return cls(value=value)

    def is_expired(self, now: Optional[float] = None) -> bool:
        """An item is live iff it never expires or its expiry is still ahead."""
        if self.expires_at == NO_EXPIRY:
            return False
        now = time.time() if now is None else now
        return self.expires_at <= now

    def to_dict(self) -> Dict[str, Any]:
        return {"expires_at": self.expires_at, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheItem":
        if not isinstance(data, dict) or "value" not in data:
            raise ValueError(f"Not a cache item record: {data!r:.80}")
        expires_at = data.get("expires_at", NO_EXPIRY)
        if expires_at is None:
            expires_at = NO_EXPIRY
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise ValueError(f"Cache item expiry must be a number, got {expires_at!r:.40}")
        return cls(value=data["value"], expires_at=expires_at)
