"""Cache error hierarchy.

Every failing cache operation raises one of these and records it as the
cache's ``last_error``.
"""

from typing import Any, Dict, Optional


class CacheError(RuntimeError):
    """Base error for all cache failures."""

    code = "CACHE_ERROR"

    def __init__(self, message: str, key: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.key = key
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "key": self.key,
            "details": self.details,
        }


class CacheSerializationError(CacheError):
    """Item could not be encoded, or stored bytes could not be decoded."""

    code = "SERIALIZATION"


class CacheStorageError(CacheError):
    """Filesystem operation on a cache file or directory failed."""

    code = "STORAGE"

    def __init__(self, message: str, key: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message, key=key, details={"path": path})
        self.path = path


class CacheConfigurationError(CacheError):
    """Unknown backend, serializer, or otherwise invalid cache settings."""

    code = "CONFIGURATION"
