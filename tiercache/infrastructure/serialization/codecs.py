"""Concrete byte codecs for persisting cache items.

`PickleSerializer` handles arbitrary Python payloads and is the default.
`JsonSerializer` produces portable, human-readable files but only accepts
JSON-compatible payloads.
"""

import json
import logging
import pickle
from typing import Any, Dict, Optional, Type

# Domain Layer Imports
from tiercache.domain.interfaces.serializer import Serializer
from tiercache.domain.models.common import CacheItem
from tiercache.domain.models.errors import CacheConfigurationError, CacheSerializationError

logger = logging.getLogger(__name__)

DEFAULT_SERIALIZER = "pickle"


class PickleSerializer(Serializer):
    """Pickle codec; round-trips any picklable payload."""

    name = "pickle"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def dumps(self, obj: Any) -> bytes:
        try:
            return pickle.dumps(obj, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise CacheSerializationError(f"Failed to pickle {type(obj).__name__}: {e}") from e

    def loads(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except Exception as e:  # Unpickling garbage can raise almost anything

            raise CacheSerializationError(f"Failed to unpickle {len(data)} bytes: {e}") from e


class JsonSerializer(Serializer):
    """JSON codec (UTF-8). Tuples come back as lists."""

    name = "json"

    def dumps(self, obj: Any) -> bytes:
        try:
            return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Value is not JSON serializable: {e}") from e

    def loads(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheSerializationError(f"Malformed JSON cache data: {e}") from e


_SERIALIZERS: Dict[str, Type[Serializer]] = {
    PickleSerializer.name: PickleSerializer,
    JsonSerializer.name: JsonSerializer,
}


def get_serializer(name: Optional[str] = None) -> Serializer:
    """Returns a serializer instance by its configuration name.

    Args:
        name: 'pickle' or 'json'. Defaults to pickle.

    Raises:
        CacheConfigurationError: If the name is unknown.
    """
    name = (name or DEFAULT_SERIALIZER).lower()
    try:
        return _SERIALIZERS[name]()
    except KeyError:
        raise CacheConfigurationError(
            f"Unknown serializer '{name}'. Expected one of: {', '.join(sorted(_SERIALIZERS))}"
        ) from None


_default_serializer = PickleSerializer()


def marshal(item: CacheItem, serializer: Optional[Serializer] = None) -> bytes:
    """Encodes a cache item as stored on disk."""
    return (serializer or _default_serializer).dumps(item.to_dict())


def unmarshal(data: bytes, serializer: Optional[Serializer] = None) -> CacheItem:
    """Decodes bytes written by `marshal` back into a cache item."""
    record = (serializer or _default_serializer).loads(data)
    try:
        return CacheItem.from_dict(record)
    except ValueError as e:
        raise CacheSerializationError(str(e)) from e
