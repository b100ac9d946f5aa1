"""Serialization Implementations.

Contains byte codecs for cache items (pickle, JSON), each implementing the
`Serializer` interface from the domain layer.
Bounded Context: Cache Persistence
"""

from tiercache.infrastructure.serialization.codecs import (
    JsonSerializer,
    PickleSerializer,
    get_serializer,
    marshal,
    unmarshal,
)

__all__ = ['JsonSerializer', 'PickleSerializer', 'get_serializer', 'marshal', 'unmarshal']
