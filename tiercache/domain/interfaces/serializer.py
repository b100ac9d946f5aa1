"""Interface for turning cache items into bytes and back.

The file tier depends on this contract to persist items; it does not define
the encoding itself.
"""

import abc
from typing import Any


class Serializer(abc.ABC):
    """Abstract Base Class for byte codecs."""

    #: Short name used in configuration (e.g. 'pickle').
    name: str = ""

    @abc.abstractmethod
    def dumps(self, obj: Any) -> bytes:
        """Encodes an object to bytes.

        Raises:
            CacheSerializationError: If the object cannot be encoded.
        """
        pass

    @abc.abstractmethod
    def loads(self, data: bytes) -> Any:
        """Decodes bytes produced by ``dumps``.

        Raises:
            CacheSerializationError: If the bytes are malformed or incompatible.
        """
        pass
