import datetime
import pickle

import pytest

from tiercache.domain.models.common import CacheItem
from tiercache.domain.models.errors import CacheConfigurationError, CacheSerializationError
from tiercache.infrastructure.serialization.codecs import (
    JsonSerializer,
    PickleSerializer,
    get_serializer,
    marshal,
    unmarshal,
)


def test_get_serializer_by_name():
    assert isinstance(get_serializer(), PickleSerializer)
    assert isinstance(get_serializer("pickle"), PickleSerializer)
    assert isinstance(get_serializer("JSON"), JsonSerializer)

def test_get_serializer_rejects_unknown_name():
    with pytest.raises(CacheConfigurationError, match="Unknown serializer 'yaml'"):
        get_serializer("yaml")

def test_marshal_keeps_expiry_and_rich_payload():
    payload = {"when": datetime.date(2024, 1, 2), "ids": (1, 2), "raw": b"\xff"}
    item = CacheItem(value=payload, expires_at=1_700_000_123.5)

    restored = unmarshal(marshal(item))

    assert restored == item

def test_json_marshal_is_readable_on_disk():
    data = marshal(CacheItem(value={"name": "a"}), JsonSerializer())
    assert data == b'{"expires_at":0,"value":{"name":"a"}}'
    assert unmarshal(data, JsonSerializer()).value == {"name": "a"}

def test_json_rejects_non_json_values():
    with pytest.raises(CacheSerializationError, match="not JSON serializable"):
        JsonSerializer().dumps({"s": {1, 2}})

@pytest.mark.parametrize("data", [b"", b"garbage", b"\x80\x05\x95"])
def test_pickle_rejects_malformed_bytes(data):
    with pytest.raises(CacheSerializationError):
        PickleSerializer().loads(data)

def test_json_rejects_malformed_bytes():
    with pytest.raises(CacheSerializationError, match="Malformed JSON"):
        JsonSerializer().loads(b"{not json")

def test_unmarshal_rejects_foreign_record():
    with pytest.raises(CacheSerializationError, match="Not a cache item record"):
        unmarshal(pickle.dumps(["just", "a", "list"]))
