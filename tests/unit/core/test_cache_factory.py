import tempfile
from pathlib import Path

import pytest

from tiercache.core.cache_factory import create_cache, get_cache, reset_cache
from tiercache.domain.models.errors import CacheConfigurationError
from tiercache.infrastructure.cache.file_cache import FileCache
from tiercache.infrastructure.cache.memory_cache import MemoryCache
from tiercache.infrastructure.config import settings
from tiercache.infrastructure.serialization.codecs import JsonSerializer, PickleSerializer


def test_memory_backend():
    cache = create_cache("memory")
    assert isinstance(cache, MemoryCache)

def test_file_backend_reads_settings(tmp_path: Path):
    settings.set_config_for_testing({
        "cache.dir": str(tmp_path / "c"),
        "cache.prefix": "pre_",
        "cache.security_key": "salt",
        "cache.serializer": "json",
    })

    cache = create_cache()

    assert isinstance(cache, FileCache)
    assert cache.cache_dir == str(tmp_path / "c")
    assert cache.prefix == "pre_"
    assert cache.security_key == "salt"
    assert isinstance(cache.serializer, JsonSerializer)

def test_overrides_win_over_settings(tmp_path: Path, clock):
    settings.set_config_for_testing({"cache.dir": "/should/not/be/used", "cache.serializer": "json"})

    cache = create_cache("file", cache_dir=str(tmp_path), serializer="pickle", clock=clock)

    assert cache.cache_dir == str(tmp_path)
    assert isinstance(cache.serializer, PickleSerializer)
    cache.set("k", "v", ttl=1)
    clock.advance(1)
    assert cache.get("k") is None

def test_memory_backend_accepts_clock(clock):
    cache = create_cache("memory", clock=clock)
    cache.set("k", "v", ttl=1)
    clock.advance(1)
    assert cache.get("k") is None

def test_unknown_backend():
    with pytest.raises(CacheConfigurationError, match="Unknown cache backend 'redis'"):
        create_cache("redis")

def test_unknown_serializer_setting(tmp_path: Path):
    settings.set_config_for_testing({"cache.dir": str(tmp_path), "cache.serializer": "xml"})
    with pytest.raises(CacheConfigurationError):
        create_cache("file")

def test_get_cache_is_a_singleton_until_reset():
    settings.set_config_for_testing({"cache.backend": "memory"})

    first = get_cache()
    assert get_cache() is first

    reset_cache()
    assert get_cache() is not first

def test_zero_config_file_cache_stays_out_of_temp_dir(tmp_path: Path, monkeypatch):
    fake_tmp = tmp_path / "system-tmp"
    fake_tmp.mkdir()
    (fake_tmp / "unrelated.txt").write_text("keep me")
    monkeypatch.setattr(tempfile, "tempdir", str(fake_tmp))

    cache = create_cache()
    assert cache.cache_dir == settings.get_cache_dir()
    assert cache.cache_dir != tempfile.gettempdir()

    cache.set("k", "v")
    cache.clear()

    assert (fake_tmp / "unrelated.txt").exists()

def test_serializer_override_skips_serializer_setting(tmp_path: Path):
    settings.set_config_for_testing({"cache.serializer": "xml"})

    cache = create_cache("file", cache_dir=str(tmp_path), serializer=JsonSerializer())

    assert isinstance(cache.serializer, JsonSerializer)
