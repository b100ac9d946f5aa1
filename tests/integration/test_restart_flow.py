import time
from pathlib import Path

from tiercache import FileCache, create_cache


def test_entries_survive_a_restart(tmp_path: Path):
    """A new FileCache on the same directory serves what the previous one stored."""
    cache_dir = tmp_path / "shared"
    writer = FileCache(cache_dir=str(cache_dir), prefix="app_", security_key="k")
    writer.set_multi({"user:1": {"name": "ada"}, "user:2": {"name": "alan"}})
    writer.set("session", "token", ttl=3600)

    reader = FileCache(cache_dir=str(cache_dir), prefix="app_", security_key="k")

    assert reader.get_multi(["user:1", "missing", "user:2"]) == [{"name": "ada"}, None, {"name": "alan"}]
    assert reader.get("session") == "token"
    assert reader.count() == 3

def test_different_security_key_does_not_see_entries(tmp_path: Path):
    FileCache(cache_dir=str(tmp_path), security_key="one").set("k", "v")
    assert FileCache(cache_dir=str(tmp_path), security_key="two").get("k") is None

def test_ttl_expiry_in_real_time(tmp_path: Path):
    cache = create_cache("file", cache_dir=str(tmp_path / "cache"))
    cache.set("b", "x", ttl=1)
    backing_file = Path(cache.get_filename("b"))

    assert cache.get("b") == "x"

    time.sleep(1.1)

    assert cache.get("b") is None
    assert not backing_file.exists()
