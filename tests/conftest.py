import os
import pytest
from pathlib import Path

from tiercache.core import cache_factory
from tiercache.infrastructure.cache.file_cache import FileCache
from tiercache.infrastructure.cache.memory_cache import MemoryCache
from tiercache.infrastructure.config import settings


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Provides a FakeClock starting at a fixed instant."""
    return FakeClock()

@pytest.fixture
def memory_cache(clock: FakeClock):
    """Fixture to create a MemoryCache driven by the fake clock."""
    return MemoryCache(clock=clock)

@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A dedicated cache directory inside pytest's tmp_path (not created yet)."""
    return tmp_path / "cache"

@pytest.fixture
def file_cache(cache_dir: Path, clock: FakeClock):
    """Fixture to create a FileCache rooted in a temporary directory."""
    return FileCache(cache_dir=str(cache_dir), clock=clock)

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path):
    """Keep tests away from the user's config file, .env and TIERCACHE_* variables."""
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml")
    monkeypatch.setattr(settings, "DEFAULT_CACHE_DIR", tmp_path / "default-cache")
    monkeypatch.setattr(settings, "_loaded", True)
    monkeypatch.setattr(settings, "_config", {})
    for name in [n for n in os.environ if n.startswith(settings.ENV_PREFIX)]:
        monkeypatch.delenv(name)
    settings.clear_test_config()
    cache_factory.reset_cache()
    yield
    settings.clear_test_config()
    cache_factory.reset_cache()
