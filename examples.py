#!/usr/bin/env python3
"""
Examples of programmatic usage of tiercache.

Demonstrates the memory tier, the file tier surviving a "restart", TTL
expiry, and function result caching.

Usage:
    python examples.py
"""

import logging
import tempfile
import time
from pathlib import Path

from tiercache import CacheError, FileCache, MemoryCache, cache_result
from tiercache.infrastructure.monitoring.logger_setup import setup_logging


def example_memory_cache():
    """Basic operations on the in-memory tier."""
    print("\n=== Memory cache ===")
    cache = MemoryCache()
    cache.set("a", 42)
    cache.set_multi({"b": "x", "c": [1, 2, 3]}, ttl=60)
    print(f"has('a') = {cache.has('a')}, get('a') = {cache.get('a')}")
    print(f"get_multi(['a', 'missing', 'c']) = {cache.get_multi(['a', 'missing', 'c'])}")
    cache.delete("a")
    print(f"after delete: has('a') = {cache.has('a')}, count() = {cache.count()}")


def example_file_cache(cache_dir: Path):
    """Entries written by one FileCache are read back by a fresh one."""
    print("\n=== File cache ===")
    first = FileCache(cache_dir=str(cache_dir), prefix="demo_", security_key="s3cret")
    first.set("user:1", {"name": "Ada"})
    print(f"stored at: {first.get_filename('user:1')}")

    restarted = FileCache(cache_dir=str(cache_dir), prefix="demo_", security_key="s3cret")
    print(f"fresh instance count() = {restarted.count()}")
    print(f"fresh instance get('user:1') = {restarted.get('user:1')}")
    print(f"after disk hit count() = {restarted.count()}")


def example_ttl(cache_dir: Path):
    """TTL expiry removes both the memory entry and the backing file."""
    print("\n=== TTL expiry ===")
    cache = FileCache(cache_dir=str(cache_dir))
    cache.set("b", "x", ttl=1)
    path = Path(cache.get_filename("b"))
    print(f"immediately: get('b') = {cache.get('b')!r}, file exists = {path.exists()}")
    time.sleep(1.1)
    print(f"after 1.1s: get('b') = {cache.get('b')!r}, file exists = {path.exists()}")


def example_cache_result(cache_dir: Path):
    """Memoize a slow function through the file tier."""
    print("\n=== cache_result decorator ===")
    cache = FileCache(cache_dir=str(cache_dir))

    @cache_result(cache=cache, ttl=300, prefix="square:")
    def slow_square(n: int) -> int:
        time.sleep(0.5)
        return n * n

    for attempt in (1, 2):
        start = time.perf_counter()
        result = slow_square(12)
        print(f"call {attempt}: {result} in {time.perf_counter() - start:.3f}s")


def example_errors(cache_dir: Path):
    """A corrupt cache file degrades to a miss; the cause is kept in last_error."""
    print("\n=== Error handling ===")
    cache = FileCache(cache_dir=str(cache_dir))
    path = Path(cache.get_filename("broken"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"not a cache item")
    print(f"get('broken') = {cache.get('broken')!r}")
    print(f"last_error = {cache.last_error!r}")

    try:
        cache.clear()
        print(f"cleared; cache dir exists = {Path(cache.cache_dir).exists()}")
    except CacheError as e:
        print(f"clear failed: {e}")


def main():
    setup_logging(log_level=logging.WARNING)
    with tempfile.TemporaryDirectory() as tmp:
        base = Path(tmp)
        example_memory_cache()
        example_file_cache(base / "restart")
        example_ttl(base / "ttl")
        example_cache_result(base / "memo")
        example_errors(base / "errors")


if __name__ == "__main__":
    main()
