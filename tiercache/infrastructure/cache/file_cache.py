"""File-backed cache tier.

Wraps a `MemoryCache` and mirrors every entry to its own file on disk, so
entries survive a process restart. Reads check memory first and fall back to
the file, repopulating memory on a hit. Writes update memory first, then the
file.

File layout: ``{cache_dir}/{hash[0:6]}/{prefix}{hash}.data`` where ``hash`` is
the hex MD5 of ``security_key + key``.
"""

import hashlib
import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

# Domain Layer Imports
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.interfaces.serializer import Serializer
from tiercache.domain.models.common import CacheItem, CacheKey, CachePrefix, FilePath
from tiercache.domain.models.errors import CacheError, CacheSerializationError, CacheStorageError

# Infrastructure Layer Imports
from tiercache.infrastructure.cache.memory_cache import MemoryCache
from tiercache.infrastructure.serialization.codecs import get_serializer, marshal, unmarshal

logger = logging.getLogger(__name__)

CACHE_FILE_SUFFIX = ".data"
SHARD_LENGTH = 6  # Hex chars of the hash used as the subdirectory name
DIR_MODE = 0o755


class FileCache(CacheService):
    """Memory cache mirrored to one file per key."""

    def __init__(
        self,
        cache_dir: str = "",
        prefix: CachePrefix = CachePrefix(""),
        security_key: str = "",
        serializer: Optional[Serializer] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initializes the file cache.

        Args:
            cache_dir: Base directory for cache files. Empty means the system temp dir.
            prefix: Prepended to every derived file name (namespacing, not a directory).
            security_key: Salts the file name hash. Not encryption.
            serializer: Codec for the on-disk format. Defaults to pickle.
            clock: Returns the current Unix time in seconds.
        """
        self.cache_dir = str(cache_dir) if cache_dir else tempfile.gettempdir()
        self.prefix = prefix or ""
        self.security_key = security_key or ""
        self.serializer = serializer or get_serializer()
        self.memory = MemoryCache(clock=clock)
        logger.info(f"FileCache initialized at {self.cache_dir} (serializer={self.serializer.name})")

    def get_filename(self, key: CacheKey) -> FilePath:
        """Derives the deterministic file path for a key."""
        source = self.security_key + key if self.security_key else key
        digest = hashlib.md5(source.encode("utf-8")).hexdigest()
        return FilePath(
            os.path.join(self.cache_dir, digest[:SHARD_LENGTH], f"{self.prefix}{digest}{CACHE_FILE_SUFFIX}")
        )

    def _fail(self, error: CacheError) -> CacheError:
        self.memory.record_error(error)
        return error

    def _load(self, key: CacheKey) -> Optional[CacheItem]:
        """Reads the live item for a key from disk.

        A missing file is a plain miss. An unreadable or corrupt file is
        recorded as the last error and also reported as a miss. An expired
        file is deleted along with any memory entry.
        """
        path = Path(self.get_filename(key))
        with self.memory.lock:
            try:
                data = path.read_bytes()
            except FileNotFoundError:
                logger.debug(f"File cache MISS for key: {key}")
                return None
            except OSError as e:
                self._fail(CacheStorageError(f"Failed to read cache file {path}: {e}", key=key, path=str(path)))
                logger.warning(f"Failed to read cache file {path}: {e}")
                return None

            try:
                item = unmarshal(data, self.serializer)
            except CacheSerializationError as e:
                e.key = key
                self._fail(e)
                logger.warning(f"Corrupt cache file {path}: {e}")
                return None

            if item.is_expired(self.memory.now()):
                logger.debug(f"File cache EXPIRED key: {key}. Removing file.")
                try:
                    self.delete(key)
                except CacheError as e:
                    logger.warning(f"Failed to remove expired cache file {path}: {e}")
                return None

            self.memory.put_item(key, item)
            logger.debug(f"File cache HIT for key: {key}")
            return item

    # --- CacheService Interface Implementation ---

    def has(self, key: CacheKey) -> bool:
        if self.memory.has(key):
            return True
        return self._load(key) is not None

    def get(self, key: CacheKey, default: Any = None) -> Any:
        item = self.memory.get_item(key)
        if item is None:
            item = self._load(key)
        return default if item is None else item.value

    def set(self, key: CacheKey, value: Any, ttl: float = 0) -> None:
        with self.memory.lock:
            # Persist exactly the item memory now holds, not the raw value.
            item = self.memory.store(key, value, ttl)
            try:
                data = marshal(item, self.serializer)
            except CacheSerializationError as e:
                e.key = key
                raise self._fail(e)

            path = Path(self.get_filename(key))
            try:
                path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
                path.write_bytes(data)
            except OSError as e:
                logger.error(f"Failed to write cache file {path}: {e}")
                raise self._fail(
                    CacheStorageError(f"Failed to write cache file {path}: {e}", key=key, path=str(path))
                ) from e
        logger.debug(f"File cache PUT key: {key}, file={path}")

    def delete(self, key: CacheKey) -> None:
        self.memory.delete(key)

        path = Path(self.get_filename(key))
        with self.memory.lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return
            except OSError as e:
                logger.error(f"Failed to delete cache file {path}: {e}")
                raise self._fail(
                    CacheStorageError(f"Failed to delete cache file {path}: {e}", key=key, path=str(path))
                ) from e
        logger.debug(f"Deleted cache file for key: {key}")

    def delete_multi(self, keys: Iterable[CacheKey]) -> None:
        for key in keys:
            try:
                self.delete(key)
            except CacheError as e:
                logger.warning(f"Failed to delete cache key {key}: {e}")

    def clear(self) -> None:
        """Removes known entry files, empties memory, then deletes the whole cache_dir.

        Files for keys never loaded by this process are removed too, along
        with anything else stored under ``cache_dir``. Point the cache at a
        dedicated directory: with the default (system temp dir) this deletes
        the temp dir's contents.
        """
        with self.memory.lock:
            for key in self.memory.keys():
                path = Path(self.get_filename(key))
                try:
                    path.unlink()
                except FileNotFoundError:
                    continue
                except OSError as e:
                    logger.error(f"Failed to remove cache file {path} while clearing: {e}")
                    raise self._fail(
                        CacheStorageError(f"Failed to remove cache file {path}: {e}", key=key, path=str(path))
                    ) from e

            self.memory.clear()

            try:
                shutil.rmtree(self.cache_dir)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error(f"Failed to remove cache directory {self.cache_dir}: {e}")
                raise self._fail(
                    CacheStorageError(f"Failed to remove cache directory {self.cache_dir}: {e}", path=self.cache_dir)
                ) from e
        logger.info(f"Cleared file cache at: {self.cache_dir}")

    def count(self) -> int:
        return self.memory.count()

    @property
    def last_error(self) -> Optional[Exception]:
        return self.memory.last_error
