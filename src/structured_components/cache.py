"""
Discovery Cache - Memoized Component Scans

Caches scanner results per directory in a key/value store with expiry, and
keeps a master list of every key it issued so all entries can be cleared
without enumerating the store.

Known limitation: the master key list is updated read-modify-write without
locking. Two processes populating or clearing the cache at the same time can
leave it slightly stale; the next full scan or clear repairs it.
"""

import hashlib
import json
import logging
import sqlite3
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from .scanner import ComponentRecord, ComponentScanner, log_scan_failure

logger = logging.getLogger(__name__)

CACHE_PREFIX = "structured-components"
FILES_TYPE = "files"
KEYS_TYPE = "keys"
CACHE_TTL = 3600  # 1 hour
KEY_REGISTRY_TTL = 86400  # 24 hours


def cache_key(type_: str, directory: str | None = None) -> str:
    """
    Build a cache key.

    Args:
        type_: Entry type ("files" for scan results)
        directory: Scanned group location (omitted for the root directory)

    Returns:
        ``structured-components-<type>[-<md5(directory)>]``
    """
    key = f"{CACHE_PREFIX}-{type_}"
    if directory:
        key += "-" + hashlib.md5(directory.encode()).hexdigest()
    return key


MASTER_KEY = cache_key(KEYS_TYPE)


class CacheStore(ABC):
    """Key/value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for key, or default when missing or expired."""

    @abstractmethod
    def put(self, key: str, value: Any, ttl: int) -> None:
        """Store value under key for ttl seconds."""

    @abstractmethod
    def forget(self, key: str) -> None:
        """Remove key if present."""

    def has(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryCacheStore(CacheStore):
    """In-process cache store."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return default
        return value

    def put(self, key: str, value: Any, ttl: int) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def forget(self, key: str) -> None:
        self._entries.pop(key, None)


class SQLiteCacheStore(CacheStore):
    """SQLite-backed cache store shared between processes.

    Values must be JSON serializable.
    """

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS cache (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,          -- JSON encoded value
        expires_at REAL NOT NULL      -- Unix timestamp
    );
    """

    def __init__(self, db_path: Path, clock=time.time):
        """
        Initialize store.

        Args:
            db_path: SQLite database file (created with its parent directory)
        """
        self.db_path = Path(db_path)
        self._clock = clock
        self._ensure_db_exists()

    def _ensure_db_exists(self):
        """Create database and schema if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.connection() as conn:
            conn.executescript(self.SCHEMA)

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Yields:
            sqlite3.Connection, committed on success and rolled back on error
        """
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value, expires_at FROM cache WHERE key = ?", (key,)
            ).fetchone()
            if row is None:
                return default
            if row[1] <= self._clock():
                conn.execute("DELETE FROM cache WHERE key = ?", (key,))
                return default
        return json.loads(row[0])

    def put(self, key: str, value: Any, ttl: int) -> None:
        with self.connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO cache (key, value, expires_at) VALUES (?, ?, ?)",
                (key, json.dumps(value), self._clock() + ttl),
            )

    def forget(self, key: str) -> None:
        with self.connection() as conn:
            conn.execute("DELETE FROM cache WHERE key = ?", (key,))


class DiscoveryCache:
    """Transparent caching wrapper around ComponentScanner.scan()."""

    def __init__(
        self,
        scanner: ComponentScanner,
        store: CacheStore,
        enabled: bool = True,
        ttl: int = CACHE_TTL,
    ):
        self.scanner = scanner
        self.store = store
        self.enabled = enabled
        self.ttl = ttl

    def get_or_compute(self, directory: str | None = None) -> list[ComponentRecord]:
        """
        Return component records for a directory, scanning on cache miss.

        Cached records are returned as stored; they are not re-checked against
        the filesystem until the entry expires or is invalidated. A missing
        directory or a failed scan yields no records and is not cached.
        """
        if not self.enabled:
            return self.scanner.scan(directory)

        key = cache_key(FILES_TYPE, directory)
        cached = self.store.get(key)
        if cached is not None:
            logger.debug(f"Structured Components: Cache hit for {key}")
            return [ComponentRecord.from_dict(item) for item in cached]

        try:
            records = self.scanner.find(directory)
        except Exception as e:
            log_scan_failure(directory, e)
            return []

        self.store.put(key, [record.to_dict() for record in records], self.ttl)
        self._remember(key)
        return records

    def registered_keys(self) -> list[str]:
        """Keys currently listed in the master key registry."""
        return list(self.store.get(MASTER_KEY, []))

    def invalidate(self, key: str) -> None:
        """Remove one cache entry and drop it from the master key registry."""
        self.store.forget(key)

        keys = [k for k in self.registered_keys() if k != key]
        if keys:
            self.store.put(MASTER_KEY, keys, KEY_REGISTRY_TTL)
        else:
            self.store.forget(MASTER_KEY)

    def invalidate_all(self) -> None:
        """Remove every registered cache entry, then the registry itself."""
        for key in self.registered_keys():
            self.store.forget(key)

        self.store.forget(MASTER_KEY)
        logger.info("Structured Components: Cache cleared")

    def _remember(self, key: str) -> None:
        keys = self.registered_keys()
        if key not in keys:
            keys.append(key)
            self.store.put(MASTER_KEY, keys, KEY_REGISTRY_TTL)
