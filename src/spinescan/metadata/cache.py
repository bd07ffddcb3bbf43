# ABOUTME: On-disk SQLite cache of catalog lookups, keyed by source and normalized query.
# ABOUTME: Entries expire lazily after a week; every storage failure is swallowed.

import json
import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

from spinescan.metadata.types import LookupResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = 7 * 24 * 60 * 60.0

_SCHEMA = """
CREATE TABLE IF NOT EXISTS lookups (
    key       TEXT PRIMARY KEY,
    data      TEXT NOT NULL,
    timestamp REAL NOT NULL
);
"""


def cache_key(source: str, query: str) -> str:
    """`<source>:<query>` with the query lowercased and trimmed."""
    return f"{source}:{query.lower().strip()}"


class LookupCache:
    """Persistent cache of LookupResults.

    Caching is an optimization only: a failing database never breaks a
    lookup. Reads that fail are misses and writes that fail are dropped.
    Stale entries are treated as misses but left in place until
    `purge_expired` runs.
    """

    def __init__(
        self,
        path: Path,
        *,
        max_age: float = DEFAULT_MAX_AGE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._path = path
        self._max_age = max_age
        self._clock = clock
        self._conn: sqlite3.Connection | None = None

    def _connect(self) -> sqlite3.Connection:
        if self._conn is None:
            if str(self._path) != ":memory:":
                self._path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._path))
            conn.executescript(_SCHEMA)
            self._conn = conn
        return self._conn

    def get(self, source: str, query: str) -> LookupResult | None:
        """Return the cached result, or None on a miss, a stale entry, or any error."""
        key = cache_key(source, query)
        try:
            row = self._connect().execute(
                "SELECT data, timestamp FROM lookups WHERE key = ?", (key,)
            ).fetchone()
            if row is None:
                return None
            data, timestamp = row
            if self._clock() - timestamp >= self._max_age:
                return None
            return LookupResult.from_dict(json.loads(data))
        except (sqlite3.Error, OSError, ValueError, TypeError, AttributeError) as exc:
            logger.debug("Cache read failed for %s: %s", key, exc)
            return None

    def set(self, source: str, query: str, result: LookupResult) -> None:
        """Store a result, replacing any previous entry for the key."""
        key = cache_key(source, query)
        try:
            conn = self._connect()
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO lookups (key, data, timestamp) VALUES (?, ?, ?)",
                    (key, json.dumps(result.to_dict()), self._clock()),
                )
        except (sqlite3.Error, OSError, ValueError, TypeError) as exc:
            logger.debug("Cache write failed for %s: %s", key, exc)

    def purge_expired(self) -> int:
        """Delete stale entries. Returns how many were removed (0 on error)."""
        cutoff = self._clock() - self._max_age
        try:
            conn = self._connect()
            with conn:
                cursor = conn.execute("DELETE FROM lookups WHERE timestamp <= ?", (cutoff,))
            return cursor.rowcount
        except (sqlite3.Error, OSError) as exc:
            logger.debug("Cache purge failed: %s", exc)
            return 0

    def clear(self) -> int:
        """Delete every entry. Returns how many were removed (0 on error)."""
        try:
            conn = self._connect()
            with conn:
                cursor = conn.execute("DELETE FROM lookups")
            return cursor.rowcount
        except (sqlite3.Error, OSError) as exc:
            logger.debug("Cache clear failed: %s", exc)
            return 0

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
