"""SQLiteStore — durable, single-file storage backend using sqlite3."""

from __future__ import annotations

import sqlite3
from types import TracebackType

from review_cache.exceptions import StoreError
from review_cache.stores.base import Store

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS review_cache (
    key   TEXT PRIMARY KEY NOT NULL,
    value TEXT NOT NULL
)
"""

_UPSERT = """
INSERT INTO review_cache (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


class SQLiteStore(Store):
    """Persistent store backed by a single SQLite file.

    Every write is committed immediately so that a record survives a
    process restart as soon as the mutating call returns.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
    """

    def __init__(self, db_path: str = "review_cache.db") -> None:
        self._db_path = db_path
        self._db: sqlite3.Connection | None = None

    def _connect(self) -> sqlite3.Connection:
        if self._db is None:
            try:
                db = sqlite3.connect(self._db_path)
            except sqlite3.Error as exc:
                raise StoreError("connect", detail=str(exc)) from exc
            try:
                db.execute(_CREATE_TABLE)
                db.commit()
            except sqlite3.Error as exc:
                db.close()
                raise StoreError("connect", detail=str(exc)) from exc
            self._db = db
        return self._db

    def close(self) -> None:
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> SQLiteStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── Store protocol ───────────────────────────────────────

    def get(self, key: str) -> str | None:
        db = self._connect()
        try:
            row = db.execute("SELECT value FROM review_cache WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError("get", key, str(exc)) from exc
        if row is None:
            return None
        value: str = row[0]
        return value

    def set(self, key: str, value: str) -> None:
        db = self._connect()
        try:
            db.execute(_UPSERT, (key, value))
            db.commit()
        except sqlite3.Error as exc:
            db.rollback()
            raise StoreError("set", key, str(exc)) from exc

    def delete(self, key: str) -> None:
        db = self._connect()
        try:
            db.execute("DELETE FROM review_cache WHERE key = ?", (key,))
            db.commit()
        except sqlite3.Error as exc:
            db.rollback()
            raise StoreError("delete", key, str(exc)) from exc

    def keys(self, prefix: str = "") -> list[str]:
        db = self._connect()
        # substr() instead of LIKE so that '%' and '_' in prefixes stay literal
        try:
            rows = db.execute(
                "SELECT key FROM review_cache WHERE substr(key, 1, ?) = ? ORDER BY rowid",
                (len(prefix), prefix),
            ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError("keys", prefix, str(exc)) from exc
        return [row[0] for row in rows]

    def clear(self) -> None:
        db = self._connect()
        try:
            db.execute("DELETE FROM review_cache")
            db.commit()
        except sqlite3.Error as exc:
            db.rollback()
            raise StoreError("clear", detail=str(exc)) from exc
