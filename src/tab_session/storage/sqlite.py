"""SQLite-backed key-value store for durable sessions."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from tab_session.config import DEFAULT_DB_PATH
from tab_session.exceptions import StorageReadError, StorageWriteError
from tab_session.storage.base import BaseKeyValueStore

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore(BaseKeyValueStore):
    """One ``kv`` table in a local SQLite file; a connection per operation."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = Path(db_path or DEFAULT_DB_PATH)
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (sqlite3.Error, OSError) as e:
            raise StorageReadError(f"Cannot open session database at {self.db_path}: {e}") from e
        if not self._initialized:
            try:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.close()
                raise StorageWriteError(f"Failed to initialize session database: {e}") from e
            self._initialized = True
            logger.debug("Initialized session database at %s", self.db_path)
        return conn

    def get(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageReadError(f"Failed reading {key}: {e}") from e
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(f"Failed writing {key}: {e}") from e
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(f"Failed deleting {key}: {e}") from e
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        except sqlite3.Error as e:
            raise StorageReadError(f"Failed listing keys: {e}") from e
        finally:
            conn.close()
        return [row[0] for row in rows]
