"""Local key-value blob store, one serialized snapshot per key.

Backed by a single `blobs` table. Every `put` replaces the whole value for the
key; there are no partial writes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class BlobStore:
    """Namespaced string blobs in a SQL table."""

    def __init__(self, engine: Engine, prefix: str = ""):
        self.engine = engine
        self.prefix = prefix
        self._init_table()

    def _init_table(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    "CREATE TABLE IF NOT EXISTS blobs ("
                    "  key TEXT PRIMARY KEY,"
                    "  value TEXT NOT NULL,"
                    "  updated_at TEXT NOT NULL"
                    ")"
                )
            )
        logger.info("Blob store ready on %s (prefix=%r)", self.engine.url, self.prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> str | None:
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT value FROM blobs WHERE key = :key"),
                {"key": self._key(key)},
            ).fetchone()
        return row[0] if row else None

    def put(self, key: str, value: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO blobs (key, value, updated_at) VALUES (:key, :value, :updated_at) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at"
                ),
                {
                    "key": self._key(key),
                    "value": value,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
            )

    def has(self, key: str) -> bool:
        return self.get(key) is not None
