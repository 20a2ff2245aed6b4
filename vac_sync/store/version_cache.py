"""SQLite version cache for downloaded charts."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import DatabaseError
from ..models.entries import CacheRecord
from ..models.results import CacheSummary

SCHEMA_STATEMENT = """
    CREATE TABLE IF NOT EXISTS vac_cache (
        identity TEXT NOT NULL,
        subtype TEXT NOT NULL,
        version TEXT NOT NULL,
        file_name TEXT NOT NULL,
        file_size INTEGER NOT NULL,
        city TEXT NOT NULL,
        content_hash TEXT,
        last_updated DATETIME DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (identity, subtype)
    );
"""

RECORD_COLUMNS = "identity, subtype, version, file_name, file_size, city, content_hash, last_updated"

IN_MEMORY = ":memory:"

# Same layout as SQLite CURRENT_TIMESTAMP (UTC) so MIN/MAX compare correctly
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        # CURRENT_TIMESTAMP defaults are UTC without an offset
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _row_to_record(row: sqlite3.Row) -> CacheRecord:
    return CacheRecord(
        identity=row["identity"],
        subtype=row["subtype"],
        version=row["version"],
        file_name=row["file_name"],
        file_size=row["file_size"],
        city=row["city"],
        content_hash=row["content_hash"],
        last_updated=_parse_timestamp(row["last_updated"]),
    )


class VersionCache:
    """
    Durable map from (identity, subtype) to the last verified download.

    The primary key guarantees at most one record per chart. Every write is
    committed on its own, so an interrupted sync leaves a consistent cache.
    The cache only stores metadata; deleting chart files is up to the caller.
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        if str(db_path) == IN_MEMORY:
            self.db_path: Union[str, Path] = IN_MEMORY
        else:
            self.db_path = Path(db_path).expanduser()
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
            self._init_schema()
        except (sqlite3.Error, OSError) as e:
            raise DatabaseError(f"Failed to open version cache {self.db_path}: {e}") from e
        logging.debug("Opened version cache %s", self.db_path)

    def _init_schema(self) -> None:
        with self._conn:
            self._conn.execute(SCHEMA_STATEMENT)
            self._migrate_schema()

    def _migrate_schema(self) -> None:
        columns = {row["name"] for row in self._conn.execute("PRAGMA table_info(vac_cache);")}
        if "content_hash" not in columns:
            logging.info("Adding content_hash column to version cache")
            self._conn.execute("ALTER TABLE vac_cache ADD COLUMN content_hash TEXT;")

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "VersionCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get(self, identity: str, subtype: str) -> Optional[CacheRecord]:
        """Point lookup of one record."""
        try:
            row = self._conn.execute(
                f"SELECT {RECORD_COLUMNS} FROM vac_cache WHERE identity = ? AND subtype = ?;",
                (identity, subtype),
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to read cache record {identity}/{subtype}: {e}") from e
        return _row_to_record(row) if row is not None else None

    def upsert(self, record: CacheRecord) -> CacheRecord:
        """
        Insert or replace the record for (identity, subtype).

        ``last_updated`` is set to the current time.

        Returns:
            The record as stored
        """
        stored = record.model_copy(update={"last_updated": datetime.now(timezone.utc).replace(microsecond=0)})
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO vac_cache ({RECORD_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?);",
                    (
                        stored.identity,
                        stored.subtype,
                        stored.version,
                        stored.file_name,
                        stored.file_size,
                        stored.city,
                        stored.content_hash,
                        stored.last_updated.strftime(TIMESTAMP_FORMAT),
                    ),
                )
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to store cache record {record.identity}/{record.subtype}: {e}") from e
        return stored

    def delete(self, identity: str, subtype: str) -> bool:
        """
        Remove one record.

        Returns:
            True if a record existed
        """
        try:
            with self._conn:
                cursor = self._conn.execute(
                    "DELETE FROM vac_cache WHERE identity = ? AND subtype = ?;", (identity, subtype)
                )
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to delete cache record {identity}/{subtype}: {e}") from e
        return cursor.rowcount > 0

    def list(self) -> List[CacheRecord]:
        """Snapshot of all records, ordered by identity."""
        try:
            rows = self._conn.execute(
                f"SELECT {RECORD_COLUMNS} FROM vac_cache ORDER BY identity, subtype;"
            ).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to list cache records: {e}") from e
        return [_row_to_record(row) for row in rows]

    def is_empty(self) -> bool:
        return self.summary().count == 0

    def summary(self) -> CacheSummary:
        """Record count plus the oldest and newest update times."""
        try:
            row = self._conn.execute(
                "SELECT COUNT(*) AS count, MIN(last_updated) AS oldest, MAX(last_updated) AS newest FROM vac_cache;"
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to summarize version cache: {e}") from e
        return CacheSummary(
            count=row["count"],
            oldest=_parse_timestamp(row["oldest"]),
            newest=_parse_timestamp(row["newest"]),
        )


__all__ = ["VersionCache"]
