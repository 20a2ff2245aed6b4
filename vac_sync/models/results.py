"""Result models for sync, list and remove operations."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import Field

from .base import VacBaseModel, VacFrozenModel
from .entries import RemoteEntry


class SyncStats(VacFrozenModel):
    """
    Statistics of one sync (or removal) run. Immutable once returned.

    Attributes:
        total: Number of catalog entries considered
        up_to_date: Entries whose cached file matched the remote version
        downloaded: Entries downloaded and recorded successfully
        failed: Entries whose download failed (cache left untouched)
        removed: Entries removed from the cache and disk
        verified: Up-to-date entries whose content hash was checked
        repaired: Downloads triggered by a missing or corrupted local file
    """

    total: int = Field(default=0, ge=0)
    up_to_date: int = Field(default=0, ge=0)
    downloaded: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    removed: int = Field(default=0, ge=0)
    verified: int = Field(default=0, ge=0)
    repaired: int = Field(default=0, ge=0)

    @property
    def attempted(self) -> int:
        """Number of download attempts."""
        return self.downloaded + self.failed

    @property
    def has_failures(self) -> bool:
        """True if at least one download failed."""
        return self.failed > 0


class SyncTally(VacBaseModel):
    """Mutable counters accumulated while a run is in progress."""

    total: int = 0
    up_to_date: int = 0
    downloaded: int = 0
    failed: int = 0
    removed: int = 0
    verified: int = 0
    repaired: int = 0

    def freeze(self) -> SyncStats:
        """Snapshot the counters into an immutable SyncStats."""
        return SyncStats(**self.model_dump())


class FetchResult(VacFrozenModel):
    """
    Outcome of downloading one chart.

    Attributes:
        path: Final location of the file
        bytes_written: Number of bytes written to disk
        content_hash: SHA-256 of the written bytes (hex)
    """

    path: Path
    bytes_written: int = Field(ge=0)
    content_hash: str


class AvailabilityEntry(VacFrozenModel):
    """A remote entry together with whether it is cached locally."""

    entry: RemoteEntry
    locally_present: bool = False


class RemoveResult(VacBaseModel):
    """
    Outcome of removing one chart from the cache.

    Attributes:
        identity: OACI code that was requested
        subtype: Chart subtype that was requested
        database_deleted: Whether a cache record existed and was deleted
        file_deleted: Whether a file was deleted from disk
        file_name: File name of the removed record, if any
    """

    identity: str
    subtype: str
    database_deleted: bool = False
    file_deleted: bool = False
    file_name: Optional[str] = None

    def __bool__(self) -> bool:
        return self.database_deleted


class CacheSummary(VacFrozenModel):
    """Aggregate view of the version cache."""

    count: int = Field(default=0, ge=0)
    oldest: Optional[datetime] = None
    newest: Optional[datetime] = None


__all__ = [
    "SyncStats",
    "SyncTally",
    "FetchResult",
    "AvailabilityEntry",
    "RemoveResult",
    "CacheSummary",
]
