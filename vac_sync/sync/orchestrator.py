"""
Sync orchestrator mirroring the remote chart catalog into local storage.

One run fetches the whole catalog once, then walks it entry by entry:

    fetch -> filter -> decide (SKIP / DOWNLOAD) -> retrieve -> upsert -> tally

A chart is downloaded when it is not cached, when the remote version
differs from the cached one, or when the cached file no longer matches its
record (missing, wrong size or wrong hash). Each successful download is
committed to the version cache immediately, so an interrupted run can simply
be started again.
"""

import enum
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..api.auth import AuthTokenGenerator
from ..api.artifact_client import ArtifactClient
from ..api.catalog_client import CatalogClient
from ..exceptions import ApiError, FileSystemError, IntegrityError, NetworkError, VacSyncError
from ..models.context import AuthSettings, SyncContext, SyncRequest
from ..models.entries import CacheRecord, RemoteEntry
from ..models.results import AvailabilityEntry, RemoveResult, SyncStats, SyncTally
from ..store.version_cache import VersionCache
from ..utils.constants import AIRPORT_SUBTYPE
from ..utils.path_utils import compute_file_hash, ensure_directory_exists, get_chart_path

# Failures that only affect the entry being downloaded
DOWNLOAD_ERRORS = (NetworkError, ApiError, FileSystemError, IntegrityError)


class SyncAction(enum.Enum):
    """Decision taken for one catalog entry."""

    UP_TO_DATE = "up_to_date"
    DOWNLOAD = "download"
    REPAIR = "repair"


class SyncOrchestrator:
    """
    Drives sync, list and remove operations over one cache and one download directory.

    The orchestrator owns no state of its own beyond what it reads and writes
    through the version cache.
    """

    def __init__(
        self,
        cache: VersionCache,
        catalog: Optional[CatalogClient],
        retriever: Optional[ArtifactClient],
        download_dir: Union[str, Path],
        subtype: str = AIRPORT_SUBTYPE,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            cache: Version cache recording the last verified download per chart
            catalog: Client returning the remote catalog (None for cache-only use)
            retriever: Client downloading chart files (None for cache-only use)
            download_dir: Directory charts are stored in
            subtype: Chart subtype to mirror
        """
        self.cache = cache
        self.catalog = catalog
        self.retriever = retriever
        self.download_dir = Path(download_dir).expanduser()
        self.subtype = subtype

    @classmethod
    def from_context(cls, context: SyncContext, auth: AuthSettings) -> "SyncOrchestrator":
        """
        Build an orchestrator and its collaborators from resolved settings.

        Args:
            context: Resolved paths and API settings
            auth: Credentials for the VAC API

        Returns:
            Ready to use orchestrator; call close() when done

        Raises:
            DatabaseError: If the version cache cannot be opened
        """
        generator = AuthTokenGenerator(auth)
        cache = VersionCache(context.db_path)
        catalog = CatalogClient(context.base_url, generator, timeout=context.timeout)
        retriever = ArtifactClient(context.base_url, generator, timeout=context.timeout)
        return cls(cache, catalog, retriever, context.download_dir, subtype=context.subtype)

    def close(self) -> None:
        """Close the cache and the HTTP clients."""
        if self.catalog is not None:
            self.catalog.close()
        if self.retriever is not None:
            self.retriever.close()
        self.cache.close()

    def __enter__(self) -> "SyncOrchestrator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def sync(self, request: Optional[SyncRequest] = None) -> SyncStats:
        """
        Bring the local mirror up to date with the remote catalog.

        Args:
            request: Optional identity filter; entries outside it are neither
                touched nor counted

        Returns:
            Statistics of the run

        Raises:
            FileSystemError: If the download directory cannot be created
            NetworkError, ApiError: If the catalog could not be fetched
            DatabaseError: If the version cache fails
        """
        request = request or SyncRequest()
        ensure_directory_exists(self.download_dir)

        summary = self.cache.summary()
        if summary.count == 0:
            logging.info("Version cache is empty, every %s chart will be downloaded", self.subtype)
        else:
            logging.info(
                "Version cache holds %d chart(s), oldest %s, newest %s", summary.count, summary.oldest, summary.newest
            )

        entries = self._fetch_entries(request)
        tally = SyncTally(total=len(entries))

        for entry in entries:
            action = self._decide(entry, tally)
            if action is SyncAction.UP_TO_DATE:
                tally.up_to_date += 1
                continue
            if action is SyncAction.REPAIR:
                tally.repaired += 1
            if self._download(entry):
                tally.downloaded += 1
            else:
                tally.failed += 1

        return tally.freeze()

    def _fetch_entries(self, request: SyncRequest) -> List[RemoteEntry]:
        if self.catalog is None or self.retriever is None:
            raise VacSyncError("Orchestrator was built without API clients")
        entries = self.catalog.fetch_all(self.subtype)
        if request.identity_filter is None:
            return entries

        matched = [entry for entry in entries if request.matches(entry.identity)]
        logging.info(
            "Filtering by OACI code(s) %s: matched %d of %d entries",
            ", ".join(sorted(request.identity_filter)),
            len(matched),
            len(entries),
        )
        if not matched:
            logging.warning("No catalog entry matches %s", ", ".join(sorted(request.identity_filter)))
        return matched

    def _decide(self, entry: RemoteEntry, tally: SyncTally) -> SyncAction:
        record = self.cache.get(entry.identity, entry.subtype)
        if record is None:
            logging.debug("%s: not cached", entry.identity)
            return SyncAction.DOWNLOAD
        if record.version != entry.version:
            logging.info("%s: version %s -> %s", entry.identity, record.version, entry.version)
            return SyncAction.DOWNLOAD

        try:
            self._verify(record, tally)
        except (IntegrityError, FileSystemError) as e:
            logging.warning("%s: %s, downloading again", entry.identity, e)
            return SyncAction.REPAIR

        logging.debug("%s: up to date (version %s)", entry.identity, record.version)
        return SyncAction.UP_TO_DATE

    def _verify(self, record: CacheRecord, tally: SyncTally) -> None:
        """
        Check that the cached file still matches its record.

        Records written before hashes were stored get their hash filled in
        from the file on disk.

        Raises:
            IntegrityError: If the file is missing or does not match
            FileSystemError: If the file cannot be read
        """
        path = get_chart_path(self.download_dir, record.file_name)
        if not path.is_file():
            raise IntegrityError(f"file {path} is missing")

        try:
            size = path.stat().st_size
        except OSError as e:
            raise FileSystemError(f"Failed to stat {path}: {e}") from e
        if size != record.file_size:
            raise IntegrityError(f"file {path} has {size} bytes, expected {record.file_size}")

        current_hash = compute_file_hash(path)
        if record.content_hash is None:
            logging.debug("%s: storing missing content hash", record.identity)
            self.cache.upsert(record.model_copy(update={"content_hash": current_hash}))
        elif current_hash != record.content_hash:
            raise IntegrityError(f"file {path} is corrupted (hash mismatch)")
        tally.verified += 1

    def _download(self, entry: RemoteEntry) -> bool:
        previous = self.cache.get(entry.identity, entry.subtype)
        try:
            result = self.retriever.fetch_artifact(entry, self.download_dir)
        except DOWNLOAD_ERRORS as e:
            logging.error("Failed to download %s: %s", entry.identity, e)
            return False

        if result.bytes_written != entry.file_size:
            logging.debug(
                "%s: catalog advertised %d bytes, received %d", entry.identity, entry.file_size, result.bytes_written
            )

        record = CacheRecord.from_download(entry, result.path.name, result.bytes_written, result.content_hash)
        self.cache.upsert(record)

        if previous is not None and previous.file_name != record.file_name:
            self._discard_file(previous.file_name)
        return True

    def _discard_file(self, file_name: str) -> bool:
        try:
            path = get_chart_path(self.download_dir, file_name)
            if not path.exists():
                return False
            path.unlink()
        except (OSError, FileSystemError) as e:
            logging.warning("Could not remove stale chart %s: %s", file_name, e)
            return False
        logging.debug("Removed stale chart %s", path)
        return True

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_remote_vs_local(self, identity_filter: Optional[Iterable[str]] = None) -> List[AvailabilityEntry]:
        """
        List remote charts together with their local availability.

        Args:
            identity_filter: Optional OACI codes to restrict the listing to

        Returns:
            One AvailabilityEntry per remote chart, in catalog order
        """
        entries = self._fetch_entries(SyncRequest(identity_filter=identity_filter))
        listing = [
            AvailabilityEntry(entry=entry, locally_present=self.cache.get(entry.identity, entry.subtype) is not None)
            for entry in entries
        ]
        local_count = sum(1 for item in listing if item.locally_present)
        logging.info("%d of %d chart(s) are available locally", local_count, len(listing))
        return listing

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove(self, identity: str, subtype: Optional[str] = None) -> RemoveResult:
        """
        Delete a cached chart: its file and its cache record together.

        The file goes first; if it cannot be deleted the record is kept so
        the removal can be retried.

        Args:
            identity: OACI code
            subtype: Chart subtype (defaults to the orchestrator's subtype)

        Returns:
            RemoveResult, truthy when a record existed

        Raises:
            FileSystemError: If the chart file exists but cannot be deleted
            DatabaseError: If the version cache fails
        """
        identity = identity.strip().upper()
        subtype = (subtype or self.subtype).upper()
        result = RemoveResult(identity=identity, subtype=subtype)

        record = self.cache.get(identity, subtype)
        if record is None:
            logging.warning("Entry %s (%s) not found in the version cache", identity, subtype)
            return result

        result.file_name = record.file_name
        path = get_chart_path(self.download_dir, record.file_name)
        try:
            if path.exists():
                path.unlink()
                result.file_deleted = True
        except OSError as e:
            raise FileSystemError(f"Failed to delete {path}: {e}") from e

        result.database_deleted = self.cache.delete(identity, subtype)
        if result.file_deleted:
            logging.info("Deleted %s from the version cache and the filesystem", identity)
        else:
            logging.info("Deleted %s from the version cache (file was already missing)", identity)
        return result

    def remove_many(self, identities: Iterable[str], subtype: Optional[str] = None) -> SyncStats:
        """
        Remove several charts.

        Returns:
            SyncStats where ``total`` counts requested codes and ``removed`` the ones that existed
        """
        tally = SyncTally()
        for identity in identities:
            tally.total += 1
            if self.remove(identity, subtype):
                tally.removed += 1
        return tally.freeze()


__all__ = ["SyncAction", "SyncOrchestrator", "DOWNLOAD_ERRORS"]
