"""
Exception types raised by the synchronization engine.

Catalog failures (NetworkError, ApiError) are fatal to a sync run and reach
the caller unchanged. Per-artifact failures are caught by the orchestrator,
counted, and never touch the version cache.
"""

from typing import Optional


class VacSyncError(Exception):
    """Base class for all vac-sync errors."""


class NetworkError(VacSyncError):
    """Transport failure or timeout while talking to the remote API."""


class ApiError(VacSyncError):
    """Non-success HTTP response (or unreadable body) from the remote API."""

    def __init__(self, status: int, message: Optional[str] = None, url: Optional[str] = None) -> None:
        """
        Initialize the API error.

        Args:
            status: HTTP status code returned by the server
            message: Optional human readable detail
            url: Optional URL of the failing request
        """
        self.status = status
        self.url = url
        detail = message or f"API returned error status {status}"
        if url:
            detail = f"{detail} ({url})"
        super().__init__(detail)


class DatabaseError(VacSyncError):
    """Version cache storage failure."""


class FileSystemError(VacSyncError):
    """Directory or file creation, write, or removal failure."""


class IntegrityError(VacSyncError):
    """Size or content hash mismatch on a downloaded or cached artifact."""


__all__ = [
    "VacSyncError",
    "NetworkError",
    "ApiError",
    "DatabaseError",
    "FileSystemError",
    "IntegrityError",
]
