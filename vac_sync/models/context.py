"""Context and configuration models for vac-sync operations."""

from typing import FrozenSet, Iterable, Optional

from pydantic import Field, field_validator

from .base import VacBaseModel, VacFrozenModel
from ..utils.constants import DEFAULT_BASE_URL, DEFAULT_DB_PATH, DEFAULT_DOWNLOAD_DIR, DEFAULT_TIMEOUT


def normalize_identities(codes: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
    """
    Normalize OACI codes for comparison.

    Args:
        codes: Codes as typed by the user, possibly comma separated

    Returns:
        Upper-cased, stripped codes, or None when no code was given
    """
    if codes is None:
        return None
    normalized = set()
    for code in codes:
        for part in str(code).split(","):
            part = part.strip().upper()
            if part:
                normalized.add(part)
    return frozenset(normalized) if normalized else None


class AuthSettings(VacFrozenModel):
    """
    Shared credentials required by the VAC API.

    Attributes:
        shared_secret: Secret mixed into the AUTH header digest
        username: User for HTTP Basic authentication on downloads
        password: Password for HTTP Basic authentication on downloads
    """

    shared_secret: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

    def __repr__(self) -> str:
        return f"AuthSettings(username={self.username!r}, shared_secret='***', password='***')"


class SyncRequest(VacFrozenModel):
    """
    What to synchronize in one run.

    Attributes:
        identity_filter: Optional set of OACI codes; None means the whole catalog
    """

    identity_filter: Optional[FrozenSet[str]] = None

    @field_validator("identity_filter", mode="before")
    @classmethod
    def normalize_filter(cls, v):
        """Upper-case the codes and treat an empty filter as no filter."""
        if v is None:
            return None
        if isinstance(v, str):
            v = [v]
        return normalize_identities(v)

    def matches(self, identity: str) -> bool:
        """Check whether an identity is selected by this request."""
        if self.identity_filter is None:
            return True
        return identity.upper() in self.identity_filter


class SyncContext(VacBaseModel):
    """
    Resolved settings for a CLI invocation.

    Attributes:
        db_path: Path of the SQLite version cache
        download_dir: Directory charts are written to
        base_url: Base URL of the VAC API
        timeout: HTTP timeout in seconds
        subtype: Chart subtype to mirror
        debug: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        config: Optional path of the configuration file that was loaded
    """

    db_path: str = DEFAULT_DB_PATH
    download_dir: str = DEFAULT_DOWNLOAD_DIR
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    subtype: str = "AD"
    debug: int = Field(default=0, ge=0)
    config: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Validate the base URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("subtype")
    @classmethod
    def upper_subtype(cls, v: str) -> str:
        """Subtypes are compared in upper case."""
        return v.strip().upper()


__all__ = ["normalize_identities", "AuthSettings", "SyncRequest", "SyncContext"]
