"""Remote catalog entries and their cached counterparts."""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import Field

from .base import VacBaseModel, VacFrozenModel
from .vac_api import OaciRecord

# Path template of the per-chart download endpoint
FILE_ENDPOINT = "/api/v1/custom/file-path"


def build_download_path(identity: str, subtype: str) -> str:
    """
    Build the API path used to download one chart.

    Args:
        identity: OACI code of the aerodrome
        subtype: Chart subtype (e.g. "AD")

    Returns:
        Path relative to the API base URL

    Example:
        >>> build_download_path("LFPG", "AD")
        '/api/v1/custom/file-path/LFPG/AD'
    """
    return f"{FILE_ENDPOINT}/{identity}/{subtype}"


class RemoteEntry(VacFrozenModel):
    """
    One chart advertised by the remote catalog.

    Attributes:
        identity: OACI code of the aerodrome
        subtype: Chart subtype ("AD" for airports)
        version: Opaque version string, compared by equality only
        file_name: File name the chart is stored under
        file_size: Size advertised by the catalog, in bytes
        city: City served by the aerodrome
        download_path: API path of the download endpoint
    """

    identity: str
    subtype: str
    version: str
    file_name: str
    file_size: int = Field(default=0, ge=0)
    city: str = ""
    download_path: str

    @property
    def key(self) -> Tuple[str, str]:
        """Cache key of this entry."""
        return (self.identity, self.subtype)

    @classmethod
    def from_oaci_record(cls, record: OaciRecord, subtype: str) -> List["RemoteEntry"]:
        """
        Extract the entries of one subtype from a catalog record.

        Args:
            record: Catalog record as returned by the API
            subtype: Only maps of this type are kept

        Returns:
            List of entries (usually zero or one)
        """
        return [
            cls(
                identity=record.code,
                subtype=chart.type,
                version=chart.version,
                file_name=chart.file_name,
                file_size=max(chart.file_size, 0),
                city=record.city,
                download_path=build_download_path(record.code, chart.type),
            )
            for chart in record.maps
            if chart.type == subtype
        ]


class CacheRecord(VacBaseModel):
    """
    Last successfully verified download of one chart.

    Attributes:
        identity: OACI code of the aerodrome
        subtype: Chart subtype
        version: Version that was downloaded
        file_name: File name on disk, relative to the download directory
        file_size: Size of the file on disk, in bytes
        city: City served by the aerodrome
        content_hash: SHA-256 of the file contents (None for legacy rows)
        last_updated: When the record was last written
    """

    identity: str
    subtype: str
    version: str
    file_name: str
    file_size: int = Field(default=0, ge=0)
    city: str = ""
    content_hash: Optional[str] = None
    last_updated: Optional[datetime] = None

    @property
    def key(self) -> Tuple[str, str]:
        """Cache key of this record."""
        return (self.identity, self.subtype)

    @classmethod
    def from_download(cls, entry: RemoteEntry, file_name: str, file_size: int, content_hash: str) -> "CacheRecord":
        """Build the record for a chart that was just downloaded."""
        return cls(
            identity=entry.identity,
            subtype=entry.subtype,
            version=entry.version,
            file_name=file_name,
            file_size=file_size,
            city=entry.city,
            content_hash=content_hash,
        )


__all__ = ["FILE_ENDPOINT", "build_download_path", "RemoteEntry", "CacheRecord"]
