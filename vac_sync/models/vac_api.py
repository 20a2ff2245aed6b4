"""
Pydantic models for VAC API responses.

The catalog endpoint returns Hydra collections (JSON-LD). Only the fields
the synchronization engine needs are declared; everything else the API sends
(grounds, runways, frequencies, ...) is accepted and ignored.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Base Models
# ============================================================================


class VacApiModel(BaseModel):
    """Base model for all VAC API responses."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)  # Allow extra fields from API


# ============================================================================
# Catalog Models
# ============================================================================


class ChartMap(VacApiModel):
    """One downloadable chart attached to a catalog entry."""

    file_name: str = Field(alias="fileName")
    type: str
    version: str
    file_size: int = Field(default=0, alias="fileSize")

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        """Versions are opaque; numeric values are kept as their string form."""
        if isinstance(v, (int, float)):
            return str(v)
        return v


class OaciRecord(VacApiModel):
    """Catalog entry for one aerodrome (OACI/ICAO code)."""

    code: str
    city: str = ""
    maps: List[ChartMap] = Field(default_factory=list)


class HydraView(VacApiModel):
    """Pagination links of a Hydra collection."""

    id: Optional[str] = Field(default=None, alias="@id")
    first: Optional[str] = Field(default=None, alias="hydra:first")
    last: Optional[str] = Field(default=None, alias="hydra:last")
    next: Optional[str] = Field(default=None, alias="hydra:next")
    previous: Optional[str] = Field(default=None, alias="hydra:previous")


class OacisPage(VacApiModel):
    """One page of the OACIS catalog."""

    members: List[OaciRecord] = Field(default_factory=list, alias="hydra:member")
    total_items: Optional[int] = Field(default=None, alias="hydra:totalItems")
    view: Optional[HydraView] = Field(default=None, alias="hydra:view")

    @property
    def next_link(self) -> Optional[str]:
        """Reference to the next page, or None on the last page."""
        if self.view is None:
            return None
        return self.view.next


__all__ = [
    "VacApiModel",
    "ChartMap",
    "OaciRecord",
    "HydraView",
    "OacisPage",
]
