"""
Pydantic models for vac-sync.

This package contains all Pydantic models used in the application:
- vac_api: Models for VAC API responses (Hydra collections)
- base, entries, results, context: Domain models
"""

# VAC API Response Models
from .vac_api import VacApiModel, ChartMap, OaciRecord, HydraView, OacisPage

# Domain Models
from .base import VacBaseModel, VacFrozenModel
from .entries import RemoteEntry, CacheRecord, build_download_path
from .results import SyncStats, SyncTally, FetchResult, AvailabilityEntry, RemoveResult, CacheSummary
from .context import AuthSettings, SyncRequest, SyncContext, normalize_identities

__all__ = [
    # VAC API Models
    "VacApiModel",
    "ChartMap",
    "OaciRecord",
    "HydraView",
    "OacisPage",
    # Domain Models
    "VacBaseModel",
    "VacFrozenModel",
    "RemoteEntry",
    "CacheRecord",
    "build_download_path",
    "SyncStats",
    "SyncTally",
    "FetchResult",
    "AvailabilityEntry",
    "RemoveResult",
    "CacheSummary",
    "AuthSettings",
    "SyncRequest",
    "SyncContext",
    "normalize_identities",
]
