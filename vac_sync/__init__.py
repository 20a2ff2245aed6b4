"""
VAC Sync - Mirror VAC airport approach charts locally.

This package keeps a local directory of airport (AD) approach chart PDFs in
sync with the VAC API, using a SQLite version cache to download only charts
that are new, updated, missing or corrupted.
"""

from ._version import __version__

__author__ = "VAC Sync Developers"

# Import main classes and functions for easy access
from .api import ArtifactClient, AuthTokenGenerator, CatalogClient, VacApiAuth
from .store import VersionCache
from .sync import SyncOrchestrator
from .models import AuthSettings, SyncContext, SyncRequest, SyncStats
from .utils import setup_logging, WrappingFormatter, create_session
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "ArtifactClient",
    "AuthTokenGenerator",
    "CatalogClient",
    "VacApiAuth",
    "VersionCache",
    "SyncOrchestrator",
    "AuthSettings",
    "SyncContext",
    "SyncRequest",
    "SyncStats",
    "setup_logging",
    "WrappingFormatter",
    "create_session",
    "cli_main",
    "cli_group",
]
