"""
VAC API client modules.

This package provides clients for interacting with the VAC API:
- Digest-token and Basic authentication
- Catalog client walking the paginated OACIS collection
- Artifact client downloading chart PDFs
"""

from .auth import AuthTokenGenerator, VacApiAuth
from .artifact_client import ArtifactClient
from .catalog_client import CatalogClient

# Import VAC API models for convenience
from ..models.vac_api import ChartMap, OaciRecord, OacisPage

__all__ = [
    "AuthTokenGenerator",
    "VacApiAuth",
    "ArtifactClient",
    "CatalogClient",
    # API Models
    "ChartMap",
    "OaciRecord",
    "OacisPage",
]
