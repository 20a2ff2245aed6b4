"""
Test fixtures and mock data for vac-sync tests.

This module provides common fixtures, mock catalog pages, and utilities
for testing the vac-sync package.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import respx

from vac_sync.api import ArtifactClient, AuthTokenGenerator, CatalogClient
from vac_sync.models import AuthSettings
from vac_sync.store import VersionCache
from vac_sync.sync import SyncOrchestrator

BASE_URL = "https://vac.example.com"


def make_record(code: str, version: str = "1", city: str = "", maps: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """
    Build one OACIS catalog record as the API returns it.

    Args:
        code: OACI code
        version: Version of the AD chart
        city: City name
        maps: Explicit maps list; defaults to a single AD chart

    Returns:
        Record dictionary
    """
    if maps is None:
        maps = [{"fileName": f"{code}.pdf", "type": "AD", "version": version, "fileSize": 100}]
    return {"@id": f"/api/v1/oacis/{code}", "code": code, "city": city or code.title(), "maps": maps}


def make_page(records: List[Dict[str, Any]], next_link: Optional[str] = None) -> Dict[str, Any]:
    """
    Build one Hydra collection page.

    Args:
        records: Records for hydra:member
        next_link: Optional hydra:next reference

    Returns:
        Page dictionary
    """
    view: Dict[str, Any] = {"@id": "/api/v1/oacis", "@type": "hydra:PartialCollectionView"}
    if next_link:
        view["hydra:next"] = next_link
    return {
        "@context": "/api/contexts/Oaci",
        "@type": "hydra:Collection",
        "hydra:member": records,
        "hydra:totalItems": len(records),
        "hydra:view": view,
    }


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def auth_settings():
    """Credentials used across the tests."""
    return AuthSettings(shared_secret="test-secret", username="test-user", password="test-password")


@pytest.fixture
def token_generator(auth_settings):
    """AuthTokenGenerator built from the test credentials."""
    return AuthTokenGenerator(auth_settings)


@pytest.fixture
def catalog_client(token_generator, httpx_mock):
    """CatalogClient against the mocked API, with catalog reuse disabled."""
    client = CatalogClient(BASE_URL, token_generator, timeout=5.0, cache_ttl=0)
    yield client
    client.close()


@pytest.fixture
def artifact_client(token_generator, httpx_mock):
    """ArtifactClient against the mocked API."""
    client = ArtifactClient(BASE_URL, token_generator, timeout=5.0)
    yield client
    client.close()


@pytest.fixture
def version_cache(tmp_path):
    """Version cache stored in a temporary directory."""
    cache = VersionCache(tmp_path / "vac_cache.db")
    yield cache
    cache.close()


@pytest.fixture
def download_dir(tmp_path) -> Path:
    """Directory charts are downloaded to."""
    return tmp_path / "downloads"


@pytest.fixture
def orchestrator(version_cache, catalog_client, artifact_client, download_dir):
    """SyncOrchestrator wired to the mocked API and a temporary cache."""
    return SyncOrchestrator(version_cache, catalog_client, artifact_client, download_dir)


@pytest.fixture
def mock_catalog(httpx_mock):
    """
    Serve a single catalog page built from the given records.

    Returns a callable so each test can pick its own catalog.
    """

    def _mock(records: List[Dict[str, Any]]):
        return httpx_mock.get(path="/api/v1/oacis").respond(200, json=make_page(records))

    return _mock


@pytest.fixture
def mock_chart(httpx_mock):
    """
    Serve the PDF body of one chart.

    Returns a callable taking the OACI code and the body to return.
    """

    def _mock(code: str, content: bytes = b"%PDF-1.4 chart", subtype: str = "AD", status: int = 200):
        return httpx_mock.get(path=f"/api/v1/custom/file-path/{code}/{subtype}").respond(status, content=content)

    return _mock
