"""
Tests for CatalogClient.

This module covers Hydra pagination, subtype filtering, error propagation
and catalog reuse.
"""

import httpx
import pytest

from conftest import BASE_URL, make_page, make_record
from vac_sync.api import CatalogClient
from vac_sync.api.catalog_client import TTLCache
from vac_sync.exceptions import ApiError, NetworkError


def paged_catalog(pages):
    """Build a respx side effect serving pages keyed by their ?page= value."""

    def _side_effect(request):
        page = request.url.params.get("page", "1")
        if page not in pages:
            return httpx.Response(404)
        return httpx.Response(200, json=pages[page])

    return _side_effect


class TestFetchAll:
    """Test CatalogClient.fetch_all."""

    def test_single_page(self, catalog_client, mock_catalog):
        """Test a one page catalog."""
        mock_catalog([make_record("LFPG", "3", city="Paris"), make_record("LFML", "7", city="Marseille")])

        entries = catalog_client.fetch_all()

        assert [entry.identity for entry in entries] == ["LFPG", "LFML"]
        assert entries[0].version == "3"
        assert entries[0].city == "Paris"
        assert entries[0].file_name == "LFPG.pdf"
        assert entries[0].download_path == "/api/v1/custom/file-path/LFPG/AD"

    def test_follows_hydra_next(self, catalog_client, httpx_mock):
        """Test pagination follows hydra:next until the last page."""
        route = httpx_mock.get(path="/api/v1/oacis").mock(
            side_effect=paged_catalog(
                {
                    "1": make_page([make_record("LFPG")], next_link="/api/v1/oacis?page=2"),
                    "2": make_page([make_record("LFML")], next_link="/api/v1/oacis?page=3"),
                    "3": make_page([make_record("LFBO")]),
                }
            )
        )

        entries = catalog_client.fetch_all()

        assert [entry.identity for entry in entries] == ["LFPG", "LFML", "LFBO"]
        assert route.call_count == 3

    def test_each_page_signed_with_its_own_path(self, catalog_client, httpx_mock, token_generator):
        """Test the AUTH header is recomputed for every page."""
        route = httpx_mock.get(path="/api/v1/oacis").mock(
            side_effect=paged_catalog(
                {
                    "1": make_page([make_record("LFPG")], next_link="/api/v1/oacis?page=2"),
                    "2": make_page([make_record("LFML")]),
                }
            )
        )

        catalog_client.fetch_all()

        first, second = route.calls[0].request, route.calls[1].request
        assert first.headers["AUTH"] == token_generator.custom_header("/api/v1/oacis")
        assert second.headers["AUTH"] == token_generator.custom_header("/api/v1/oacis?page=2")
        assert "Authorization" not in first.headers

    def test_keeps_only_requested_subtype(self, catalog_client, mock_catalog):
        """Test non-AD maps are dropped."""
        mock_catalog(
            [
                make_record(
                    "LFPG",
                    maps=[
                        {"fileName": "LFPG.pdf", "type": "AD", "version": "3", "fileSize": 10},
                        {"fileName": "LFPG_HEL.pdf", "type": "HEL", "version": "1", "fileSize": 10},
                    ],
                ),
                make_record("LFXU", maps=[{"fileName": "LFXU.pdf", "type": "HEL", "version": "1"}]),
                make_record("LFOA", maps=[]),
            ]
        )

        entries = catalog_client.fetch_all("AD")

        assert [(entry.identity, entry.subtype) for entry in entries] == [("LFPG", "AD")]

    def test_numeric_version_coerced(self, catalog_client, mock_catalog):
        """Test numeric versions are kept as strings."""
        mock_catalog([make_record("LFPG", maps=[{"fileName": "LFPG.pdf", "type": "AD", "version": 12}])])

        entries = catalog_client.fetch_all()

        assert entries[0].version == "12"
        assert entries[0].file_size == 0

    def test_empty_catalog(self, catalog_client, mock_catalog):
        """Test an empty catalog yields no entries."""
        mock_catalog([])

        assert catalog_client.fetch_all() == []

    def test_stops_on_repeated_link(self, catalog_client, httpx_mock):
        """Test a page linking back to a visited page ends the walk."""
        route = httpx_mock.get(path="/api/v1/oacis").mock(
            side_effect=paged_catalog(
                {
                    "1": make_page([make_record("LFPG")], next_link="/api/v1/oacis?page=2"),
                    "2": make_page([make_record("LFML")], next_link="/api/v1/oacis?page=2"),
                }
            )
        )

        entries = catalog_client.fetch_all()

        assert len(entries) == 2
        assert route.call_count == 2


class TestFetchAllErrors:
    """Test error propagation from fetch_all."""

    def test_http_error_on_first_page(self, catalog_client, httpx_mock):
        """Test a non-success status raises ApiError."""
        httpx_mock.get(path="/api/v1/oacis").respond(500)

        with pytest.raises(ApiError) as exc_info:
            catalog_client.fetch_all()

        assert exc_info.value.status == 500

    def test_http_error_on_later_page_discards_partial_results(self, catalog_client, httpx_mock):
        """Test the fetch is all-or-nothing."""
        httpx_mock.get(path="/api/v1/oacis").mock(
            side_effect=paged_catalog({"1": make_page([make_record("LFPG")], next_link="/api/v1/oacis?page=2")})
        )

        with pytest.raises(ApiError) as exc_info:
            catalog_client.fetch_all()

        assert exc_info.value.status == 404

    def test_unauthorized(self, catalog_client, httpx_mock):
        """Test a 401 is reported as ApiError with its status."""
        httpx_mock.get(path="/api/v1/oacis").respond(401)

        with pytest.raises(ApiError) as exc_info:
            catalog_client.fetch_all()

        assert exc_info.value.status == 401

    def test_network_error(self, catalog_client, httpx_mock):
        """Test a transport failure raises NetworkError."""
        httpx_mock.get(path="/api/v1/oacis").mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError):
            catalog_client.fetch_all()

    def test_timeout(self, catalog_client, httpx_mock):
        """Test a timeout raises NetworkError."""
        httpx_mock.get(path="/api/v1/oacis").mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            catalog_client.fetch_all()

    def test_corrupt_compressed_body(self, catalog_client, httpx_mock):
        """Test a body that fails gzip decoding raises NetworkError."""
        httpx_mock.get(path="/api/v1/oacis").respond(200, content=b"not gzip", headers={"Content-Encoding": "gzip"})

        with pytest.raises(NetworkError, match="Failed to fetch catalog page"):
            catalog_client.fetch_all()

    def test_redirect_loop(self, catalog_client, httpx_mock):
        """Test endless redirects raise NetworkError."""
        httpx_mock.get(path="/api/v1/oacis").respond(302, headers={"Location": "/api/v1/oacis"})

        with pytest.raises(NetworkError):
            catalog_client.fetch_all()

    def test_malformed_body(self, catalog_client, httpx_mock):
        """Test a body that is not JSON raises ApiError."""
        httpx_mock.get(path="/api/v1/oacis").respond(200, text="<html>maintenance</html>")

        with pytest.raises(ApiError, match="Malformed catalog page"):
            catalog_client.fetch_all()

    def test_invalid_member(self, catalog_client, httpx_mock):
        """Test a member without a code raises ApiError."""
        httpx_mock.get(path="/api/v1/oacis").respond(200, json=make_page([{"city": "Nowhere"}]))

        with pytest.raises(ApiError, match="Malformed catalog page"):
            catalog_client.fetch_all()


class TestCatalogReuse:
    """Test reuse of a complete catalog within the TTL."""

    def test_second_fetch_served_from_cache(self, token_generator, httpx_mock):
        """Test a second call within the TTL does not hit the API."""
        route = httpx_mock.get(path="/api/v1/oacis").respond(200, json=make_page([make_record("LFPG")]))

        with CatalogClient(BASE_URL, token_generator, cache_ttl=600) as client:
            first = client.fetch_all()
            second = client.fetch_all()

        assert first == second
        assert route.call_count == 1

    def test_refresh_bypasses_cache(self, token_generator, httpx_mock):
        """Test refresh=True always fetches."""
        route = httpx_mock.get(path="/api/v1/oacis").respond(200, json=make_page([make_record("LFPG")]))

        with CatalogClient(BASE_URL, token_generator, cache_ttl=600) as client:
            client.fetch_all()
            client.fetch_all(refresh=True)

        assert route.call_count == 2

    def test_failed_fetch_not_cached(self, token_generator, httpx_mock):
        """Test nothing is cached when a fetch fails."""
        httpx_mock.get(path="/api/v1/oacis").respond(503)

        with CatalogClient(BASE_URL, token_generator, cache_ttl=600) as client:
            with pytest.raises(ApiError):
                client.fetch_all()
            assert client._catalog_cache.get("AD") is None


class TestTTLCache:
    """Test TTLCache class."""

    def test_get_missing(self):
        """Test missing keys return None."""
        assert TTLCache().get("AD") is None

    def test_set_and_get(self):
        """Test a fresh value is returned."""
        cache = TTLCache(ttl=60)
        cache.set("AD", [])

        assert cache.get("AD") == []
        assert "AD" in cache._cache

    def test_expired_value_dropped(self, mocker):
        """Test an expired value is evicted."""
        clock = mocker.patch("vac_sync.api.catalog_client.time.monotonic", return_value=100.0)
        cache = TTLCache(ttl=10)
        cache.set("AD", [])

        clock.return_value = 111.0

        assert cache.get("AD") is None
        assert "AD" not in cache._cache

    def test_clear(self):
        """Test clear empties the cache."""
        cache = TTLCache()
        cache.set("AD", [])
        cache.clear()

        assert "AD" not in cache._cache
