"""
Catalog client for the VAC API.

This module retrieves the full chart catalog by walking the Hydra pagination
links of the OACIS endpoint, keeping only the entries of one subtype.

Key Features:
    - All-or-nothing fetch: any failing page aborts the whole walk
    - Per-page filtering, non-matching entries are never buffered
    - Every page signed with the AUTH header computed over its own path
    - Short-lived in-process reuse of the last complete catalog
"""

# Standard library imports
import logging
import time
from typing import Dict, List, Optional, Set, Tuple

# Third-party imports
import httpx
from pydantic import ValidationError

# Local imports
from ..exceptions import ApiError, NetworkError
from ..models.entries import RemoteEntry
from ..models.vac_api import OacisPage
from ..utils.constants import AIRPORT_SUBTYPE, CATALOG_CACHE_TTL, DEFAULT_TIMEOUT, OACIS_ENDPOINT
from ..utils.session import create_session
from .auth import AuthTokenGenerator, VacApiAuth


# ============================================================================
# Cache Implementation
# ============================================================================


class TTLCache:
    """Simple time-to-live cache for complete catalog fetches."""

    def __init__(self, ttl: int = CATALOG_CACHE_TTL):
        """
        Initialize TTL cache.

        Args:
            ttl: Time to live in seconds for cache entries
        """
        self._cache: Dict[str, Tuple[List[RemoteEntry], float]] = {}
        self._ttl = ttl

    def get(self, key: str) -> Optional[List[RemoteEntry]]:
        """
        Get value from cache if not expired.

        Args:
            key: Cache key

        Returns:
            Cached value or None if expired/not found
        """
        if key in self._cache:
            value, timestamp = self._cache[key]
            age = time.monotonic() - timestamp
            if age < self._ttl:
                logging.debug("Using cached catalog (%d entries, expires in %ds)", len(value), self._ttl - age)
                return value
            logging.debug("Cached catalog expired (age: %ds)", age)
            del self._cache[key]
        return None

    def set(self, key: str, value: List[RemoteEntry]) -> None:
        """
        Set value in cache with current timestamp.

        Args:
            key: Cache key
            value: Value to cache
        """
        self._cache[key] = (value, time.monotonic())

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()


# ============================================================================
# Main Client Class
# ============================================================================


class CatalogClient:
    """
    Client for the paginated OACIS catalog.

    The catalog is a Hydra collection: each page lists aerodromes in
    ``hydra:member`` and links the following page in ``hydra:view.hydra:next``.
    """

    def __init__(
        self,
        base_url: str,
        generator: AuthTokenGenerator,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[httpx.Client] = None,
        cache_ttl: int = CATALOG_CACHE_TTL,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            base_url: Base URL of the VAC API
            generator: Token generator used to sign each page request
            timeout: HTTP timeout in seconds
            session: Optional preconfigured httpx client (mainly for tests)
            cache_ttl: Seconds a complete catalog is reused; 0 disables reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = VacApiAuth(generator)
        self.session = session if session is not None else create_session(self.base_url, timeout=timeout)
        self._catalog_cache = TTLCache(ttl=cache_ttl)

    def close(self) -> None:
        """Close the session and release all connections."""
        self.session.close()
        self._catalog_cache.clear()
        logging.debug("CatalogClient session closed")

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch_all(self, subtype_filter: str = AIRPORT_SUBTYPE, refresh: bool = False) -> List[RemoteEntry]:
        """
        Retrieve every catalog entry of one subtype.

        Args:
            subtype_filter: Chart subtype to keep (e.g. "AD")
            refresh: Ignore any catalog fetched earlier in this process

        Returns:
            Entries in catalog order

        Raises:
            NetworkError: If a page could not be transferred
            ApiError: If a page came back with a non-success status or an unreadable body
        """
        if not refresh:
            cached = self._catalog_cache.get(subtype_filter)
            if cached is not None:
                return list(cached)

        entries: List[RemoteEntry] = []
        visited: Set[str] = set()
        next_link: Optional[str] = OACIS_ENDPOINT
        page_number = 0

        while next_link is not None:
            visited.add(next_link)
            page_number += 1
            logging.debug("Fetching catalog page %d (%s)", page_number, next_link)

            page = self._fetch_page(next_link)
            for record in page.members:
                entries.extend(RemoteEntry.from_oaci_record(record, subtype_filter))
            logging.debug("Found %d %s entries so far", len(entries), subtype_filter)

            next_link = page.next_link
            if next_link is not None and next_link in visited:
                logging.warning("Catalog page %s links back to an already fetched page, stopping", next_link)
                next_link = None

        logging.info("Fetched %d %s entries from %d catalog page(s)", len(entries), subtype_filter, page_number)
        self._catalog_cache.set(subtype_filter, entries)
        return list(entries)

    def _fetch_page(self, link: str) -> OacisPage:
        """Fetch and parse one catalog page."""
        try:
            response = self.session.get(link, auth=self._auth, headers={"Content-Type": "application/json"})
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch catalog page {link}: {e}") from e

        if not response.is_success:
            raise ApiError(response.status_code, url=str(response.url))

        try:
            return OacisPage.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ApiError(response.status_code, f"Malformed catalog page: {e}", url=str(response.url)) from e


__all__ = ["CatalogClient", "TTLCache"]
