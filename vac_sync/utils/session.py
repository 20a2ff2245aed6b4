"""
Session utilities for VAC API operations.

This module creates and configures the httpx clients shared by the catalog
and artifact clients.
"""

import importlib.util
import logging

import httpx
from httpx import HTTPTransport

from .constants import DEFAULT_TIMEOUT

# Requests are sequential; a small pool is enough
MAX_CONNECTIONS = 10
MAX_KEEPALIVE_CONNECTIONS = 5


def create_session(base_url: str, timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """
    Create an httpx client bound to the VAC API.

    Requests are made one at a time and each is attempted once; failed
    transfers are reported to the caller, which decides what to do on the
    next run.

    Args:
        base_url: Base URL of the API, relative request paths resolve against it
        timeout: Total timeout in seconds (default: 30.0)

    Returns:
        Configured httpx.Client object with:
        - HTTP/2 support when the h2 package is installed
        - Compression support (gzip, deflate)
        - Timeout configuration

    Example:
        >>> client = create_session("https://bo-prod-sofia-vac.sia-france.fr")
        >>> response = client.get("/api/v1/oacis")
    """
    limits = httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
    )
    timeout_config = httpx.Timeout(timeout, connect=10.0)
    transport = HTTPTransport(limits=limits, retries=0)

    use_http2 = importlib.util.find_spec("h2") is not None
    if not use_http2:
        logging.debug("HTTP/2 support not available (h2 package not installed)")

    return httpx.Client(
        base_url=base_url,
        transport=transport,
        timeout=timeout_config,
        follow_redirects=True,
        headers={"Accept-Encoding": "gzip, deflate"},
        http2=use_http2,
    )


__all__ = ["create_session"]
