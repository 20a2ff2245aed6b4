"""
Authentication for the VAC API.

The API requires a digest-based token in an ``AUTH`` header on every request,
and additionally HTTP Basic credentials when downloading chart PDFs. Both are
derived from an injected AuthSettings; nothing is hard-coded here.
"""

# Standard library imports
import base64
import hashlib
import json
from typing import Generator, Optional

# Third-party imports
import httpx

# Local imports
from ..models.context import AuthSettings
from ..utils.constants import AUTH_HEADER_NAME


class AuthTokenGenerator:
    """
    Produces the two credentials expected by the VAC API.

    Stateless apart from the settings it was built with: the same path
    always yields the same header.
    """

    def __init__(self, settings: AuthSettings) -> None:
        """
        Initialize the generator.

        Args:
            settings: Shared secret and Basic credentials
        """
        self._settings = settings
        credentials = f"{settings.username}:{settings.password}".encode("utf-8")
        self._basic_auth = "Basic " + base64.b64encode(credentials).decode("ascii")

    def custom_header(self, path: str, body: Optional[str] = None) -> str:
        """
        Compute the AUTH header value for a request path.

        The token is the hex SHA-512 of the shared secret followed by the
        path (query string included). It is wrapped as ``{"tokenUri": ...}``,
        with a ``tokenParams`` digest of the body for requests that send one,
        and the JSON is Base64 encoded.

        Args:
            path: Request path, e.g. "/api/v1/oacis?page=2"
            body: Optional request body

        Returns:
            Header value
        """
        token = {"tokenUri": self._sha512(self._settings.shared_secret + path)}
        if body is not None:
            token["tokenParams"] = self._sha512(body)

        payload = json.dumps(token, separators=(",", ":"), sort_keys=True)
        return base64.b64encode(payload.encode("utf-8")).decode("ascii")

    def basic_auth(self) -> str:
        """Return the ``Authorization`` header value for chart downloads."""
        return self._basic_auth

    @staticmethod
    def _sha512(value: str) -> str:
        return hashlib.sha512(value.encode("utf-8")).hexdigest()


class VacApiAuth(httpx.Auth):
    """
    httpx authentication flow for the VAC API.

    The AUTH header is computed over each request's own path, so paginated
    requests following ``hydra:next`` links are signed correctly.
    """

    def __init__(self, generator: AuthTokenGenerator, basic: bool = False) -> None:
        """
        Initialize the auth flow.

        Args:
            generator: Token generator holding the credentials
            basic: Also send HTTP Basic credentials (required for downloads)
        """
        self._generator = generator
        self._basic = basic

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        path = request.url.raw_path.decode("ascii")
        body = request.content.decode("utf-8") if request.content else None

        request.headers[AUTH_HEADER_NAME] = self._generator.custom_header(path, body)
        if self._basic:
            request.headers["Authorization"] = self._generator.basic_auth()

        yield request


__all__ = ["AuthTokenGenerator", "VacApiAuth"]
