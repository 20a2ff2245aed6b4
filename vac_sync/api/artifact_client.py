"""
Artifact client for downloading chart PDFs from the VAC API.

Downloads are streamed into a temporary file next to their final location,
hashed while they are written, and renamed into place only once complete,
so a chart file under its final name is never partially written.
"""

# Standard library imports
import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

# Third-party imports
import httpx

# Local imports
from ..exceptions import ApiError, FileSystemError, IntegrityError, NetworkError
from ..models.entries import RemoteEntry
from ..models.results import FetchResult
from ..utils.constants import DEFAULT_TIMEOUT, PARTIAL_DOWNLOAD_SUFFIX
from ..utils.path_utils import get_chart_path, get_chunk_size
from ..utils.session import create_session
from .auth import AuthTokenGenerator, VacApiAuth


class ArtifactClient:
    """Client for downloading chart PDFs."""

    def __init__(
        self,
        base_url: str,
        generator: AuthTokenGenerator,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[httpx.Client] = None,
    ) -> None:
        """
        Initialize the artifact client.

        Args:
            base_url: Base URL of the VAC API
            generator: Token generator; downloads need both AUTH and Basic credentials
            timeout: HTTP timeout in seconds
            session: Optional preconfigured httpx client (mainly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self._auth = VacApiAuth(generator, basic=True)
        self.session = session if session is not None else create_session(self.base_url, timeout=timeout)

    def close(self) -> None:
        """Close the session and release all connections."""
        self.session.close()
        logging.debug("ArtifactClient session closed")

    def __enter__(self) -> "ArtifactClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch_artifact(self, entry: RemoteEntry, destination_dir: Union[str, Path]) -> FetchResult:
        """
        Download one chart into a directory.

        Args:
            entry: Catalog entry to download
            destination_dir: Existing directory the chart is written to

        Returns:
            FetchResult with the final path, byte count and SHA-256

        Raises:
            NetworkError: If the transfer failed
            ApiError: If the server answered with a non-success status
            FileSystemError: If the file could not be written
            IntegrityError: If fewer or more bytes arrived than announced
        """
        final_path = get_chart_path(destination_dir, entry.file_name)
        logging.info("Downloading %s (%s)", entry.identity, final_path.name)

        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{final_path.name}.", suffix=PARTIAL_DOWNLOAD_SUFFIX, dir=final_path.parent
            )
        except OSError as e:
            raise FileSystemError(f"Failed to create temporary file in {final_path.parent}: {e}") from e

        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                bytes_written, content_hash = self._stream_to_file(entry, f)
            os.replace(temp_path, final_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise FileSystemError(f"Failed to write {final_path}: {e}") from e
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        logging.info("Saved %s (%d bytes)", final_path, bytes_written)
        return FetchResult(path=final_path, bytes_written=bytes_written, content_hash=content_hash)

    def _stream_to_file(self, entry: RemoteEntry, f: BinaryIO) -> Tuple[int, str]:
        """Stream the chart body into an open file, hashing as it goes."""
        hasher = hashlib.sha256()
        bytes_written = 0

        try:
            with self.session.stream("GET", entry.download_path, auth=self._auth) as response:
                if not response.is_success:
                    raise ApiError(
                        response.status_code,
                        f"Chart download for {entry.identity} failed with status {response.status_code}",
                        url=str(response.url),
                    )

                content_length = response.headers.get("content-length")
                for chunk in response.iter_bytes(chunk_size=get_chunk_size(content_length)):
                    f.write(chunk)
                    hasher.update(chunk)
                    bytes_written += len(chunk)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to download chart for {entry.identity}: {e}") from e

        # Content-Length describes the encoded body; only compare when nothing was decoded
        if content_length and content_length.isdigit() and not response.headers.get("content-encoding"):
            if int(content_length) != bytes_written:
                raise IntegrityError(
                    f"Truncated download for {entry.identity}: expected {content_length} bytes, got {bytes_written}"
                )

        f.flush()
        os.fsync(f.fileno())
        return bytes_written, hasher.hexdigest()


__all__ = ["ArtifactClient"]
