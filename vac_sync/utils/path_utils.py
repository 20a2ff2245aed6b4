"""
File path handling utilities.

This module provides centralized functions for locating charts on disk,
creating the download directory and hashing stored files.
"""

import hashlib
import os
from pathlib import Path
from typing import Union

from ..exceptions import FileSystemError
from .constants import MIN_CHUNK_SIZE, MAX_CHUNK_SIZE

PathLike = Union[str, "os.PathLike[str]"]


def safe_file_name(file_name: str) -> str:
    """
    Reduce a file name advertised by the API to a plain base name.

    Args:
        file_name: File name as sent by the catalog

    Returns:
        Base name safe to join onto the download directory

    Raises:
        FileSystemError: If nothing usable is left

    Example:
        >>> safe_file_name("../../etc/LFPG.pdf")
        'LFPG.pdf'
    """
    base_name = os.path.basename(file_name.replace("\\", "/")).strip()
    if base_name in ("", ".", ".."):
        raise FileSystemError(f"Invalid chart file name: {file_name!r}")
    return base_name


def get_chart_path(download_dir: PathLike, file_name: str) -> Path:
    """
    Determine where a chart is stored.

    Args:
        download_dir: Directory charts are written to
        file_name: File name of the chart

    Returns:
        Full path of the chart file
    """
    return Path(download_dir) / safe_file_name(file_name)


def ensure_directory_exists(directory: PathLike) -> Path:
    """
    Create a directory (and parents) if it does not exist yet.

    Args:
        directory: Directory to create

    Returns:
        The directory as a Path

    Raises:
        FileSystemError: If the directory cannot be created
    """
    path = Path(directory).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Failed to create directory {path}: {e}") from e
    return path


def compute_file_hash(path: PathLike, chunk_size: int = MAX_CHUNK_SIZE) -> str:
    """
    Compute the SHA-256 of a file on disk.

    Args:
        path: File to hash
        chunk_size: Read size in bytes

    Returns:
        Hex digest of the file contents

    Raises:
        FileSystemError: If the file cannot be read
    """
    hasher = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as e:
        raise FileSystemError(f"Failed to read {path} for hashing: {e}") from e
    return hasher.hexdigest()


def get_chunk_size(content_length: Union[str, int, None]) -> int:
    """
    Pick a streaming chunk size from the announced content length.

    Larger files get larger chunks, bounded to [8 KiB, 64 KiB].
    """
    if content_length is None:
        return MIN_CHUNK_SIZE
    try:
        size = int(content_length)
    except (TypeError, ValueError):
        return MIN_CHUNK_SIZE
    return min(max(MIN_CHUNK_SIZE, size // 100), MAX_CHUNK_SIZE)


__all__ = [
    "safe_file_name",
    "get_chart_path",
    "ensure_directory_exists",
    "compute_file_hash",
    "get_chunk_size",
]
