"""
Utility modules for vac-sync operations.
"""

from .logger import setup_logging, WrappingFormatter
from .session import create_session
from .path_utils import compute_file_hash, ensure_directory_exists, get_chart_path, safe_file_name

from . import constants
from . import config_manager
from . import error_handling
from . import path_utils

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "create_session",
    "compute_file_hash",
    "ensure_directory_exists",
    "get_chart_path",
    "safe_file_name",
    "constants",
    "config_manager",
    "error_handling",
    "path_utils",
]
