"""
Central constants for the vac-sync package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# API and Network Constants
# ============================================================================

# Production VAC API
DEFAULT_BASE_URL = "https://bo-prod-sofia-vac.sia-france.fr"

# Catalog (Hydra collection) endpoint
OACIS_ENDPOINT = "/api/v1/oacis"

# Header carrying the digest-based token
AUTH_HEADER_NAME = "AUTH"

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = 30.0

# How long a complete catalog fetch is reused within one process (seconds)
CATALOG_CACHE_TTL = 600  # 10 minutes

# ============================================================================
# Chart Constants
# ============================================================================

# Airport charts; the only subtype mirrored by default
AIRPORT_SUBTYPE = "AD"

# ============================================================================
# File and Path Constants
# ============================================================================

# Default SQLite version cache location
DEFAULT_DB_PATH = "vac_cache.db"

# Default directory for downloaded charts
DEFAULT_DOWNLOAD_DIR = "./downloads"

# Default configuration file path
DEFAULT_CONFIG_PATH = "~/.config/vac-sync/config.toml"

# Suffix of in-progress downloads
PARTIAL_DOWNLOAD_SUFFIX = ".part"

# Chunk size bounds for streaming downloads and hashing (bytes)
MIN_CHUNK_SIZE = 8192
MAX_CHUNK_SIZE = 65536

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Width for separator lines in console output
SEPARATOR_WIDTH = 80

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

__all__ = [
    "DEFAULT_BASE_URL",
    "OACIS_ENDPOINT",
    "AUTH_HEADER_NAME",
    "DEFAULT_TIMEOUT",
    "CATALOG_CACHE_TTL",
    "AIRPORT_SUBTYPE",
    "DEFAULT_DB_PATH",
    "DEFAULT_DOWNLOAD_DIR",
    "DEFAULT_CONFIG_PATH",
    "PARTIAL_DOWNLOAD_SUFFIX",
    "MIN_CHUNK_SIZE",
    "MAX_CHUNK_SIZE",
    "SEPARATOR_WIDTH",
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_USER_INTERRUPT",
]
