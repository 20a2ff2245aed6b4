"""
Persistent storage for vac-sync.
"""

from .version_cache import VersionCache

__all__ = ["VersionCache"]
