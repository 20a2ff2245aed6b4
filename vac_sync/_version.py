"""Version information for vac-sync."""

__version__ = "1.0.0"
