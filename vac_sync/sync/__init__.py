"""
Synchronization engine: decision loop and run reporting.
"""

from .orchestrator import SyncAction, SyncOrchestrator
from .reporting import echo_cache_summary, echo_listing, log_removal_summary, log_sync_summary

__all__ = [
    "SyncAction",
    "SyncOrchestrator",
    "echo_cache_summary",
    "echo_listing",
    "log_removal_summary",
    "log_sync_summary",
]
