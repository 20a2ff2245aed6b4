"""
Reporting utilities for sync, list and remove operations.

Summaries are logged at WARNING level so they stay visible at the default
verbosity; listings are written to stdout with click.
"""

import logging
from typing import Iterable, List

import click

from ..models.results import AvailabilityEntry, CacheSummary, SyncStats
from ..utils.constants import SEPARATOR_WIDTH


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def log_sync_summary(stats: SyncStats) -> None:
    """Log the outcome of a sync run."""
    if stats.total == 0:
        logging.warning("Sync complete: no chart to process")
        return

    logging.warning(
        "Sync complete: %s checked, %d up to date, %d downloaded, %d failed",
        _plural(stats.total, "chart"),
        stats.up_to_date,
        stats.downloaded,
        stats.failed,
    )
    logging.info("Verified: %d", stats.verified)
    logging.info("Re-downloaded (missing or corrupted): %d", stats.repaired)
    if stats.has_failures:
        logging.error("%s could not be downloaded, run sync again to retry", _plural(stats.failed, "chart"))


def log_removal_summary(stats: SyncStats) -> None:
    """Log the outcome of a removal."""
    logging.warning("Removed %s of %d requested", _plural(stats.removed, "chart"), stats.total)


def format_listing(listing: Iterable[AvailabilityEntry]) -> List[str]:
    """
    Render remote charts and their local availability as table lines.

    Args:
        listing: Entries as returned by SyncOrchestrator.list_remote_vs_local

    Returns:
        Lines of text, header first
    """
    lines = [
        f"{'OACI':<6} {'TYPE':<4} {'VERSION':<12} {'LOCAL':<5} CITY",
        "-" * SEPARATOR_WIDTH,
    ]
    for item in listing:
        entry = item.entry
        lines.append(
            f"{entry.identity:<6} {entry.subtype:<4} {entry.version:<12} "
            f"{'yes' if item.locally_present else 'no':<5} {entry.city}"
        )
    return lines


def echo_listing(listing: List[AvailabilityEntry]) -> None:
    """Print a listing followed by a one line total."""
    for line in format_listing(listing):
        click.echo(line)
    local_count = sum(1 for item in listing if item.locally_present)
    click.echo(f"\n{local_count} of {_plural(len(listing), 'chart')} available locally")


def echo_cache_summary(summary: CacheSummary, db_path: str) -> None:
    """Print the version cache summary."""
    click.echo(f"Version cache: {db_path}")
    click.echo(f"  Charts: {summary.count}")
    click.echo(f"  Oldest update: {summary.oldest or 'N/A'}")
    click.echo(f"  Newest update: {summary.newest or 'N/A'}")


__all__ = [
    "log_sync_summary",
    "log_removal_summary",
    "format_listing",
    "echo_listing",
    "echo_cache_summary",
]
