"""
Remove command for vac-sync CLI.

This module provides the remove command deleting charts from the version
cache and the download directory. It works offline and needs no credentials.
"""

from typing import Optional, Tuple

import click

from ..models.context import SyncContext, normalize_identities
from ..models.results import SyncStats
from ..store import VersionCache
from ..sync import SyncOrchestrator, log_removal_summary
from ..utils import setup_logging
from ..utils.error_handling import with_error_handling
from .settings import load_config, resolve_context


@with_error_handling("chart removal", exit_on_error=True)
def run_removal(context: SyncContext, codes: Tuple[str, ...], subtype: Optional[str]) -> SyncStats:
    identities = sorted(normalize_identities(codes) or ())
    with SyncOrchestrator(VersionCache(context.db_path), None, None, context.download_dir) as orchestrator:
        return orchestrator.remove_many(identities, subtype or context.subtype)


@click.command()
@click.argument("codes", nargs=-1, required=True, metavar="CODE...")
@click.option("--subtype", default=None, help="Chart subtype to remove (default: AD)")
@click.pass_context
def remove(ctx: click.Context, codes: Tuple[str, ...], subtype: Optional[str]) -> None:
    """Remove charts from the local mirror by OACI code."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)
    config = load_config(ctx)
    context = resolve_context(ctx, config)

    stats = run_removal(context, codes, subtype)
    log_removal_summary(stats)


__all__ = ["remove", "run_removal"]
