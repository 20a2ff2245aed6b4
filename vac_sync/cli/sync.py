"""
Sync command for vac-sync CLI.

This module provides the sync command that downloads new or updated charts.
"""

import logging
import sys
from typing import Tuple

import click

from ..models.context import AuthSettings, SyncContext, SyncRequest
from ..models.results import SyncStats
from ..sync import SyncOrchestrator, log_sync_summary
from ..utils import setup_logging
from ..utils.constants import EXIT_GENERAL_ERROR
from ..utils.error_handling import with_error_handling
from .settings import load_config, resolve_auth, resolve_context


@with_error_handling("chart sync", exit_on_error=True)
def run_sync(context: SyncContext, auth: AuthSettings, request: SyncRequest) -> SyncStats:
    """Run one sync with a freshly built orchestrator."""
    with SyncOrchestrator.from_context(context, auth) as orchestrator:
        return orchestrator.sync(request)


@click.command()
@click.option(
    "-c",
    "--oaci",
    "oaci_codes",
    multiple=True,
    metavar="CODE",
    help="OACI code(s) to sync, comma-separated or repeated. If not specified, all charts are synced.",
)
@click.pass_context
def sync(ctx: click.Context, oaci_codes: Tuple[str, ...]) -> None:
    """Download new or updated airport charts."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    config = load_config(ctx)
    context = resolve_context(ctx, config)
    auth = resolve_auth(ctx, config)
    request = SyncRequest(identity_filter=oaci_codes or None)
    if request.identity_filter:
        logging.info("OACI filter: %s", ", ".join(sorted(request.identity_filter)))

    stats = run_sync(context, auth, request)
    log_sync_summary(stats)

    if stats.has_failures:
        sys.exit(EXIT_GENERAL_ERROR)


__all__ = ["sync", "run_sync"]
