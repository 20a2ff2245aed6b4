"""
List command for vac-sync CLI.

This module provides the list command comparing the remote catalog with the
local version cache.
"""

from typing import List, Tuple

import click

from ..models.context import AuthSettings, SyncContext, normalize_identities
from ..models.results import AvailabilityEntry
from ..sync import SyncOrchestrator, echo_listing
from ..utils import setup_logging
from ..utils.error_handling import with_error_handling
from .settings import load_config, resolve_auth, resolve_context


@with_error_handling("chart listing", exit_on_error=True)
def run_listing(context: SyncContext, auth: AuthSettings, oaci_codes: Tuple[str, ...]) -> List[AvailabilityEntry]:
    with SyncOrchestrator.from_context(context, auth) as orchestrator:
        return orchestrator.list_remote_vs_local(normalize_identities(oaci_codes))


@click.command("list")
@click.option(
    "-c",
    "--oaci",
    "oaci_codes",
    multiple=True,
    metavar="CODE",
    help="OACI code(s) to list, comma-separated or repeated.",
)
@click.option("--local-only", is_flag=True, help="Only show charts available locally.")
@click.option("--remote-only", is_flag=True, help="Only show charts not downloaded yet.")
@click.pass_context
def list_charts(ctx: click.Context, oaci_codes: Tuple[str, ...], local_only: bool, remote_only: bool) -> None:
    """List remote charts and whether they are available locally."""
    if local_only and remote_only:
        raise click.UsageError("--local-only and --remote-only are mutually exclusive")

    setup_logging(ctx.obj["debug"], use_wrapping=True)
    config = load_config(ctx)
    context = resolve_context(ctx, config)
    auth = resolve_auth(ctx, config)

    listing = run_listing(context, auth, oaci_codes)
    if local_only:
        listing = [item for item in listing if item.locally_present]
    elif remote_only:
        listing = [item for item in listing if not item.locally_present]

    echo_listing(listing)


__all__ = ["list_charts", "run_listing"]
