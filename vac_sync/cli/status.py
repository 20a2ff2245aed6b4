"""
Status command for vac-sync CLI.
"""

import click

from ..models.context import SyncContext
from ..models.results import CacheSummary
from ..store import VersionCache
from ..sync import echo_cache_summary
from ..utils import setup_logging
from ..utils.error_handling import with_error_handling
from .settings import load_config, resolve_context


@with_error_handling("cache status", exit_on_error=True)
def read_summary(context: SyncContext) -> CacheSummary:
    with VersionCache(context.db_path) as cache:
        return cache.summary()


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show what the local version cache holds."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)
    config = load_config(ctx)
    context = resolve_context(ctx, config)
    echo_cache_summary(read_summary(context), context.db_path)


__all__ = ["status", "read_summary"]
