"""
Unified CLI entry point for vac-sync using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import listing, remove, status, sync
from .._version import __version__
from ..utils.constants import EXIT_USER_INTERRUPT


# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="vac-sync")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the configuration file (default: ~/.config/vac-sync/config.toml)",
)
@click.option("--db-path", help="Path to the SQLite version cache (default: vac_cache.db)")
@click.option("-o", "--download-dir", help="Directory where charts are downloaded (default: ./downloads)")
@click.option("--base-url", help="Base URL of the VAC API")
@click.option("--shared-secret", envvar="VAC_SYNC_SHARED_SECRET", help="Shared secret for the AUTH header")
@click.option("--username", envvar="VAC_SYNC_USERNAME", help="User for chart downloads")
@click.option("--password", envvar="VAC_SYNC_PASSWORD", help="Password for chart downloads")
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.pass_context
def cli(  # pylint: disable=too-many-positional-arguments
    ctx: click.Context,
    config: Optional[str],
    db_path: Optional[str],
    download_dir: Optional[str],
    base_url: Optional[str],
    shared_secret: Optional[str],
    username: Optional[str],
    password: Optional[str],
    debug: int,
) -> None:
    """VAC Sync - Mirror airport (AD) approach charts into a local directory."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["db_path"] = db_path
    ctx.obj["download_dir"] = download_dir
    ctx.obj["base_url"] = base_url
    ctx.obj["shared_secret"] = shared_secret
    ctx.obj["username"] = username
    ctx.obj["password"] = password
    ctx.obj["debug"] = debug


# Register subcommands
cli.add_command(sync.sync)
cli.add_command(listing.list_charts)
cli.add_command(remove.remove)
cli.add_command(status.status)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["cli", "main"]
