"""
Settings resolution for CLI commands.

Values are merged with the precedence: command line (or environment variable
for credentials) > configuration file > built-in defaults.
"""

import logging
import sys
from typing import Any, Dict

import click
from pydantic import ValidationError

from ..models.context import AuthSettings, SyncContext
from ..utils.config_manager import ConfigManager
from ..utils.constants import DEFAULT_BASE_URL, DEFAULT_DB_PATH, DEFAULT_DOWNLOAD_DIR, DEFAULT_TIMEOUT, EXIT_GENERAL_ERROR


def load_config(ctx: click.Context) -> ConfigManager:
    """
    Load the configuration file referenced by the group options.

    An explicit --config must be readable; the default file is optional.
    """
    manager = ConfigManager(ctx.obj.get("config"))
    try:
        if ctx.obj.get("config"):
            manager.load()
        else:
            manager.load_if_present()
    except (FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        sys.exit(EXIT_GENERAL_ERROR)
    return manager


def resolve_context(ctx: click.Context, config: ConfigManager) -> SyncContext:
    """Merge CLI options, configuration file and defaults into a SyncContext."""
    obj: Dict[str, Any] = ctx.obj

    try:
        context = SyncContext(
            db_path=obj.get("db_path") or config.get("db_path", DEFAULT_DB_PATH),
            download_dir=obj.get("download_dir") or config.get("download_dir", DEFAULT_DOWNLOAD_DIR),
            base_url=obj.get("base_url") or config.get("api.base_url", DEFAULT_BASE_URL),
            timeout=config.get("api.timeout", DEFAULT_TIMEOUT),
            debug=obj.get("debug", 0),
            config=str(config.config_path) if config.exists else None,
        )
    except ValidationError as e:
        logging.error("Invalid settings: %s", e)
        sys.exit(EXIT_GENERAL_ERROR)

    if context.config:
        logging.info("Loaded configuration from: %s", context.config)
    logging.info("Database: %s", context.db_path)
    logging.info("Download directory: %s", context.download_dir)
    return context


def resolve_auth(ctx: click.Context, config: ConfigManager) -> AuthSettings:
    """Build the API credentials from options, environment or the [auth] section."""
    section = config.get_section("auth")
    obj: Dict[str, Any] = ctx.obj

    values = {
        "shared_secret": obj.get("shared_secret") or section.get("shared_secret"),
        "username": obj.get("username") or section.get("username"),
        "password": obj.get("password") or section.get("password"),
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        logging.error(
            "Missing API credential(s): %s. Set them in the [auth] section of %s "
            "or with the corresponding --option / VAC_SYNC_* environment variable.",
            ", ".join(missing),
            config.config_path,
        )
        sys.exit(EXIT_GENERAL_ERROR)

    return AuthSettings(**values)


__all__ = ["load_config", "resolve_context", "resolve_auth"]
