"""
Configuration management utilities.

This module loads the optional TOML configuration file and exposes its
values with dot-notation lookups. Example file::

    db_path = "~/charts/vac_cache.db"
    download_dir = "~/charts/pdf"

    [api]
    base_url = "https://bo-prod-sofia-vac.sia-france.fr"
    timeout = 30

    [auth]
    shared_secret = "..."
    username = "api"
    password = "..."
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_CONFIG_PATH


class ConfigManager:
    """
    Manages configuration loading and access.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path).expanduser() if config_path else Path(DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def exists(self) -> bool:
        """Whether the configuration file is present on disk."""
        return self.config_path.is_file()

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

        logging.debug("Loaded configuration from %s", self.config_path)
        return self._config

    def load_if_present(self) -> Dict[str, Any]:
        """
        Load the configuration file if it exists.

        The default configuration file is optional; a missing file yields an
        empty configuration, while an unreadable one still raises.

        Returns:
            Dictionary containing configuration data (possibly empty)
        """
        if not self.exists:
            logging.debug("No configuration file at %s", self.config_path)
            self._config = {}
            return self._config
        return self.load()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "auth.username").

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config = ConfigManager("~/.config/vac-sync/config.toml")
            >>> config.get("api.base_url")
            'https://bo-prod-sofia-vac.sia-france.fr'
        """
        if self._config is None:
            self.load()

        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Section name (e.g., "auth")

        Returns:
            Dictionary containing section data, or empty dict if section not found
        """
        if self._config is None:
            self.load()

        if not self._config:
            return {}

        section_data = self._config.get(section, {})
        return section_data if isinstance(section_data, dict) else {}


__all__ = ["ConfigManager"]
