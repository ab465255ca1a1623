"""
Manages loading and validation of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hfsync.exceptions import ConfigurationError
from hfsync.models.config import SyncSettings

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "hfsync.ini"


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> SyncSettings:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated, frozen SyncSettings object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        config_from_file = self.get_config_as_dict()

        if cli_options:
            config_from_file.update(cli_options)

        try:
            return SyncSettings(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def get_config_as_dict(self) -> dict[str, Any]:
        """
        Reads the [user], [server], [files] and [sync] sections into a dictionary
        keyed by SyncSettings field names. Keys absent from the file are omitted
        so the model defaults apply.
        """
        self._read()
        values: dict[str, Any] = {}
        try:
            self._take(values, "user", "name", "account_name")
            self._take(values, "server", "url", "server_url")
            self._take(values, "server", "port", "server_port", self._parser.getint)
            self._take(
                values, "server", "download_speed", "download_speed", self._parser.getint
            )
            self._take(values, "files", "check_time", "check_time", self._parser.getint)
            self._take(values, "files", "download_folder", "download_folder")
            self._take(values, "sync", "workers", "worker_count", self._parser.getint)
            self._take(values, "sync", "auth_order", "auth_order")
            self._take(
                values,
                "sync",
                "refetch_empty_files",
                "refetch_empty_files",
                self._parser.getboolean,
            )
            self._take(
                values, "sync", "show_progress", "show_progress", self._parser.getboolean
            )
            self._take(values, "sync", "manifest_name", "manifest_name")
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

        if self._parser.has_option("files", "ignore_list"):
            raw = self._parser.get("files", "ignore_list")
            values["ignore_list"] = [s.strip() for s in raw.split(",") if s.strip()]

        return values

    def _read(self) -> None:
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                "Create it with [user], [server] and [files] sections."
            )
        try:
            with open(self.config_file_path, "r", encoding="utf-8") as f:
                self._parser.read_file(f)
        except (configparser.Error, OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

    def _take(self, values, section, option, field, getter=None) -> None:
        if not self._parser.has_option(section, option):
            return
        getter = getter or self._parser.get
        values[field] = getter(section, option)
        log.debug(f"Config [{section}] {option} -> {field}")
