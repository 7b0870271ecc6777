"""
Configuration loader module.

Loads the optional CLI settings file (backup_settings.json) into a
validated AppSettings model. A missing file means defaults.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from autodbbackup.domain.settings import AppSettings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_SETTINGS_FILE = "backup_settings.json"


class ConfigError(ValueError):
    """Settings file exists but cannot be read or validated."""


class ConfigLoader:
    """Load and validate configuration files."""

    def __init__(self, config_dir: str | Path = DEFAULT_CONFIG_DIR):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing configuration files.
                        Relative paths are anchored to the executable when frozen.
        """
        if getattr(sys, "frozen", False) and not Path(config_dir).is_absolute():
            self.config_dir = Path(sys.executable).parent / config_dir
        else:
            self.config_dir = Path(config_dir)

    def _load_json_file(self, filepath: Path) -> dict | None:
        """
        Load and parse a JSON file.

        Returns:
            Parsed JSON object, or None if the file does not exist

        Raises:
            ConfigError: If the file is unreadable, empty, not JSON or not an object
        """
        if not filepath.exists():
            logger.debug("Optional config not found: %s", filepath)
            return None

        try:
            content = filepath.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                f"Cannot read config file: {filepath}\n"
                f"Hint: Check file permissions or if another process has it locked."
            ) from e

        if not content.strip():
            raise ConfigError(f"Configuration file is empty: {filepath}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in config file: {filepath}\n"
                f"Error at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {filepath}")
        return data

    def load_settings(self, path: str | Path | None = None) -> AppSettings:
        """
        Load application settings.

        Args:
            path: Explicit settings file; defaults to <config_dir>/backup_settings.json

        Returns:
            AppSettings (defaults when the file does not exist)

        Raises:
            ConfigError: If the file is present but invalid
        """
        filepath = Path(path) if path else self.config_dir / DEFAULT_SETTINGS_FILE
        data = self._load_json_file(filepath)
        if data is None:
            return AppSettings()

        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {filepath}:\n{e}") from e

        logger.debug("Loaded settings from %s", filepath)
        return settings
