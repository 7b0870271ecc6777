"""Tests for settings loading."""

import logging

import pytest
from pydantic import ValidationError

from autodbbackup.domain.settings import AppSettings
from autodbbackup.infrastructure.config_loader import ConfigError, ConfigLoader


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings()
        assert settings.odbc_driver is None
        assert settings.log_level == "INFO"
        assert settings.log_level_value == logging.INFO
        assert settings.log_file is None

    def test_log_level_is_normalized(self):
        assert AppSettings(log_level=" debug ").log_level_value == logging.DEBUG

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="LOUD")

    def test_blank_driver_means_autodetect(self):
        assert AppSettings(odbc_driver="  ").odbc_driver is None

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(encrypt=True)


class TestConfigLoader:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert ConfigLoader(tmp_path).load_settings() == AppSettings()

    def test_loads_default_file(self, tmp_path):
        (tmp_path / "backup_settings.json").write_text(
            '{"odbc_driver": "ODBC Driver 18 for SQL Server", "log_level": "WARNING"}', encoding="utf-8"
        )
        settings = ConfigLoader(tmp_path).load_settings()
        assert settings.odbc_driver == "ODBC Driver 18 for SQL Server"
        assert settings.log_level_value == logging.WARNING

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text('{"log_file": "logs/backup.log"}', encoding="utf-8")
        assert ConfigLoader("nowhere").load_settings(path).log_file == "logs/backup.log"

    @pytest.mark.parametrize("content", ["", "   ", "{not json", "[1, 2]", '{"log_level": 5}'])
    def test_invalid_files(self, tmp_path, content):
        path = tmp_path / "backup_settings.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigLoader(tmp_path).load_settings()
