"""
Application settings domain model.

Settings for the CLI host only: the backup core itself takes every
parameter per call and applies a fixed connection policy.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppSettings(BaseModel):
    """Settings loaded from backup_settings.json."""

    model_config = ConfigDict(extra="forbid")

    odbc_driver: Optional[str] = Field(
        None,
        description="ODBC driver name; auto-detected (newest first) when not set"
    )
    log_level: str = Field(
        "INFO",
        description="Console log level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[str] = Field(
        None,
        description="Optional log file path, always written at DEBUG level"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('odbc_driver')
    @classmethod
    def validate_odbc_driver(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank driver name as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)
