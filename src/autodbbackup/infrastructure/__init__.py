"""
Infrastructure layer package.

Contains all I/O and external system integrations:
- SQL Server connectivity over ODBC (sql/)
- Settings file loading
- Logging setup
"""

from autodbbackup.infrastructure.config_loader import ConfigError, ConfigLoader
from autodbbackup.infrastructure.logging_config import setup_logging
from autodbbackup.infrastructure.sql import SqlConnector

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "SqlConnector",
    "setup_logging",
]
