"""
SQL Server infrastructure package.

Provides ODBC connectivity, the T-SQL statements used by the core and
driver error helpers.
"""

from autodbbackup.infrastructure.sql.connector import SqlConnector, detect_odbc_driver
from autodbbackup.infrastructure.sql.errors import (
    DriverNotFoundError,
    error_message,
    format_error_detail,
)

__all__ = [
    "DriverNotFoundError",
    "SqlConnector",
    "detect_odbc_driver",
    "error_message",
    "format_error_detail",
]
