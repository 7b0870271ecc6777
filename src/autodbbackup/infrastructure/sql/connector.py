"""
SQL Server connection module.

Handles:
- ODBC driver detection and fallback
- Connection string building from a ConnectionProfile
- Opening connections with login and statement timeouts
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import pyodbc

from autodbbackup.domain.models import ConnectionProfile
from autodbbackup.infrastructure.sql.errors import DriverNotFoundError


logger = logging.getLogger(__name__)

# Newest first
PREFERRED_DRIVERS = (
    "ODBC Driver 18 for SQL Server",
    "ODBC Driver 17 for SQL Server",
    "ODBC Driver 13 for SQL Server",
    "ODBC Driver 11 for SQL Server",
)

FALLBACK_DRIVERS = (
    "SQL Server Native Client 11.0",
    "SQL Server Native Client 10.0",
    "SQL Server",
)


def detect_odbc_driver(requested: str | None = None) -> str:
    """
    Pick the ODBC driver to connect with.

    Args:
        requested: Explicit driver name from settings; must be installed

    Returns:
        ODBC driver name

    Raises:
        DriverNotFoundError: If no suitable driver is installed
    """
    drivers = pyodbc.drivers()
    logger.debug("Available ODBC drivers: %s", drivers)

    if requested:
        if requested in drivers:
            return requested
        raise DriverNotFoundError(
            f"Configured ODBC driver '{requested}' is not installed. Available: {', '.join(drivers) or 'none'}"
        )

    for driver in PREFERRED_DRIVERS:
        if driver in drivers:
            logger.debug("Using ODBC driver: %s", driver)
            return driver

    for driver in FALLBACK_DRIVERS:
        if driver in drivers:
            logger.warning("Using fallback ODBC driver: %s", driver)
            return driver

    raise DriverNotFoundError("No SQL Server ODBC driver found. Please install ODBC Driver 17 or 18.")


def _quote_value(value: str) -> str:
    """Brace-quote a connection string value when it contains reserved characters."""
    if any(ch in value for ch in ";{}=") or value != value.strip():
        return "{" + value.replace("}", "}}") + "}"
    return value


class SqlConnector:
    """
    Opens connections described by a ConnectionProfile.

    Connections are opened in autocommit mode: BACKUP DATABASE is not
    allowed inside a user transaction.
    """

    def __init__(self, profile: ConnectionProfile, driver: str | None = None):
        self.profile = profile
        self.driver = driver
        self._connection_string: str | None = None

    def build_connection_string(self) -> str:
        """Build the ODBC connection string (cached per connector)."""
        if self._connection_string:
            return self._connection_string

        driver = detect_odbc_driver(self.driver)
        profile = self.profile

        parts = [
            f"DRIVER={{{driver}}}",
            f"SERVER={profile.server}",
            f"DATABASE={_quote_value(profile.default_catalog)}",
            f"Encrypt={'yes' if profile.encrypt else 'no'}",
            f"TrustServerCertificate={'yes' if profile.trust_server_certificate else 'no'}",
            f"UID={_quote_value(profile.user)}",
            f"PWD={_quote_value(profile.password)}",
        ]

        self._connection_string = ";".join(parts)
        logger.debug("Connection string built for %s (credentials masked)", profile.server)
        return self._connection_string

    def connect(self) -> pyodbc.Connection:
        """
        Open a new connection.

        The login timeout covers the connect phase; ``Connection.timeout``
        bounds each statement executed afterwards.

        Raises:
            pyodbc.Error: If the server rejects or cannot be reached
            DriverNotFoundError: If no ODBC driver is available
        """
        conn = pyodbc.connect(
            self.build_connection_string(),
            timeout=self.profile.connect_timeout_seconds,
            autocommit=True,
        )
        conn.timeout = self.profile.operation_timeout_seconds
        logger.debug("Connected to %s", self.profile.server)
        return conn

    @contextmanager
    def open(self) -> Iterator[pyodbc.Connection]:
        """Connection that is closed on every exit path."""
        conn = self.connect()
        try:
            yield conn
        finally:
            # pyodbc's own context manager commits but does not close
            conn.close()
            logger.debug("Closed connection to %s", self.profile.server)
