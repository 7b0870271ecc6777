"""
Server Prober.

Opens one connection, reads ProductVersion/ProductLevel/Edition and maps
the major version to its release year. The connection is closed before
returning on every path.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import pyodbc

from autodbbackup.domain.models import ConnectionProfile, ServerIdentity
from autodbbackup.domain.results import ConnectionFailure, Failure, Result, Success
from autodbbackup.domain.versions import generation_label_for
from autodbbackup.infrastructure.sql.connector import SqlConnector
from autodbbackup.infrastructure.sql.errors import (
    DriverNotFoundError,
    error_message,
    error_sqlstate,
)
from autodbbackup.infrastructure.sql.queries import SERVER_IDENTITY_QUERY

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[ConnectionProfile], SqlConnector]


def connection_failure(profile: ConnectionProfile, exc: BaseException) -> ConnectionFailure:
    """Wrap a driver error, keeping its message verbatim."""
    return ConnectionFailure(
        server=profile.server,
        message=error_message(exc),
        sqlstate=error_sqlstate(exc),
    )


class ServerProber:
    """Confirms reachability and fingerprints the server version."""

    def __init__(self, connector_factory: ConnectorFactory = SqlConnector):
        self._connector_factory = connector_factory

    async def probe(self, profile: ConnectionProfile) -> Result[ServerIdentity, ConnectionFailure]:
        return await asyncio.to_thread(self._probe_blocking, profile)

    def _probe_blocking(self, profile: ConnectionProfile) -> Result[ServerIdentity, ConnectionFailure]:
        logger.info("Probing %s", profile.server)
        try:
            with self._connector_factory(profile).open() as conn:
                cursor = conn.cursor()
                cursor.execute(SERVER_IDENTITY_QUERY)
                row = cursor.fetchone()
        except (pyodbc.Error, DriverNotFoundError) as e:
            failure = connection_failure(profile, e)
            logger.error("Connection test failed for %s: %s", profile.server, failure.message)
            return Failure(failure)

        version = (row.ProductVersion if row else None) or ""
        identity = ServerIdentity(
            raw_version_string=version,
            product_level=(row.ProductLevel if row else None) or "",
            edition=(row.Edition if row else None) or "",
            product_generation_label=generation_label_for(version),
        )
        if identity.product_generation_label is None:
            logger.warning("Unrecognized SQL Server version %r on %s", version, profile.server)
        logger.info(
            "Detected SQL Server %s %s (%s)",
            identity.product_generation_label or "?", identity.raw_version_string, identity.edition
        )
        return Success(identity)
