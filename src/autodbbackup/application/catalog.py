"""
Catalog Enumerator.

Lists online user databases (system databases master, model and msdb
excluded) in ascending name order. A failure aborts the whole listing.
"""

from __future__ import annotations

import asyncio
import logging

import pyodbc

from autodbbackup.application.prober import ConnectorFactory, connection_failure
from autodbbackup.domain.models import ConnectionProfile
from autodbbackup.domain.results import ConnectionFailure, Failure, Result, Success
from autodbbackup.infrastructure.sql.connector import SqlConnector
from autodbbackup.infrastructure.sql.errors import DriverNotFoundError
from autodbbackup.infrastructure.sql.queries import ONLINE_USER_DATABASES_QUERY

logger = logging.getLogger(__name__)


class CatalogEnumerator:
    """Enumerates databases eligible for backup."""

    def __init__(self, connector_factory: ConnectorFactory = SqlConnector):
        self._connector_factory = connector_factory

    async def list_databases(self, profile: ConnectionProfile) -> Result[tuple[str, ...], ConnectionFailure]:
        return await asyncio.to_thread(self._list_blocking, profile)

    def _list_blocking(self, profile: ConnectionProfile) -> Result[tuple[str, ...], ConnectionFailure]:
        try:
            with self._connector_factory(profile).open() as conn:
                cursor = conn.cursor()
                cursor.execute(ONLINE_USER_DATABASES_QUERY)
                rows = cursor.fetchall()
        except (pyodbc.Error, DriverNotFoundError) as e:
            failure = connection_failure(profile, e)
            logger.error("Listing databases on %s failed: %s", profile.server, failure.message)
            return Failure(failure)

        databases = tuple(row.name for row in rows)
        logger.info("Found %d online user databases on %s", len(databases), profile.server)
        return Success(databases)
