"""
Backup Service - the caller-facing boundary of the backup core.

Exposes exactly four operations, each a request/response exchange:

    sql:testConnection   -> test_connection(ConnectionRequest)
    sql:listDatabases    -> list_databases(ConnectionRequest)
    sql:backupDatabases  -> backup_databases(BackupRequest)
    ui:selectFolder      -> select_folder()

Every operation resolves the server address, builds a fresh connection
profile and owns its connection for the duration of the call. Failures are
returned as ``ok: False`` responses carrying a readable message.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from pydantic import BaseModel, ValidationError

from autodbbackup.application.backup_orchestrator import BackupOrchestrator
from autodbbackup.application.catalog import CatalogEnumerator
from autodbbackup.application.configurator import build_profile
from autodbbackup.application.prober import ConnectorFactory, ServerProber
from autodbbackup.domain.messages import (
    BackupDatabasesResponse,
    BackupRequest,
    BackupResultItem,
    ConnectionRequest,
    ConnectionTestResponse,
    ListDatabasesResponse,
    SelectFolderResponse,
    ServerInfo,
)
from autodbbackup.domain.models import BackupJob, ConnectionProfile
from autodbbackup.domain.results import Failure
from autodbbackup.domain.targets import resolve_target
from autodbbackup.infrastructure.sql.connector import SqlConnector

logger = logging.getLogger(__name__)


class FolderPicker(Protocol):
    """Lets the operator choose a destination directory. Returns None when cancelled."""

    def select_folder(self) -> Optional[str]: ...


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{location}: {err.get('msg')}")
    return "Invalid request - " + "; ".join(parts)


class BackupService:
    """Composes resolver, configurator, prober, enumerator and orchestrator."""

    def __init__(
        self,
        driver: str | None = None,
        folder_picker: FolderPicker | None = None,
        connector_factory: ConnectorFactory | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        factory = connector_factory or partial(SqlConnector, driver=driver)
        self.prober = ServerProber(factory)
        self.catalog = CatalogEnumerator(factory)
        self.orchestrator = BackupOrchestrator(factory, clock=clock)
        self.folder_picker = folder_picker

        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[BaseModel]]] = {
            "sql:testConnection": lambda p: self.test_connection(ConnectionRequest.model_validate(p)),
            "sql:listDatabases": lambda p: self.list_databases(ConnectionRequest.model_validate(p)),
            "sql:backupDatabases": lambda p: self.backup_databases(BackupRequest.model_validate(p)),
            "ui:selectFolder": lambda _p: self.select_folder(),
        }

    @property
    def channels(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    @staticmethod
    def _profile_for(request: ConnectionRequest) -> ConnectionProfile:
        target = resolve_target(request.server)
        return build_profile(target, request.user, request.get_password())

    async def test_connection(self, request: ConnectionRequest) -> ConnectionTestResponse:
        result = await self.prober.probe(self._profile_for(request))
        if isinstance(result, Failure):
            return ConnectionTestResponse(ok=False, error=result.error.message)
        return ConnectionTestResponse(ok=True, info=ServerInfo.from_identity(result.value))

    async def list_databases(self, request: ConnectionRequest) -> ListDatabasesResponse:
        result = await self.catalog.list_databases(self._profile_for(request))
        if isinstance(result, Failure):
            return ListDatabasesResponse(ok=False, error=result.error.message)
        return ListDatabasesResponse(ok=True, databases=list(result.value))

    async def backup_databases(self, request: BackupRequest) -> BackupDatabasesResponse:
        jobs = [BackupJob(database_name=db, destination_directory=request.folder) for db in request.databases]
        try:
            result = await self.orchestrator.run_backups(self._profile_for(request), jobs)
        except ValueError as e:
            return BackupDatabasesResponse(ok=False, error=str(e))

        if isinstance(result, Failure):
            return BackupDatabasesResponse(ok=False, error=result.error.message)
        return BackupDatabasesResponse(
            ok=True,
            results=[BackupResultItem.from_outcome(o) for o in result.value.outcomes],
        )

    async def select_folder(self) -> SelectFolderResponse:
        if self.folder_picker is None:
            return SelectFolderResponse(ok=False)
        folder = self.folder_picker.select_folder()
        if not folder:
            return SelectFolderResponse(ok=False)
        return SelectFolderResponse(ok=True, folder=folder)

    async def handle(self, channel: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Dispatch one request by channel name and return the wire response.

        Unknown channels and invalid payloads yield ``{"ok": False, "error": ...}``
        without touching the network.
        """
        handler = self._handlers.get(channel)
        if handler is None:
            logger.warning("Rejected request on unknown channel %r", channel)
            return {"ok": False, "error": f"Unknown operation: {channel}"}
        try:
            response = await handler(payload or {})
        except ValidationError as e:
            logger.warning("Rejected invalid %s request", channel)
            return {"ok": False, "error": _format_validation_error(e)}
        return response.to_payload()
