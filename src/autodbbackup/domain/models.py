"""
Domain models for AutoDBBackup.

This module contains the core entities that flow through a backup session:
- Connection targets and the connection profiles built from them
- Server identity reported by a probe
- Backup jobs, their per-database outcomes and the batch report

These models are pure data structures with no I/O dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================================
# Connection
# ============================================================================

@dataclass(frozen=True)
class ConnectionTarget:
    """Server address split into host and optional named instance."""
    host: str
    instance_name: str | None = None

    @property
    def is_named_instance(self) -> bool:
        return bool(self.instance_name)

    @property
    def display_name(self) -> str:
        if self.instance_name:
            return f"{self.host}\\{self.instance_name}"
        return self.host


@dataclass(frozen=True)
class ConnectionProfile:
    """
    Fully specified connection settings for one logical operation.

    Exactly one of ``instance_name`` and ``port`` is set: named instances
    have their port resolved by the SQL Server Browser service.
    """
    host: str
    user: str
    password: str = field(repr=False)
    instance_name: str | None = None
    port: int | None = None
    default_catalog: str = "master"
    encrypt: bool = False
    trust_server_certificate: bool = True
    connect_timeout_ms: int = 60_000
    operation_timeout_ms: int = 600_000

    def __post_init__(self):
        if (self.port is None) == (self.instance_name is None):
            raise ValueError(
                "ConnectionProfile requires either an instance name or a port, not both"
            )

    @property
    def server(self) -> str:
        """Server value for the ODBC connection string."""
        if self.instance_name is not None:
            return f"{self.host}\\{self.instance_name}"
        return f"{self.host},{self.port}"

    @property
    def connect_timeout_seconds(self) -> int:
        return max(1, self.connect_timeout_ms // 1000)

    @property
    def operation_timeout_seconds(self) -> int:
        return max(1, self.operation_timeout_ms // 1000)


@dataclass(frozen=True)
class ServerIdentity:
    """Version metadata reported by SERVERPROPERTY."""
    raw_version_string: str
    product_level: str
    edition: str
    product_generation_label: str | None = None


# ============================================================================
# Backup
# ============================================================================

@dataclass(frozen=True)
class BackupJob:
    """One database to back up into a destination directory."""
    database_name: str
    destination_directory: str


@dataclass(frozen=True)
class BackupOutcome:
    """Result of a single backup job."""
    database_name: str
    ok: bool
    file_path: str | None = None
    error_detail: str | None = None

    def __post_init__(self):
        if self.ok and (self.file_path is None or self.error_detail is not None):
            raise ValueError("Successful outcome must carry a file path and no error")
        if not self.ok and (self.error_detail is None or self.file_path is not None):
            raise ValueError("Failed outcome must carry an error and no file path")

    @classmethod
    def succeeded(cls, database_name: str, file_path: str) -> BackupOutcome:
        return cls(database_name=database_name, ok=True, file_path=file_path)

    @classmethod
    def failed(cls, database_name: str, error_detail: str) -> BackupOutcome:
        return cls(database_name=database_name, ok=False, error_detail=error_detail)


@dataclass(frozen=True)
class BatchReport:
    """Ordered outcomes of one backup batch."""
    outcomes: tuple[BackupOutcome, ...] = ()

    @property
    def succeeded(self) -> tuple[BackupOutcome, ...]:
        return tuple(o for o in self.outcomes if o.ok)

    @property
    def failed(self) -> tuple[BackupOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)

    @property
    def all_ok(self) -> bool:
        return all(o.ok for o in self.outcomes)
