"""
Domain layer for AutoDBBackup.

Pure data structures and rules with no I/O:
- models: targets, profiles, identities, jobs, outcomes, reports
- results: Railway-oriented Success/Failure types
- targets: server address parsing
- versions: major version to release year mapping
"""

from autodbbackup.domain.models import (
    BackupJob,
    BackupOutcome,
    BatchReport,
    ConnectionProfile,
    ConnectionTarget,
    ServerIdentity,
)
from autodbbackup.domain.results import ConnectionFailure, Failure, Result, Success
from autodbbackup.domain.targets import TargetParser, resolve_target
from autodbbackup.domain.versions import map_generation

__all__ = [
    "BackupJob",
    "BackupOutcome",
    "BatchReport",
    "ConnectionFailure",
    "ConnectionProfile",
    "ConnectionTarget",
    "Failure",
    "Result",
    "ServerIdentity",
    "Success",
    "TargetParser",
    "map_generation",
    "resolve_target",
]
