"""
Application layer package.

Use cases of the backup core:
- configurator: connection policy
- prober / catalog: server fingerprint and database listing
- backup_orchestrator / aggregator: sequential backup batches
- backup_service: the four-operation caller boundary
"""

from autodbbackup.application.backup_orchestrator import BackupOrchestrator
from autodbbackup.application.backup_service import BackupService, FolderPicker
from autodbbackup.application.catalog import CatalogEnumerator
from autodbbackup.application.configurator import build_profile
from autodbbackup.application.prober import ServerProber

__all__ = [
    "BackupOrchestrator",
    "BackupService",
    "CatalogEnumerator",
    "FolderPicker",
    "ServerProber",
    "build_profile",
]
