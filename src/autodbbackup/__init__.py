"""
AutoDBBackup - SQL Server Backup Tool.

Connects to a SQL Server instance, lists its online user databases and runs
server-side full backups of a chosen subset, reporting per-database results.
Supports SQL Server 2000 through 2022+ (unknown versions are still usable).

Usage:
    # CLI
    autodbbackup backup -S "SQL01\\PROD" -U sa -d Sales -d HR -f "D:\\Backups"

    # Programmatic
    import asyncio
    from autodbbackup import BackupService
    from autodbbackup.domain.messages import BackupRequest

    service = BackupService()
    response = asyncio.run(service.backup_databases(BackupRequest(
        server="SQL01", user="sa", password="...", databases=["Sales"], folder="D:\\Backups"
    )))
"""

__version__ = "0.1.0"
__author__ = "AutoDBBackup Team"

from autodbbackup.application.backup_service import BackupService

__all__ = ["BackupService", "__version__"]
