"""
Backup Orchestrator.

Runs a batch of full backups over one shared connection:

- jobs run strictly in the order supplied, one at a time
- each job gets its own timestamped file name and the full statement timeout
- a failing job is recorded and the batch moves on; only failing to open
  the shared connection fails the whole batch
- nothing is retried

Backup files are written by the remote server, so the destination path is
joined as a plain string in the directory's own style (``D:\\Backups`` joins
with ``\\``) and never touched locally. The database name is always a file
name under the directory, even when it looks like a path itself.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from typing import Callable, Sequence

import pyodbc

from autodbbackup.application.aggregator import ResultAggregator
from autodbbackup.application.prober import ConnectorFactory, connection_failure
from autodbbackup.domain.models import BackupJob, BatchReport, ConnectionProfile
from autodbbackup.domain.results import ConnectionFailure, Failure, Result, Success
from autodbbackup.infrastructure.sql.connector import SqlConnector
from autodbbackup.infrastructure.sql.errors import DriverNotFoundError, format_error_detail
from autodbbackup.infrastructure.sql.queries import backup_database_statement

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
BACKUP_EXTENSION = ".bak"

_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:")


def _is_windows_path(directory: str) -> bool:
    return "\\" in directory or bool(_WINDOWS_DRIVE.match(directory))


def destination_path(directory: str, database_name: str, started_at: datetime) -> str:
    """
    ``<directory>/<database>_<YYYYMMDD_HHMMSS>.bak``.

    Two jobs started in the same second get the same name; WITH INIT
    overwrites the earlier file.
    """
    filename = f"{database_name}_{started_at.strftime(TIMESTAMP_FORMAT)}{BACKUP_EXTENSION}"
    if _is_windows_path(directory):
        return directory.rstrip("\\/") + "\\" + filename
    return directory.rstrip("/") + "/" + filename


class BackupOrchestrator:
    """Executes backup batches."""

    def __init__(
        self,
        connector_factory: ConnectorFactory = SqlConnector,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._connector_factory = connector_factory
        self._clock = clock

    async def run_backups(
        self, profile: ConnectionProfile, jobs: Sequence[BackupJob]
    ) -> Result[BatchReport, ConnectionFailure]:
        """
        Back up every job's database over one connection.

        Returns:
            Success with the BatchReport (one outcome per job, same order), or
            Failure if the shared connection could not be opened

        Raises:
            ValueError: If ``jobs`` is empty or contains a malformed job
        """
        jobs = tuple(jobs)
        self._validate_jobs(jobs)
        return await asyncio.to_thread(self._run_batch_blocking, profile, jobs)

    @staticmethod
    def _validate_jobs(jobs: tuple[BackupJob, ...]) -> None:
        if not jobs:
            raise ValueError("At least one backup job is required")
        for job in jobs:
            if not isinstance(job, BackupJob):
                raise ValueError(f"Not a backup job: {job!r}")
            if not job.database_name or not job.destination_directory:
                raise ValueError(f"Backup job needs a database name and a destination directory: {job!r}")

    def _run_batch_blocking(
        self, profile: ConnectionProfile, jobs: tuple[BackupJob, ...]
    ) -> Result[BatchReport, ConnectionFailure]:
        logger.info("Starting backup batch of %d database(s) on %s", len(jobs), profile.server)
        try:
            conn = self._connector_factory(profile).connect()
        except (pyodbc.Error, DriverNotFoundError) as e:
            failure = connection_failure(profile, e)
            logger.error("Backup batch aborted, cannot connect to %s: %s", profile.server, failure.message)
            return Failure(failure)

        aggregator = ResultAggregator()
        try:
            for job in jobs:
                aggregator.collect(job, self._run_job(conn, profile, job))
        finally:
            conn.close()

        report = aggregator.report()
        logger.info(
            "Backup batch finished on %s: %d succeeded, %d failed",
            profile.server, len(report.succeeded), len(report.failed)
        )
        return Success(report)

    def _run_job(self, conn: pyodbc.Connection, profile: ConnectionProfile, job: BackupJob) -> Result[str, str]:
        file_path = destination_path(job.destination_directory, job.database_name, self._clock())
        logger.info("Backing up [%s] to %s", job.database_name, file_path)
        try:
            conn.timeout = profile.operation_timeout_seconds
            cursor = conn.cursor()
            try:
                cursor.execute(backup_database_statement(job.database_name), file_path)
                # BACKUP reports progress as extra result sets; errors can surface while draining
                while cursor.nextset():
                    pass
            finally:
                cursor.close()
        except Exception as e:  # pylint: disable=broad-except
            detail = format_error_detail(e)
            logger.error("Backup of [%s] failed: %s", job.database_name, detail)
            return Failure(detail)

        logger.info("Backup of [%s] completed", job.database_name)
        return Success(file_path)
