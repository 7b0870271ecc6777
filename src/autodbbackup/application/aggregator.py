"""
Result Aggregator.

Collects per-job results into the BatchReport in the order the jobs ran.
No filtering, reordering or deduplication.
"""

from __future__ import annotations

from autodbbackup.domain.models import BackupJob, BackupOutcome, BatchReport
from autodbbackup.domain.results import Result, Success


class ResultAggregator:
    """Order-preserving collector of backup outcomes."""

    def __init__(self) -> None:
        self._outcomes: list[BackupOutcome] = []

    def collect(self, job: BackupJob, result: Result[str, str]) -> BackupOutcome:
        """
        Record one job result.

        Args:
            job: The job that produced the result
            result: Success carrying the backup file path, or Failure carrying the error detail
        """
        if isinstance(result, Success):
            outcome = BackupOutcome.succeeded(job.database_name, result.value)
        else:
            outcome = BackupOutcome.failed(job.database_name, result.error)
        self._outcomes.append(outcome)
        return outcome

    def report(self) -> BatchReport:
        return BatchReport(outcomes=tuple(self._outcomes))

    def __len__(self) -> int:
        return len(self._outcomes)
