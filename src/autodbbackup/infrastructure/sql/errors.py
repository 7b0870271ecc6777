"""
ODBC error helpers.

pyodbc raises ``pyodbc.Error`` with ``args == (sqlstate, message)``. When the
server reports several diagnostics for one statement (BACKUP typically
reports the root cause followed by "BACKUP DATABASE is terminating
abnormally"), the driver joins them into one message separated by
"; [SQLSTATE]". These helpers split them back apart.
"""

from __future__ import annotations

import re

import pyodbc

DETAIL_SEPARATOR = " | "

_DIAGNOSTIC_BOUNDARY = re.compile(r";\s*(?=\[[0-9A-Z]{5}\])")


class DriverNotFoundError(RuntimeError):
    """No SQL Server ODBC driver is installed."""


def error_message(exc: BaseException) -> str:
    """Primary message of an exception, verbatim from the driver when available."""
    if isinstance(exc, pyodbc.Error) and len(exc.args) >= 2:
        return str(exc.args[1])
    return str(exc) or exc.__class__.__name__


def error_sqlstate(exc: BaseException) -> str | None:
    """SQLSTATE code of a pyodbc error, if present."""
    if isinstance(exc, pyodbc.Error) and len(exc.args) >= 2:
        return str(exc.args[0])
    return None


def collect_error_details(exc: BaseException) -> list[str]:
    """
    Primary message followed by every preceding/chained diagnostic.

    Walks ``__cause__``/``__context__`` and splits driver messages into
    individual diagnostic records. Duplicates are dropped, order is kept.
    """
    details: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for part in _DIAGNOSTIC_BOUNDARY.split(error_message(current)):
            part = part.strip()
            if part and part not in details:
                details.append(part)
        current = current.__cause__ or current.__context__
    return details


def format_error_detail(exc: BaseException) -> str:
    """Pipe-separated diagnostic text for a failed command."""
    return DETAIL_SEPARATOR.join(collect_error_details(exc))
