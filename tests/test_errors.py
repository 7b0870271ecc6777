"""Tests for ODBC diagnostic extraction."""

import pyodbc

from autodbbackup.infrastructure.sql.errors import (
    collect_error_details,
    error_message,
    error_sqlstate,
    format_error_detail,
)

BACKUP_FAILURE = (
    "[42000] [Microsoft][ODBC Driver 17 for SQL Server][SQL Server]Cannot open backup device "
    "'D:\\Backups\\HR_20240305_090702.bak'. Operating system error 5(Access is denied.). (3201) "
    "(SQLExecDirectW); [42000] [Microsoft][ODBC Driver 17 for SQL Server][SQL Server]"
    "BACKUP DATABASE is terminating abnormally. (3013)"
)


def test_message_comes_from_driver_args():
    exc = pyodbc.ProgrammingError("42000", "Something broke")
    assert error_message(exc) == "Something broke"
    assert error_sqlstate(exc) == "42000"


def test_plain_exception_message():
    assert error_message(RuntimeError("plain")) == "plain"
    assert error_message(TimeoutError()) == "TimeoutError"
    assert error_sqlstate(RuntimeError("plain")) is None


def test_driver_diagnostics_are_split():
    details = collect_error_details(pyodbc.ProgrammingError("42000", BACKUP_FAILURE))
    assert len(details) == 2
    assert "Operating system error 5" in details[0]
    assert details[1].endswith("BACKUP DATABASE is terminating abnormally. (3013)")


def test_chained_errors_follow_primary_message():
    try:
        try:
            raise OSError("network name is no longer available")
        except OSError as inner:
            raise pyodbc.OperationalError("08S01", "Communication link failure") from inner
    except pyodbc.Error as exc:
        detail = format_error_detail(exc)
    assert detail == "Communication link failure | network name is no longer available"


def test_duplicate_messages_are_dropped():
    inner = RuntimeError("same")
    outer = RuntimeError("same")
    outer.__cause__ = inner
    assert collect_error_details(outer) == ["same"]
