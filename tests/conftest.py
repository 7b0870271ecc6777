"""
Shared test fixtures.

Replaces pyodbc.connect / pyodbc.drivers with an in-memory fake so the
prober, enumerator and orchestrator run their real code paths without a
SQL Server.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Callable

import pyodbc
import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection
        self.rows: list = []
        self.closed = False

    def execute(self, sql: str, *params):
        if self.connection.closed:
            raise pyodbc.ProgrammingError("HY000", "Attempt to use a closed connection.")
        self.connection.executed.append((sql, params, self.connection.timeout))
        outcome = self.connection.on_execute(sql, params)
        if isinstance(outcome, BaseException):
            raise outcome
        self.rows = list(outcome or [])
        return self

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def nextset(self) -> bool:
        return False

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, on_execute: Callable) -> None:
        self.on_execute = on_execute
        self.executed: list[tuple] = []
        self.timeout = 0
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def close(self) -> None:
        self.closed = True


class FakeOdbc:
    """Records connect calls and hands out FakeConnections."""

    def __init__(self) -> None:
        self.drivers = ["ODBC Driver 17 for SQL Server"]
        self.connect_calls: list[tuple[str, dict]] = []
        self.connections: list[FakeConnection] = []
        self.connect_error: BaseException | None = None
        self.on_execute: Callable = lambda sql, params: []

    def connect(self, conn_str: str, **kwargs) -> FakeConnection:
        self.connect_calls.append((conn_str, kwargs))
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(lambda sql, params: self.on_execute(sql, params))
        self.connections.append(conn)
        return conn

    @staticmethod
    def error(message: str, sqlstate: str = "42000", cls: type = pyodbc.ProgrammingError) -> pyodbc.Error:
        return cls(sqlstate, message)

    @staticmethod
    def row(**columns) -> SimpleNamespace:
        return SimpleNamespace(**columns)


@pytest.fixture
def fake_odbc(monkeypatch: pytest.MonkeyPatch) -> FakeOdbc:
    fake = FakeOdbc()
    monkeypatch.setattr(pyodbc, "connect", fake.connect)
    monkeypatch.setattr(pyodbc, "drivers", lambda: list(fake.drivers))
    return fake


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock starting at 2024-03-05 09:07:01 and advancing 1 s per call."""
    start = datetime(2024, 3, 5, 9, 7, 1)
    calls = {"n": 0}

    def _now() -> datetime:
        value = start + timedelta(seconds=calls["n"])
        calls["n"] += 1
        return value

    return _now
