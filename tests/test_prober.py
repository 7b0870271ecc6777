"""Tests for the server prober."""

import pytest

from autodbbackup.application.configurator import build_profile
from autodbbackup.application.prober import ServerProber
from autodbbackup.domain.results import Failure, Success
from autodbbackup.domain.targets import resolve_target
from autodbbackup.infrastructure.sql.queries import SERVER_IDENTITY_QUERY


def _profile(address="10.0.0.5"):
    return build_profile(resolve_target(address), "sa", "x")


def _identity_rows(fake_odbc, version, level="RTM", edition="Developer Edition (64-bit)"):
    return [fake_odbc.row(ProductVersion=version, ProductLevel=level, Edition=edition)]


@pytest.mark.anyio
async def test_probe_reports_identity_and_year(fake_odbc):
    fake_odbc.on_execute = lambda sql, params: _identity_rows(fake_odbc, "15.0.2000.5")

    result = await ServerProber().probe(_profile())

    assert isinstance(result, Success)
    identity = result.value
    assert identity.raw_version_string == "15.0.2000.5"
    assert identity.product_level == "RTM"
    assert identity.edition == "Developer Edition (64-bit)"
    assert identity.product_generation_label == "2019"
    assert fake_odbc.connections[0].executed[0][0] == SERVER_IDENTITY_QUERY
    assert fake_odbc.connections[0].closed is True


@pytest.mark.anyio
async def test_unknown_version_is_not_an_error(fake_odbc):
    fake_odbc.on_execute = lambda sql, params: _identity_rows(fake_odbc, "99.0.100.1")

    result = await ServerProber().probe(_profile())

    assert isinstance(result, Success)
    assert result.value.product_generation_label is None


@pytest.mark.anyio
async def test_connection_failure_keeps_driver_message(fake_odbc):
    message = "[28000] [Microsoft][ODBC Driver 17 for SQL Server][SQL Server]Login failed for user 'sa'. (18456)"
    fake_odbc.connect_error = fake_odbc.error(message, "28000")

    result = await ServerProber().probe(_profile())

    assert isinstance(result, Failure)
    assert result.error.message == message
    assert result.error.sqlstate == "28000"
    assert result.error.server == "10.0.0.5,1433"


@pytest.mark.anyio
async def test_query_failure_still_closes_connection(fake_odbc):
    fake_odbc.on_execute = lambda sql, params: fake_odbc.error("Query timeout expired", "HYT00")

    result = await ServerProber().probe(_profile())

    assert isinstance(result, Failure)
    assert result.error.message == "Query timeout expired"
    assert fake_odbc.connections[0].closed is True


@pytest.mark.anyio
async def test_missing_driver_is_a_connection_failure(fake_odbc):
    fake_odbc.drivers = []

    result = await ServerProber().probe(_profile())

    assert isinstance(result, Failure)
    assert "ODBC" in result.error.message
    assert fake_odbc.connect_calls == []
