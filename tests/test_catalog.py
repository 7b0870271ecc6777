"""Tests for the database catalog enumerator."""

import pytest

from autodbbackup.application.catalog import CatalogEnumerator
from autodbbackup.application.configurator import build_profile
from autodbbackup.domain.results import Failure, Success
from autodbbackup.domain.targets import resolve_target
from autodbbackup.infrastructure.sql.queries import ONLINE_USER_DATABASES_QUERY, SYSTEM_DATABASES


def _profile():
    return build_profile(resolve_target("SQL01\\PROD"), "sa", "x")


@pytest.mark.anyio
async def test_lists_database_names_in_server_order(fake_odbc):
    fake_odbc.on_execute = lambda sql, params: [fake_odbc.row(name=n) for n in ("HR", "Sales", "tempdb")]

    result = await CatalogEnumerator().list_databases(_profile())

    assert isinstance(result, Success)
    assert result.value == ("HR", "Sales", "tempdb")
    assert fake_odbc.connections[0].closed is True


@pytest.mark.anyio
async def test_empty_catalog(fake_odbc):
    result = await CatalogEnumerator().list_databases(_profile())
    assert isinstance(result, Success)
    assert result.value == ()


@pytest.mark.anyio
async def test_failure_aborts_listing(fake_odbc):
    fake_odbc.on_execute = lambda sql, params: fake_odbc.error(
        "The SELECT permission was denied on the object 'databases'. (229)"
    )

    result = await CatalogEnumerator().list_databases(_profile())

    assert isinstance(result, Failure)
    assert "permission was denied" in result.error.message
    assert fake_odbc.connections[0].closed is True


def test_query_filters_online_user_databases():
    query = ONLINE_USER_DATABASES_QUERY
    assert "state = 0" in query
    assert "ORDER BY name" in query
    for name in SYSTEM_DATABASES:
        assert f"'{name}'" in query
    assert SYSTEM_DATABASES == ("master", "model", "msdb")
