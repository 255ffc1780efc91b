"""Tests for driver variant resolution and the driver strategies."""

from __future__ import annotations

import pytest

from sqlbind import DriverVariant, resolve_driver
from sqlbind.config import db as config_db
from sqlbind.drivers import DEFAULT_VARIANT, STRATEGIES


PROPS = {
    "JDBC.host": "db1",
    "JDBC.port": "1433",
    "JDBC.schema": "guac",
    "JDBC.username": "u",
    "JDBC.password": "p",
}


@pytest.mark.parametrize(
    ("selection", "variant"),
    [
        ("jtds", DriverVariant.JTDS),
        ("datadirect", DriverVariant.DATADIRECT),
        ("microsoft", DriverVariant.MS),
        ("microsoft2005", DriverVariant.MS_2005),
    ],
)
def test_known_selections_resolve(selection: str, variant: DriverVariant) -> None:
    strategy = resolve_driver(selection)

    assert strategy is STRATEGIES[variant]
    assert strategy.variant is variant


@pytest.mark.parametrize(
    ("selection", "variant"),
    [
        ("MS", DriverVariant.MS),
        ("ms", DriverVariant.MS),
        (" Microsoft ", DriverVariant.MS),
        ("JTDS", DriverVariant.JTDS),
        ("DataDirect", DriverVariant.DATADIRECT),
        ("ms_2005", DriverVariant.MS_2005),
    ],
)
def test_selection_ignores_case_and_accepts_names(
    selection: str,
    variant: DriverVariant,
) -> None:
    assert resolve_driver(selection).variant is variant


@pytest.mark.parametrize("selection", [None, "", "oracle", "microsoft2019", 42])
def test_unknown_selections_resolve_to_default(selection: object) -> None:
    strategy = resolve_driver(selection)  # type: ignore[arg-type]

    assert strategy is STRATEGIES[DEFAULT_VARIANT]
    assert strategy.name == "sqlserver-ms-2005"


def test_enum_members_resolve_directly() -> None:
    for variant in DriverVariant:
        assert resolve_driver(variant) is STRATEGIES[variant]


def test_strategies_are_distinct() -> None:
    names = {strategy.name for strategy in STRATEGIES.values()}

    assert len(names) == len(DriverVariant) == 4


def test_pyodbc_url_includes_odbc_driver() -> None:
    url = STRATEGIES[DriverVariant.MS].url(PROPS)

    assert url.drivername == "mssql+pyodbc"
    assert url.host == "db1"
    assert url.port == 1433
    assert url.database == "guac"
    assert url.username == "u"
    assert url.password == "p"
    assert dict(url.query) == {
        "driver": "ODBC Driver 18 for SQL Server",
        "Encrypt": "no",
    }


def test_pymssql_url_has_no_query() -> None:
    url = STRATEGIES[DriverVariant.JTDS].url(PROPS)

    assert url.drivername == "mssql+pymssql"
    assert dict(url.query) == {}


def test_pymssql_connect_args_carry_encoding() -> None:
    strategy = STRATEGIES[DriverVariant.JTDS]

    args = strategy.connect_args(
        {"characterEncoding": "UTF-8"},
        config_db.Timeout(connect=3, read=10),
    )

    assert args == {"charset": "UTF-8", "login_timeout": 3, "timeout": 10}


def test_pyodbc_connect_args_use_login_timeout() -> None:
    strategy = STRATEGIES[DriverVariant.DATADIRECT]

    assert strategy.connect_args({"characterEncoding": "UTF-8"}) == {"timeout": 5}


def test_odbc_17_url_leaves_encryption_to_the_driver() -> None:
    url = STRATEGIES[DriverVariant.MS_2005].url(PROPS)

    assert dict(url.query) == {"driver": "ODBC Driver 17 for SQL Server"}
