"""Tests for building the engine from the bound datasource."""

from __future__ import annotations

import typing as t

import pytest

from sqlbind import Binder, ConfigurationError, DatasourceConfigurator
from sqlbind.config import sqlserver as config
from sqlbind.db import get_engine, json
from sqlbind.db import sqlserver as db_sqlserver


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, t.Any]:
    calls: dict[str, t.Any] = {}

    def fake_create_engine(url: t.Any, **kwargs: t.Any) -> str:
        calls["url"] = url
        calls["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_sqlserver, "create_engine", fake_create_engine)

    return calls


def _bound(fields: dict[str, t.Any]) -> Binder:
    binder = Binder()
    DatasourceConfigurator(fields).apply(binder)
    return binder


def test_get_engine_uses_bindings(
    fields: dict[str, t.Any],
    captured: dict[str, t.Any],
) -> None:
    assert get_engine(_bound(fields)) == "engine"

    url = captured["url"]
    assert url.drivername == "mssql+pyodbc"
    assert url.host == "db1"
    assert url.port == 1433
    assert url.database == "guac"
    assert dict(url.query) == {
        "driver": "ODBC Driver 18 for SQL Server",
        "Encrypt": "no",
    }

    kwargs = captured["kwargs"]
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 10
    assert kwargs["max_overflow"] == 5
    assert kwargs["connect_args"] == {"timeout": 5}
    assert kwargs["json_serializer"] is json.dumps
    assert kwargs["echo"] is False


def test_get_engine_reads_pool_from_config(
    fields: dict[str, t.Any],
    captured: dict[str, t.Any],
) -> None:
    fields["driver"] = "jtds"
    cfg = config.load({**fields, "pool": {"size": 2, "recycle": 60}, "echo": True})

    get_engine(_bound(fields), cfg)

    kwargs = captured["kwargs"]
    assert captured["url"].drivername == "mssql+pymssql"
    assert kwargs["pool_size"] == 2
    assert kwargs["pool_recycle"] == 60
    assert kwargs["echo"] is True
    assert kwargs["connect_args"]["charset"] == "UTF-8"


def test_get_engine_requires_bindings(captured: dict[str, t.Any]) -> None:
    binder = Binder()

    with pytest.raises(ConfigurationError, match="missing binding"):
        get_engine(binder)

    assert captured == {}


def test_get_engine_does_not_connect(fields: dict[str, t.Any]) -> None:
    pytest.importorskip("pyodbc")

    engine = get_engine(_bound(fields))

    assert engine.url.host == "db1"
    assert engine.pool.size() == 10


def test_json_dumps_uses_to_dict() -> None:
    from sqlbind import PropertyBag

    assert json.loads(json.dumps({"bag": PropertyBag({"a": 1})})) == {"bag": {"a": "1"}}


def test_json_dumps_rejects_unknown_objects() -> None:
    class WithToJson:
        def to_json(self) -> dict:
            return {}

    with pytest.raises((NotImplementedError, TypeError)):
        json.dumps(WithToJson())
