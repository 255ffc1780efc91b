from __future__ import annotations

import typing as t

import pytest
import structlog


@pytest.fixture
def fields() -> t.Dict[str, t.Any]:
    return {
        "host": "db1",
        "port": 1433,
        "database": "guac",
        "username": "u",
        "password": "p",
        "driver": "MS",
    }


@pytest.fixture
def properties() -> t.Dict[str, str]:
    return {
        "sqlserver-hostname": "db1",
        "sqlserver-port": "1433",
        "sqlserver-database": "guac",
        "sqlserver-username": "u",
        "sqlserver-password": "p",
        "sqlserver-driver": "microsoft",
    }


@pytest.fixture(autouse=True)
def reset_structlog() -> t.Iterator[None]:
    yield

    structlog.reset_defaults()
