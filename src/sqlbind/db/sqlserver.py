import typing as t

from sqlalchemy import create_engine, engine

from sqlbind import core
from sqlbind.config import db as config_db
from sqlbind.config import sqlserver as config
from sqlbind.configurator import DRIVER_PROPERTIES
from sqlbind.db import json
from sqlbind.registry import Binder

__all__ = ("get_engine",)


ORM_PROPERTIES = (
    "JDBC.host",
    "JDBC.port",
    "JDBC.schema",
    "JDBC.username",
    "JDBC.password",
    "mybatis.pooled.pingEnabled",
)


def get_engine(
    registry: Binder,
    cfg: config.ConnectionConfig | None = None,
) -> engine.Engine:
    """
    Create the engine for the datasource bound into `registry`.

    No connection is made, the pool connects on first use. Pool sizing and
    timeouts are taken from `cfg` when given, otherwise the defaults apply.

    :raises core.ConfigurationError: If a binding is missing.
    """
    try:
        strategy = registry.strategy()
        props = {name: registry.named(name) for name in ORM_PROPERTIES}
        driver_props = registry.named_bag(DRIVER_PROPERTIES)
    except core.BindingNotFound as err:
        raise core.ConfigurationError(f"missing binding: {err}") from err

    pool = cfg.pool if cfg is not None else config_db.Pool()
    timeout = cfg.timeout if cfg is not None else config_db.Timeout()
    echo = cfg.echo if cfg is not None else False

    connect_args: t.Dict[str, t.Any] = strategy.connect_args(driver_props, timeout)

    return create_engine(
        strategy.url(props),
        max_overflow=pool.overflow,
        pool_pre_ping=props["mybatis.pooled.pingEnabled"] == "true",
        pool_recycle=pool.recycle,
        pool_size=pool.size,
        pool_timeout=pool.timeout,
        json_serializer=json.dumps,
        connect_args=connect_args,
        echo=echo,
    )
