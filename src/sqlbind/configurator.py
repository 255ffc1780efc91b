"""
Configures the SQL Server datasource bindings.

The configurator validates the connection configuration once, derives the ORM
and driver properties from it and applies them, together with the selected
driver strategy, to a `Registry`.
"""

import typing as t

from sqlbind import drivers, logging
from sqlbind.config import sqlserver as config
from sqlbind.environment import SQLServerEnvironment
from sqlbind.properties import PropertyBag
from sqlbind.registry import Registry

__all__ = (
    "DatasourceConfigurator",
    "DRIVER_PROPERTIES",
    "Source",
)


logger = logging.get_logger(__name__)

# the name the driver property bag is bound under
DRIVER_PROPERTIES = "JDBC.driverProperties"

Source: t.TypeAlias = (
    config.ConnectionConfig | SQLServerEnvironment | t.Mapping[str, t.Any]
)


def to_config(source: Source) -> config.ConnectionConfig:
    """
    Build a validated `ConnectionConfig` from any supported source.

    :raises core.ConfigurationError: If a required field is missing or invalid.
    """
    match source:
        case config.ConnectionConfig():
            return config.validate(source)
        case SQLServerEnvironment():
            return config.load(source.to_fields())
        case _:
            return config.load(source)


def orm_properties(cfg: config.ConnectionConfig) -> PropertyBag:
    return PropertyBag(
        {
            "mybatis.environment.id": cfg.environment_id,
            "JDBC.host": cfg.host,
            "JDBC.port": cfg.port,
            "JDBC.schema": cfg.database,
            "JDBC.username": cfg.username,
            "JDBC.password": cfg.password,
            "JDBC.autoCommit": False,
            "mybatis.pooled.pingEnabled": cfg.pool.ping_enabled,
            "mybatis.pooled.pingQuery": cfg.pool.ping_query,
        }
    )


def driver_properties(cfg: config.ConnectionConfig) -> PropertyBag:
    return PropertyBag({"characterEncoding": "UTF-8"})


class DatasourceConfigurator:
    """
    Holds the validated configuration and the properties derived from it.

    Nothing is mutated after construction, the property bags can be read from
    any thread.
    """

    __slots__ = (
        "_cfg",
        "_orm_properties",
        "_driver_properties",
        "_strategy",
    )

    _cfg: config.ConnectionConfig
    _orm_properties: PropertyBag
    _driver_properties: PropertyBag
    _strategy: drivers.DriverStrategy

    def __init__(self, source: Source) -> None:
        self._cfg = to_config(source)

        self._orm_properties = orm_properties(self._cfg)
        self._driver_properties = driver_properties(self._cfg)

        self._strategy = self.resolve_driver(self._cfg.driver)

        logger.info(
            "datasource.configured",
            host=self._cfg.host,
            port=self._cfg.port,
            database=self._cfg.database,
            driver=self._strategy.name,
        )

    @property
    def cfg(self) -> config.ConnectionConfig:
        return self._cfg

    @property
    def orm_properties(self) -> PropertyBag:
        return self._orm_properties

    @property
    def driver_properties(self) -> PropertyBag:
        return self._driver_properties

    @property
    def strategy(self) -> drivers.DriverStrategy:
        return self._strategy

    @staticmethod
    def resolve_driver(
        variant: drivers.DriverVariant | str | None,
    ) -> drivers.DriverStrategy:
        """
        Map a driver variant to its strategy, see `drivers.resolve_driver`.
        """
        return drivers.resolve_driver(variant)

    def apply(self, registry: Registry) -> None:
        """
        Bind the driver strategy, each ORM property and the driver property
        bag into the registry.

        Calling this again re-binds everything, whether that is allowed is up
        to the registry.
        """
        logger.info(
            "datasource.bind",
            driver=self._strategy.name,
            properties=len(self._orm_properties),
        )

        registry.bind_strategy(self._strategy)

        for name, value in self._orm_properties.items():
            registry.bind_named_property(name, value)

        registry.bind_named_property_bag(
            DRIVER_PROPERTIES,
            self._driver_properties,
        )
