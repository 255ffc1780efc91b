from .core import (
    BindingNotFound,
    ConfigurationError,
    DuplicateBindingError,
)
from .configurator import DatasourceConfigurator
from .drivers import DriverStrategy, DriverVariant, resolve_driver
from .environment import SQLServerEnvironment
from .properties import PropertyBag
from .registry import Binder, Registry
from .config.sqlserver import ConnectionConfig

__all__ = (
    "BindingNotFound",
    "ConfigurationError",
    "DuplicateBindingError",
    "DatasourceConfigurator",
    "DriverStrategy",
    "DriverVariant",
    "resolve_driver",
    "SQLServerEnvironment",
    "PropertyBag",
    "Binder",
    "Registry",
    "ConnectionConfig",
)
