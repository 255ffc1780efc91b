import typing as t

import msgspec

from sqlbind import core, drivers
from . import db

__all__ = (
    "ConnectionConfig",
    "load",
    "validate",
)


class Base(db.BaseSQL, frozen=True, kw_only=True):
    # one of jtds | datadirect | microsoft | microsoft2005, anything else
    # selects the default driver
    driver: str | None = None

    # the id of the ORM environment the properties are bound for
    environment_id: str = "guacamole"


class Host(Base, frozen=True, kw_only=True):
    """
    Holds the configuration for a TCP connection to a SQL Server database.
    """

    host: db.Required
    port: db.Port = 1433


ConnectionConfig: t.TypeAlias = Host


def load(data: t.Mapping[str, t.Any]) -> ConnectionConfig:
    """
    Build a validated `ConnectionConfig` from a mapping of field values.

    Keys with a value of `None` are treated as absent. String values are
    coerced, so `{"port": "1433"}` is accepted.

    :raises core.ConfigurationError: If a required field is missing or a
        value fails validation.
    """
    fields = {key: value for key, value in data.items() if value is not None}

    if "driver" in fields:
        fields["driver"] = normalise_driver(fields["driver"])

    try:
        return msgspec.convert(fields, ConnectionConfig, strict=False)
    except msgspec.ValidationError as err:
        raise core.ConfigurationError(str(err)) from err


def normalise_driver(value: t.Any) -> str | None:
    """
    A `DriverVariant` is stored as its selection string, any other non-string
    value is dropped so the default driver is selected.
    """
    match value:
        case drivers.DriverVariant():
            return value.value
        case str():
            return value
        case _:
            return None


def validate(cfg:ConnectionConfig) -> ConnectionConfig:
    """
    Validate a `ConnectionConfig` that was constructed directly.

    msgspec only checks constraints while decoding, so an instance built with
    keyword arguments is round-tripped through `load`.
    """
    return load(msgspec.to_builtins(cfg))
