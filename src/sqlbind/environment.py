"""
The environment a SQL Server datasource is configured from.

Properties use the Guacamole naming, e.g. `sqlserver-hostname`. The same
properties can be supplied through the process environment
(`SQLSERVER_HOSTNAME`) or a JSON/TOML file.
"""

import os
import pathlib
import typing as t

import msgspec

from sqlbind import core

__all__ = (
    "SQLServerEnvironment",
    "PROPERTIES",
    "DEFAULT_PORT",
)


DEFAULT_PORT = 1433

PROPERTIES: t.Tuple[str, ...] = (
    "sqlserver-hostname",
    "sqlserver-port",
    "sqlserver-database",
    "sqlserver-username",
    "sqlserver-password",
    "sqlserver-driver",
)


class SQLServerEnvironment:
    """
    Read-only view of the SQL Server properties.

    Getters return `None` for a property that is absent or blank, except
    `get_port` which falls back to `DEFAULT_PORT`.
    """

    _properties: t.Dict[str, str]

    def __init__(self, properties: t.Mapping[str, t.Any] | None = None) -> None:
        self._properties = {
            key: str(value)
            for key, value in (properties or {}).items()
            if value is not None
        }

    @classmethod
    def from_environ(
        cls,
        environ: t.Mapping[str, str] | None = None,
    ) -> "SQLServerEnvironment":
        """
        Read the properties from environment variables, `sqlserver-hostname`
        is read from `SQLSERVER_HOSTNAME`.
        """
        if environ is None:
            environ = os.environ

        properties: t.Dict[str, str] = {}

        for name in PROPERTIES:
            value = environ.get(to_env_var(name))

            if value is not None:
                properties[name] = value

        return cls(properties)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "SQLServerEnvironment":
        """
        Read the properties from a `.json` or `.toml` file.

        Either the full property names are used as top level keys, or the
        short names (`hostname`, `port`, ...) inside a `sqlserver` table.
        """
        path = pathlib.Path(path)

        try:
            raw = path.read_bytes()
        except OSError as err:
            raise core.ConfigurationError(f"unable to read {path}: {err}") from err

        try:
            match path.suffix.lower():
                case ".json":
                    data = msgspec.json.decode(raw, type=t.Dict[str, t.Any])
                case ".toml":
                    data = msgspec.toml.decode(raw, type=t.Dict[str, t.Any])
                case _:
                    raise core.ConfigurationError(
                        f"unsupported configuration file type: {path}"
                    )
        except msgspec.DecodeError as err:
            raise core.ConfigurationError(f"unable to decode {path}: {err}") from err

        section = data.get("sqlserver")

        if isinstance(section, dict):
            data = {f"sqlserver-{key}": value for key, value in section.items()}

        return cls(data)

    def get(self, name: str) -> str | None:
        value = self._properties.get(name)

        if value is None or not value.strip():
            return None

        return value.strip()

    def get_hostname(self) -> str | None:
        return self.get("sqlserver-hostname")

    def get_port(self) -> int:
        """
        :raises core.ConfigurationError: If the port is not an integer between
            1 and 65535.
        """
        value = self.get("sqlserver-port")

        if value is None:
            return DEFAULT_PORT

        try:
            port = int(value)
        except ValueError:
            raise core.ConfigurationError(
                f"sqlserver-port must be an integer, got {value!r}"
            ) from None

        if not 1 <= port <= 65535:
            raise core.ConfigurationError(
                f"sqlserver-port must be between 1 and 65535, got {port}"
            )

        return port

    def get_database(self) -> str | None:
        return self.get("sqlserver-database")

    def get_username(self) -> str | None:
        return self.get("sqlserver-username")

    def get_password(self) -> str | None:
        # passwords are taken as is, only an empty value counts as absent
        return self._properties.get("sqlserver-password") or None

    def get_driver(self) -> str | None:
        return self.get("sqlserver-driver")

    def to_fields(self) -> t.Dict[str, t.Any]:
        """
        Returns the `ConnectionConfig` fields held by this environment.
        """
        return {
            "host": self.get_hostname(),
            "port": self.get_port(),
            "database": self.get_database(),
            "username": self.get_username(),
            "password": self.get_password(),
            "driver": self.get_driver(),
        }


def to_env_var(name: str) -> str:
    return name.upper().replace("-", "_")
