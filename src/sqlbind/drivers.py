"""
The SQL Server driver variants and the strategies used to connect with them.

Each variant maps to exactly one `DriverStrategy` through `STRATEGIES`. A
driver selection that does not name a known variant resolves to
`DEFAULT_VARIANT`.
"""

from dataclasses import dataclass
import enum
import typing as t

from sqlalchemy.engine import url as engine_url

from sqlbind.config import db as config

__all__ = (
    "DriverVariant",
    "DriverStrategy",
    "DEFAULT_VARIANT",
    "STRATEGIES",
    "resolve_driver",
)


class DriverVariant(enum.Enum):
    # FreeTDS based driver, the jTDS equivalent
    JTDS = "jtds"
    # Progress DataDirect ODBC driver
    DATADIRECT = "datadirect"
    # current Microsoft ODBC driver
    MS = "microsoft"
    # legacy Microsoft ODBC driver
    MS_2005 = "microsoft2005"

    @classmethod
    def parse(cls, value: "DriverVariant | str | None") -> "DriverVariant":
        """
        Parse a driver selection string. Matches either the value or the member
        name, ignoring case and surrounding whitespace.

        Anything unrecognised, including `None`, returns `DEFAULT_VARIANT`.
        """
        if isinstance(value, DriverVariant):
            return value

        if not isinstance(value, str):
            return DEFAULT_VARIANT

        return _SELECTIONS.get(value.strip().lower(), DEFAULT_VARIANT)


DEFAULT_VARIANT = DriverVariant.MS_2005

_SELECTIONS: t.Dict[str, DriverVariant] = {
    **{variant.value: variant for variant in DriverVariant},
    **{variant.name.lower(): variant for variant in DriverVariant},
}


@dataclass(frozen=True, kw_only=True)
class DriverStrategy:
    # the name the strategy is registered under
    name: str
    variant: DriverVariant
    # the SQLAlchemy dialect+driver
    drivername: str
    # the ODBC driver name, only for pyodbc based strategies
    odbc_driver: str | None = None
    # the ODBC `Encrypt` keyword, ODBC Driver 18 encrypts unless told otherwise
    encrypt: str | None = None

    def url(self, props: t.Mapping[str, str]) -> engine_url.URL:
        """
        Build the connection URL from the ORM properties.
        """
        query: t.Dict[str, str] = {}

        if self.odbc_driver is not None:
            query["driver"] = self.odbc_driver

        if self.encrypt is not None:
            query["Encrypt"] = self.encrypt

        return engine_url.URL.create(
            drivername=self.drivername,
            host=props["JDBC.host"],
            port=int(props["JDBC.port"]),
            username=props["JDBC.username"],
            password=props["JDBC.password"],
            database=props["JDBC.schema"],
            query=query,
        )

    def connect_args(
        self,
        props: t.Mapping[str, str],
        timeout: config.Timeout | None = None,
    ) -> t.Dict[str, t.Any]:
        """
        Translate the driver properties into DBAPI `connect` keyword arguments.
        """
        timeout = timeout or config.Timeout()

        match self.drivername:
            case "mssql+pymssql":
                connect_args: t.Dict[str, t.Any] = dict(
                    login_timeout=int(timeout.connect),
                    timeout=int(timeout.read or 0),
                )

                if "characterEncoding" in props:
                    connect_args["charset"] = props["characterEncoding"]

                return connect_args
            case "mssql+pyodbc":
                # ODBC drivers talk UTF-16 to the server, no charset option
                return dict(
                    timeout=int(timeout.connect),
                )
            case _:
                raise ValueError(f"Unknown driver: {self.drivername}")


STRATEGIES: t.Mapping[DriverVariant, DriverStrategy] = {
    DriverVariant.JTDS: DriverStrategy(
        name="sqlserver-jtds",
        variant=DriverVariant.JTDS,
        drivername="mssql+pymssql",
    ),
    DriverVariant.DATADIRECT: DriverStrategy(
        name="sqlserver-datadirect",
        variant=DriverVariant.DATADIRECT,
        drivername="mssql+pyodbc",
        odbc_driver="DataDirect 8.0 SQL Server Wire Protocol",
    ),
    DriverVariant.MS: DriverStrategy(
        name="sqlserver-ms",
        variant=DriverVariant.MS,
        drivername="mssql+pyodbc",
        odbc_driver="ODBC Driver 18 for SQL Server",
        encrypt="no",
    ),
    DriverVariant.MS_2005: DriverStrategy(
        name="sqlserver-ms-2005",
        variant=DriverVariant.MS_2005,
        drivername="mssql+pyodbc",
        odbc_driver="ODBC Driver 17 for SQL Server",
    ),
}


def resolve_driver(variant: DriverVariant | str | None) -> DriverStrategy:
    """
    Map a driver variant, or a driver selection string, to its strategy.

    Never fails, unknown selections resolve to the default strategy.
    """
    return STRATEGIES[DriverVariant.parse(variant)]
