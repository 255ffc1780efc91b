"""
Contains the configuration records shared by SQL datasource bindings.
"""

import typing as t

import msgspec


# a string holding at least one non-whitespace character
Required = t.Annotated[str, msgspec.Meta(pattern=r"\S")]
Secret = t.Annotated[str, msgspec.Meta(min_length=1)]
Port = t.Annotated[int, msgspec.Meta(ge=1, le=65535)]


class Pool(msgspec.Struct, frozen=True, kw_only=True):
    """
    Holds the configuration for the connection pool.
    """

    # https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.create_engine.params.pool_size
    size: int = 10
    # https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.create_engine.params.max_overflow
    overflow: int = 5
    # https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.create_engine.params.pool_timeout
    timeout: int = 1
    # https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.create_engine.params.pool_recycle
    recycle: int = 120

    # health checks are always on, these are not read from the environment
    ping_enabled: t.ClassVar[bool] = True
    ping_query: t.ClassVar[str] = "SELECT 1"


class Timeout(msgspec.Struct, frozen=True, kw_only=True):
    """
    Holds the configuration for the connection timeouts.
    """

    # time in seconds to wait for the initial connection to the server
    connect: float = 5
    # time for reading from the connection in seconds, default no timeout
    read: float | None = None


class BaseSQL(msgspec.Struct, frozen=True, kw_only=True):
    username: Required
    password: Secret
    database: Required

    # https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.create_engine.params.echo
    echo: bool = False

    pool: Pool = msgspec.field(default_factory=Pool)

    timeout: Timeout = msgspec.field(default_factory=Timeout)
