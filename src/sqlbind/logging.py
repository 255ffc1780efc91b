import contextlib
import logging
import sys
import typing as t

import structlog
from structlog import contextvars


Logger: t.TypeAlias = structlog.stdlib.BoundLogger


class LoggingConfig(t.TypedDict):
    level: int


LOGGERS: t.Dict[str, LoggingConfig] = {
    "sqlalchemy.engine": {
        "level": logging.WARNING,
    },
    "sqlalchemy.pool": {
        "level": logging.WARNING,
    },
}


def get_logger(name: str) -> Logger:
    """
    Get a logger with the given name.
    """
    return t.cast(Logger, structlog.getLogger(name))


@contextlib.contextmanager
def context(**kwargs: str):
    """
    Context manager to bind context variables to the current context.
    """
    with contextvars.bound_contextvars(**kwargs):
        yield


def structlog_processors() -> t.List:
    """
    Get the structlog processors to use.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if sys.stderr.isatty():
        # pretty printing when we run in a terminal session
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]
    else:
        # JSON with structured stack traces, e.g. in a container
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    return processors


def configure(
    level: int = logging.INFO,
    loggers: t.Dict[str, LoggingConfig] | None = None,
) -> None:
    """
    Configure the logging system.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    structlog.configure(
        processors=structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name, config in LOGGERS.items():
        logging.getLogger(name).setLevel(config["level"])

    for name, config in (loggers or {}).items():
        logging.getLogger(name).setLevel(config["level"])
