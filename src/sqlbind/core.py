import contextlib

from sqlbind import logging

__all__ = (
    "ConfigurationError",
    "DuplicateBindingError",
    "BindingNotFound",
    "error_boundary",
)


class ConfigurationError(ValueError):
    """
    Raised when the datasource configuration is missing a required value or a
    value fails validation.

    This is fatal to startup and is never retried.
    """


class DuplicateBindingError(ConfigurationError):
    """
    Raised by a strict registry when a name is bound more than once.
    """


class BindingNotFound(KeyError):
    """
    Raised when looking up a binding that has not been registered.
    """


@contextlib.contextmanager
def error_boundary(name: str, logger: logging.Logger):
    """
    Context manager that logs the start, stop and any error of a startup step.

    The error is always re-raised.

    :param name: The name of the context.
    :param logger: The logger to use.
    """
    log = logger.bind(error_boundary=name)

    log.info("start")

    try:
        yield log
    except Exception:
        log.exception("error")

        raise
    finally:
        log.info("stop")
