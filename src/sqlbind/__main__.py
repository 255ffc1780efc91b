"""
Startup check for the SQL Server datasource, run with `python -m sqlbind`.

Loads the environment, applies it to an in-memory registry and prints the
resulting bindings, with the password redacted, as JSON.
"""

import argparse
import sys
import typing as t

from sqlbind import core, logging
from sqlbind.configurator import DatasourceConfigurator
from sqlbind.db import json
from sqlbind.environment import SQLServerEnvironment
from sqlbind.registry import Binder


logger = logging.get_logger("sqlbind")


def parse_args(argv: t.Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sqlbind",
        description="Validate the SQL Server datasource configuration",
    )
    parser.add_argument(
        "--file",
        metavar="PATH",
        help="JSON or TOML file holding the sqlserver-* properties "
        "(default: read SQLSERVER_* environment variables)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a binding is registered twice",
    )

    return parser.parse_args(argv)


def main(argv: t.Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    logging.configure()

    source = args.file or "environ"

    try:
        with logging.context(source=source):
            with core.error_boundary("datasource.startup", logger):
                if args.file:
                    env = SQLServerEnvironment.from_file(args.file)
                else:
                    env = SQLServerEnvironment.from_environ()

                binder = Binder(strict=args.strict)

                DatasourceConfigurator(env).apply(binder)
    except core.ConfigurationError:
        return 2

    sys.stdout.write(json.dumps(binder.as_dict()) + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
