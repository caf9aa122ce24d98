"""``sprig run`` — development server command."""

import argparse
import logging
import sys

from sprig.cli._resolve import resolve_app
from sprig.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, configure logging, and start the dev server.

    Passing the import string lets the server reimport the app when
    reloading in debug mode.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(
        level=app.config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app.run(args.host, args.port, app_path=args.app)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
