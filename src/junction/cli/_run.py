"""``junction run`` — resolve an app and serve it."""

import argparse
import logging
import sys

from junction.cli._resolve import resolve_app, serve


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it until interrupted."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    try:
        target = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    serve(target, args.host, args.port)
