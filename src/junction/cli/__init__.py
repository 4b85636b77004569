"""Junction CLI — serve an app from an import string.

Entry point registered as ``junction`` in ``pyproject.toml``::

    [project.scripts]
    junction = "junction.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``junction`` command."""
    parser = argparse.ArgumentParser(
        prog="junction",
        description="Junction — prefix-mounted HTTP handler dispatch.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- junction run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app with pounce")
    run_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log dispatch decisions (junction.* loggers at DEBUG)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from junction.cli._run import run_server

        run_server(args)
