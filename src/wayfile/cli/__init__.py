"""Wayfile CLI — classify values, list routes, and analyse route templates.

Entry point registered as ``wayfile`` in ``pyproject.toml``::

    [project.scripts]
    wayfile = "wayfile.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wayfile`` command."""
    parser = argparse.ArgumentParser(
        prog="wayfile",
        description="Wayfile — route constraints that tell file names from pages.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log routing decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wayfile classify --------------------------------------------------
    classify_parser = subparsers.add_parser(
        "classify", help="Report whether values look like file names"
    )
    classify_parser.add_argument("values", nargs="+", help="Values to classify")

    # -- wayfile routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )

    # -- wayfile check -----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Analyse route templates")
    check_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )
    check_parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force colored output on or off",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "classify":
        from wayfile.cli._classify import run_classify

        run_classify(args)
    elif args.command == "routes":
        from wayfile.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from wayfile.cli._check import run_check

        run_check(args)
