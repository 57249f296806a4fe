"""``wayfile check`` — route template analysis command.

Resolves an import string to a Router and runs route analysis, printing
results to stdout.  Exits with code 1 if errors are found.
"""

import argparse
import sys

from wayfile.cli._resolve import resolve_router
from wayfile.terminal import format_check_result


def run_check(args: argparse.Namespace) -> None:
    """Analyse the routes of a wayfile Router and print the findings."""
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = router.check()
    print(format_check_result(result, color=getattr(args, "color", None)))
    if not result.ok:
        raise SystemExit(1)
