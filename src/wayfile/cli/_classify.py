"""``wayfile classify`` — run the file-name classifier on the given values."""

import argparse

from wayfile.routing.constraints import is_file_name


def run_classify(args: argparse.Namespace) -> None:
    """Print ``file`` or ``not-file`` next to each value, one per line."""
    width = max(len(repr(value)) for value in args.values)
    for value in args.values:
        verdict = "file" if is_file_name(value) else "not-file"
        print(f"{value!r:<{width}}  {verdict}")
