#!/usr/bin/env python3
"""Main entry point for hn-filter.

This module provides the CLI interface for filtering a Hacker News listing
export down to the most discussed posts.

Usage:
    python -m hn_filter.main                          # Filter with configured defaults
    python -m hn_filter.main --min-comments 50        # Lower the comment threshold
    python -m hn_filter.main --pick 1,3               # Open posts 1 and 3
    python -m hn_filter.main --debug                  # Show how the sheet is parsed
"""

import argparse
import sys

from hn_filter.agent.runner import run


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value!r}")
    return number


def _index_list(value: str) -> list[int]:
    """Parse "1,3,5" into [1, 3, 5]."""
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers: {value!r}")


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments. If None, uses sys.argv.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="hn-filter",
        description="Filter a Hacker News listing export by score and comment count",
    )

    parser.add_argument(
        "--sheet",
        dest="sheet_path",
        help="CSV/XLSX export, or directory of exports (default: SHEET_PATH)",
    )

    parser.add_argument(
        "--sheet-name",
        help="Worksheet or export name to read (default: SHEET_NAME)",
    )

    parser.add_argument(
        "--min-comments",
        type=_non_negative_int,
        help="Minimum comment count (default: MIN_COMMENTS or 100)",
    )

    parser.add_argument(
        "--min-score",
        type=_non_negative_int,
        help="Minimum score (default: MIN_SCORE or 0)",
    )

    parser.add_argument(
        "--open",
        dest="open_selected",
        action="store_true",
        help="Open the selected posts in the browser",
    )

    parser.add_argument(
        "--pick",
        type=_index_list,
        help="Comma-separated listing numbers to open; implies --open (default: all with a link)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print how the sheet is parsed instead of filtering",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging output",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for hn-filter.

    Args:
        args: Command line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed = parse_args(args)
    return run(
        sheet_path=parsed.sheet_path,
        sheet_name=parsed.sheet_name,
        min_comments=parsed.min_comments,
        min_score=parsed.min_score,
        open_selected=parsed.open_selected or parsed.pick is not None,
        chosen=parsed.pick,
        debug=parsed.debug,
        verbose=parsed.verbose,
    )


if __name__ == "__main__":
    sys.exit(main())
