"""Command-line argument parsing for the Drone release tracker."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import DEFAULT_PAGE_SIZE, OUTPUT_FORMATS
from .models import PageOrder


def _count(value: str) -> int:
    """Parse a page size or worker count; both must be at least 1."""
    if not value.strip().isdigit() or int(value) < 1:
        raise argparse.ArgumentTypeError(f"expected a whole number of at least 1, got '{value}'")
    return int(value)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for release tracking.

    Returns:
        Parsed CLI arguments. ``date_from`` and ``date_to`` stay ``None`` when
        omitted so the configuration layer can apply the quarter defaults.
    """
    parser = argparse.ArgumentParser(
        prog="drone-release-tracker",
        description=(
            "Count production promotions of Drone CI repositories per day and "
            "print them as JSON or as a calendar heatmap image."
        ),
    )

    parser.add_argument(
        "--from",
        dest="date_from",
        default=None,
        help="Releases after this date (YYYY-MM-DD) are included (default: start of current quarter).",
    )
    parser.add_argument(
        "--to",
        dest="date_to",
        default=None,
        help="Releases before this date (YYYY-MM-DD) are included (default: end of current quarter).",
    )
    parser.add_argument(
        "--repos",
        default="octocat/demo",
        help="Comma-separated list of <namespace>/<name> repositories (default: octocat/demo).",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default="png",
        help="Output format (default: png).",
    )
    parser.add_argument(
        "--page-size",
        type=_count,
        default=DEFAULT_PAGE_SIZE,
        help=f"Number of builds requested per page (default: {DEFAULT_PAGE_SIZE}).",
    )
    parser.add_argument(
        "--page-order",
        type=PageOrder,
        choices=list(PageOrder),
        default=PageOrder.OLDEST_FIRST,
        metavar="{" + ",".join(order.value for order in PageOrder) + "}",
        help="Which end of a build page holds the oldest build (default: oldest-first).",
    )
    parser.add_argument(
        "--workers",
        type=_count,
        default=1,
        help="Number of repositories fetched concurrently (default: 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to standard error.",
    )

    return parser.parse_args(argv)
