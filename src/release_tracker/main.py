"""Entry point wiring CLI, configuration, Drone fetches and report output."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Sequence

from .aggregate import count_releases_by_day, total_releases
from .cli import parse_args
from .config import load_config
from .drone_client import DroneClient
from .errors import AuthenticationError, ConfigurationError, RenderError
from .heatmap import CalendarHeatmapRenderer
from .releases import collect_releases
from .report import emit_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_AUTH = 3
EXIT_RENDER = 4


def configure_logging(verbose: bool) -> None:
    """Send log records to standard error; standard output carries the report."""
    level_name = "INFO" if verbose else os.getenv("LOG_LEVEL", "WARNING")
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str, exit_code: int) -> int:
    print(f"error: {message}", file=sys.stderr)
    return exit_code


def orchestrate_release_tracking(argv: Optional[Sequence[str]] = None) -> int:
    """Run one release-tracking pass and return the process exit code."""
    try:
        args = parse_args(argv)
    except SystemExit as exc:
        # argparse has already printed usage and the error to stderr.
        return EXIT_OK if exc.code in (0, None) else EXIT_ERROR

    try:
        configure_logging(args.verbose)

        config = load_config(
            repos=args.repos,
            date_from=args.date_from,
            date_to=args.date_to,
            output=args.output,
            page_size=args.page_size,
            page_order=args.page_order,
            workers=args.workers,
        )

        drone_client = DroneClient(config=config)
        releases = collect_releases(
            drone_client,
            config.repos,
            config.window,
            page_size=config.page_size,
            page_order=config.page_order,
            workers=config.workers,
        )

        counts = count_releases_by_day(releases)
        logger.info(
            "Aggregated releases",
            extra={
                "repos": len(config.repos),
                "days": len(counts),
                "releases": total_releases(counts),
            },
        )

        renderer = CalendarHeatmapRenderer(
            command=config.heatmap_command,
            assets_path=config.assets_path,
        )
        emit_report(counts, config.output, renderer=renderer)
        return EXIT_OK
    except ConfigurationError as exc:
        return _fail(str(exc), EXIT_ERROR)
    except AuthenticationError as exc:
        return _fail(str(exc), EXIT_AUTH)
    except RenderError as exc:
        logger.critical("Heatmap rendering failed", extra={"error": str(exc)})
        return _fail(str(exc), EXIT_RENDER)
    except Exception as exc:
        logger.exception("Unexpected failure")
        return _fail(f"unexpected error: {exc}", EXIT_ERROR)


def main() -> None:
    raise SystemExit(orchestrate_release_tracking())


if __name__ == "__main__":
    main()
