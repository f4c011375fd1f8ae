"""Configuration parsing and validation for the Drone release tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .dates import default_window, parse_date
from .errors import AuthenticationError, ConfigurationError
from .models import DateWindow, PageOrder, RepositoryRef
from .repos import split_repo_list

OUTPUT_FORMATS = ("json", "png", "jpeg", "gif", "svg")
DEFAULT_PAGE_SIZE = 25
DEFAULT_HEATMAP_COMMAND = "calendarheatmap"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the release tracker."""

    server: str
    token: str
    repos: List[RepositoryRef]
    window: DateWindow
    output: str
    page_size: int = DEFAULT_PAGE_SIZE
    page_order: PageOrder = PageOrder.OLDEST_FIRST
    workers: int = 1
    assets_path: Optional[str] = None
    heatmap_command: str = DEFAULT_HEATMAP_COMMAND


def load_config(
    repos: str,
    date_from: Optional[str],
    date_to: Optional[str],
    output: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    page_order: PageOrder = PageOrder.OLDEST_FIRST,
    workers: int = 1,
    now: Optional[datetime] = None,
) -> Config:
    """Build and validate application configuration.

    Everything is checked before any network traffic happens. Dates that are
    not supplied default to the bounds of the current calendar quarter.

    Args:
        repos: Comma-separated ``namespace/name`` list.
        date_from: Window start as ``YYYY-MM-DD`` or ``None``.
        date_to: Window end as ``YYYY-MM-DD`` or ``None``.
        output: ``json`` or an image format understood by the heatmap renderer.
        page_size: Number of builds requested per page.
        page_order: Which element of a page is the oldest build.
        workers: Number of repositories fetched concurrently.
        now: Reference instant for the default window.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If repositories, dates, output format, page size
            or worker count are invalid.
        AuthenticationError: If ``DRONE_SERVER`` or ``DRONE_TOKEN`` is not set.
    """
    repo_refs = split_repo_list(repos)

    if output not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid value for 'output': expected one of {', '.join(OUTPUT_FORMATS)}."
        )
    if page_size <= 0:
        raise ConfigurationError("Invalid value for 'page_size': expected an integer greater than 0.")
    if workers <= 0:
        raise ConfigurationError("Invalid value for 'workers': expected an integer greater than 0.")

    defaults = default_window(now)
    window = DateWindow(
        start=parse_date(date_from) if date_from else defaults.start,
        end=parse_date(date_to) if date_to else defaults.end,
    )

    server: str = os.getenv("DRONE_SERVER", "").strip()
    token: str = os.getenv("DRONE_TOKEN", "").strip()
    if not server:
        raise AuthenticationError(
            "Missing Drone server address. "
            "Set the 'DRONE_SERVER' environment variable before running the release tracker."
        )
    if not token:
        raise AuthenticationError(
            "Missing required Drone access token. "
            "Set the 'DRONE_TOKEN' environment variable before running the release tracker."
        )

    return Config(
        server=server.rstrip("/"),
        token=token,
        repos=repo_refs,
        window=window,
        output=output,
        page_size=page_size,
        page_order=page_order,
        workers=workers,
        assets_path=os.getenv("CALENDAR_HEATMAP_ASSETS_PATH") or None,
        heatmap_command=os.getenv("CALENDAR_HEATMAP_COMMAND") or DEFAULT_HEATMAP_COMMAND,
    )
