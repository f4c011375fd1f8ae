"""Release discovery over the paginated Drone build history.

A release is a build promoted to the ``production`` target. Build pages are
walked one at a time until a page comes back empty, a request fails, or the
oldest build on a page predates the window start.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Sequence

from .config import DEFAULT_PAGE_SIZE
from .drone_client import DroneClient
from .errors import ApiError
from .models import BuildRecord, DateWindow, FetchResult, PageOrder, RepositoryRef

logger = logging.getLogger(__name__)

RELEASE_EVENT = "promote"
RELEASE_TARGET = "production"


def is_release(build: BuildRecord) -> bool:
    """Return ``True`` for builds promoted to production."""
    return build.event == RELEASE_EVENT and build.deploy_to == RELEASE_TARGET


def filter_releases(builds: Iterable[BuildRecord], window: DateWindow) -> List[BuildRecord]:
    """Keep production releases created strictly inside ``window``."""
    return [build for build in builds if is_release(build) and window.contains(build.created_at)]


def fetch_releases(
    client: DroneClient,
    repo: RepositoryRef,
    window: DateWindow,
    page_size: int = DEFAULT_PAGE_SIZE,
    page_order: PageOrder = PageOrder.OLDEST_FIRST,
) -> FetchResult:
    """Walk the build pages of ``repo`` and collect releases inside ``window``.

    Business logic:
    - Request pages ``1, 2, ...`` of ``page_size`` builds.
    - An empty page ends the walk.
    - A failed request ends the walk; the result is marked truncated and
      keeps what was collected so far.
    - If the oldest build of a page (as located by ``page_order``) was created
      before ``window.start``, that page is filtered and the walk ends.
    - Otherwise the page is filtered and the next page is requested.

    Records keep page order. ``AuthenticationError`` is not caught.
    """
    releases: List[BuildRecord] = []
    page = 1

    while True:
        try:
            builds = client.list_builds(repo, page=page, size=page_size)
        except ApiError as exc:
            logger.debug(
                "Stopping build walk after failed page request",
                extra={"repo": repo.slug, "page": page, "error": str(exc)},
            )
            return FetchResult.truncated_by(repo, releases, pages_requested=page, cause=exc)

        if not builds:
            return FetchResult.complete(repo, releases, pages_requested=page)

        releases.extend(filter_releases(builds, window))

        if page_order.oldest(builds).created_at < window.start:
            return FetchResult.complete(repo, releases, pages_requested=page)

        page += 1


def _log_result(result: FetchResult) -> None:
    extra = {
        "repo": result.repo.slug,
        "pages_requested": result.pages_requested,
        "releases": len(result.records),
    }
    if result.truncated:
        logger.warning(
            "Build history truncated after a failed page request: %s",
            result.cause,
            extra=extra,
        )
    else:
        logger.info("Collected releases", extra=extra)


def collect_releases(
    client: DroneClient,
    repos: Sequence[RepositoryRef],
    window: DateWindow,
    page_size: int = DEFAULT_PAGE_SIZE,
    page_order: PageOrder = PageOrder.OLDEST_FIRST,
    workers: int = 1,
) -> List[BuildRecord]:
    """Collect releases of every repository into one list.

    With ``workers > 1`` repositories are fetched concurrently; each walk is
    still sequential and results are concatenated in repository order.
    """

    def _fetch(repo: RepositoryRef) -> FetchResult:
        return fetch_releases(client, repo, window, page_size=page_size, page_order=page_order)

    if workers > 1 and len(repos) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_fetch, repos))
    else:
        results = [_fetch(repo) for repo in repos]

    releases: List[BuildRecord] = []
    for result in results:
        _log_result(result)
        releases.extend(result.records)

    return releases
