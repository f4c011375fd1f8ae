"""Domain models for Drone release tracking.

These dataclasses intentionally model only the subset of build payload fields
that are required to decide whether a build is a production release.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

CountsByDay = Dict[str, int]


@dataclass(frozen=True, slots=True)
class BuildRecord:
    """Represents one Drone build as returned by the builds endpoint."""

    id: int
    number: int
    created: int
    event: str
    deploy_to: str = ""

    @property
    def created_at(self) -> datetime:
        """Creation time in the local time zone of the process."""
        return datetime.fromtimestamp(self.created).astimezone()


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Identifies a Drone repository by namespace and name."""

    namespace: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Release window; both bounds are exclusive.

    An inverted window (``start > end``) is accepted and simply matches nothing.
    """

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start < moment < self.end


class PageOrder(enum.Enum):
    """Which element of a fetched page holds the oldest build.

    The page walk stops once the oldest build of a page predates the window,
    so this must match the ordering the Drone server actually returns.
    """

    OLDEST_FIRST = "oldest-first"
    NEWEST_FIRST = "newest-first"

    def oldest(self, page: List[BuildRecord]) -> BuildRecord:
        if self is PageOrder.OLDEST_FIRST:
            return page[0]
        return page[-1]


@dataclass(slots=True)
class FetchResult:
    """Outcome of walking the build pages of one repository.

    ``truncated`` is set when a page request failed and the walk stopped early;
    ``cause`` then holds the error that ended it.
    """

    repo: RepositoryRef
    records: List[BuildRecord] = field(default_factory=list)
    pages_requested: int = 0
    truncated: bool = False
    cause: Optional[Exception] = None

    @classmethod
    def complete(
        cls, repo: RepositoryRef, records: List[BuildRecord], pages_requested: int
    ) -> "FetchResult":
        return cls(repo=repo, records=records, pages_requested=pages_requested)

    @classmethod
    def truncated_by(
        cls,
        repo: RepositoryRef,
        records: List[BuildRecord],
        pages_requested: int,
        cause: Exception,
    ) -> "FetchResult":
        return cls(
            repo=repo,
            records=records,
            pages_requested=pages_requested,
            truncated=True,
            cause=cause,
        )
