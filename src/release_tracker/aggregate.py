"""Reduction of release records into per-day counts."""

from __future__ import annotations

from typing import Iterable

from .dates import format_day
from .models import BuildRecord, CountsByDay


def count_releases_by_day(records: Iterable[BuildRecord]) -> CountsByDay:
    """Count releases per local calendar day.

    Keys are ``YYYY-MM-DD`` strings; the counts sum to the number of records.
    """
    counts: CountsByDay = {}
    for record in records:
        day = format_day(record.created_at)
        counts[day] = counts.get(day, 0) + 1
    return counts


def total_releases(counts: CountsByDay) -> int:
    return sum(counts.values())
