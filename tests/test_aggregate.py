"""Tests for per-day release aggregation."""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from conftest import build, epoch
from release_tracker.aggregate import count_releases_by_day, total_releases


def test_count_releases_by_day_groups_by_local_day():
    """Verify records on the same day share one key."""
    records = [
        build(epoch(2023, 1, 1, hour=9)),
        build(epoch(2023, 1, 1, hour=17)),
        build(epoch(2023, 1, 2, hour=11)),
    ]

    counts = count_releases_by_day(records)

    assert counts == {"2023-01-01": 2, "2023-01-02": 1}
    assert total_releases(counts) == len(records)


def test_count_releases_by_day_empty():
    assert count_releases_by_day([]) == {}
    assert total_releases({}) == 0
