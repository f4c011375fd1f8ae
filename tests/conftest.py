"""Shared fixtures for release tracker tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from release_tracker.models import BuildRecord, DateWindow


def epoch(year: int, month: int, day: int, hour: int = 12) -> int:
    """Epoch seconds for a local wall-clock time."""
    return int(datetime(year, month, day, hour).timestamp())


def build(
    created: int,
    event: str = "promote",
    deploy_to: str = "production",
    build_id: int = 1,
) -> BuildRecord:
    return BuildRecord(id=build_id, number=build_id, created=created, event=event, deploy_to=deploy_to)


@pytest.fixture
def q1_window() -> DateWindow:
    return DateWindow(
        start=datetime(2023, 1, 1).astimezone(),
        end=datetime(2023, 3, 31).astimezone(),
    )
