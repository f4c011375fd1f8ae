"""Calendar helpers: quarter bounds, date parsing and day keys."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from .errors import ConfigurationError
from .models import DateWindow

DAY_FORMAT = "%Y-%m-%d"


def _quarter_start_month(month: int) -> int:
    return ((month - 1) // 3) * 3 + 1


def _midnight(moment: datetime, year: int, month: int, day: int = 1) -> datetime:
    return moment.replace(year=year, month=month, day=day, hour=0, minute=0, second=0, microsecond=0)


def quarter_start(now: datetime) -> datetime:
    """Return midnight of the first day of the quarter containing ``now``.

    The returned value keeps the ``tzinfo`` of ``now``.
    """
    return _midnight(now, now.year, _quarter_start_month(now.month))


def quarter_end(now: datetime) -> datetime:
    """Return midnight of the last day of the quarter containing ``now``.

    Computed as the day before the first day of the following quarter, so the
    fourth quarter rolls over to January of the next year before stepping back
    to December 31.
    """
    next_month = _quarter_start_month(now.month) + 3
    year = now.year
    if next_month > 12:
        next_month -= 12
        year += 1
    return _midnight(now, year, next_month) - timedelta(days=1)


def default_window(now: Optional[datetime] = None) -> DateWindow:
    """Build the current-quarter window used when no dates are supplied.

    Bounds are computed on local wall-clock time and each is then resolved to
    its own UTC offset, so a quarter that starts in a different DST period
    than ``now`` still starts at local midnight.
    """
    if now is None:
        reference = datetime.now()
    elif now.tzinfo is None:
        reference = now
    else:
        reference = now.astimezone().replace(tzinfo=None)
    return DateWindow(
        start=quarter_start(reference).astimezone(),
        end=quarter_end(reference).astimezone(),
    )


def parse_date(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` string into local midnight.

    Raises:
        ConfigurationError: If the value does not match ``YYYY-MM-DD``.
    """
    try:
        parsed = datetime.strptime(value, DAY_FORMAT)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid date '{value}': expected the YYYY-MM-DD format."
        ) from exc
    return parsed.astimezone()


def format_day(moment: datetime) -> str:
    return moment.strftime(DAY_FORMAT)
