"""Date helpers; every date on the command line uses one fixed UTC pattern."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from trailctl.core.errors import InvalidDate, InvalidTimeWindow
from trailctl.core.models import TimeWindow

DATE_FORMAT = "%m/%d/%Y %H:%M:%S"


def unix_from_date(value: str, *, label: str = "date") -> int:
    """Parse `MM/DD/YYYY HH:MM:SS` (UTC) into Unix seconds."""
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise InvalidDate(label, value, DATE_FORMAT) from e
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def date_from_unix(timestamp: int) -> str:
    """Format Unix seconds with the fixed UTC pattern."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(DATE_FORMAT)


def time_window(start_date: str, end_date: str) -> TimeWindow:
    """Build a validated window; start must not be after end."""
    start = unix_from_date(start_date, label="startdate")
    end = unix_from_date(end_date, label="enddate")
    if start > end:
        raise InvalidTimeWindow(start, end)
    return TimeWindow(start_unix=start, end_unix=end)


def default_window_dates(now: datetime | None = None, *, days: int = 1) -> tuple[str, str]:
    """Return (start, end) strings covering the last `days` days up to `now`."""
    now = now or datetime.now(tz=timezone.utc)
    return date_from_unix(int((now - timedelta(days=days)).timestamp())), date_from_unix(int(now.timestamp()))
