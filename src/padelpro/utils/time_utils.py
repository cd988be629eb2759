"""Time-related utility functions."""

from datetime import date, datetime


def time_to_minutes(time_str: str) -> int:
    """Convert a ``HH:MM`` (or ``HH:MM:SS``) string to minutes after midnight.

    Args:
        time_str: Clock time

    Returns:
        Minute offset from midnight
    """
    parts = time_str.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time: {time_str!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time: {time_str!r}")
    return hours * 60 + minutes


def minutes_to_time(total_minutes: int) -> str:
    """Format a minute offset as ``HH:MM``.

    Offsets past midnight are not wrapped, so a booking ending after
    midnight reads ``24:30`` and still sorts after its start.
    """
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def add_minutes_to_time(time_str: str, minutes: int) -> str:
    """Add minutes to a ``HH:MM`` clock time."""
    return minutes_to_time(time_to_minutes(time_str) + minutes)


def to_day(value: date | datetime | str) -> date:
    """Normalize a calendar day given as date, datetime or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into a naive local ``datetime``.

    Accepts the ``Z`` suffix written by JavaScript's ``Date.toISOString``.
    Offset-aware values are converted to local time.
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
