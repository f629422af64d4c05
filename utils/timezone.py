"""UTC-everywhere time handling. Promotion windows are compared in UTC only."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def within_window(
    moment: datetime,
    starts_at: datetime | None,
    ends_at: datetime | None,
) -> bool:
    """
    Whether moment falls inside [starts_at, ends_at], both ends inclusive.

    An unset bound leaves that side open. All values must be timezone-aware.
    """
    moment = to_utc(moment)
    if starts_at is not None and moment < to_utc(starts_at):
        return False
    if ends_at is not None and moment > to_utc(ends_at):
        return False
    return True
