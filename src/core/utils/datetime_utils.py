from datetime import datetime, timezone


def get_utc_now() -> datetime:
    """
    Get the current date and time in UTC.

    This function returns the current time with timezone information set to UTC,
    ensuring that the returned datetime object is offset-aware.

    Returns:
        datetime: The current date and time in UTC with tzinfo set to timezone.utc.
    """
    return datetime.now(timezone.utc)


def ensure_aware_utc(dt: datetime) -> datetime:
    """Label naive datetimes as UTC, convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_unix_seconds(dt: datetime) -> int:
    """Whole seconds since the epoch; sub-second precision is truncated."""
    return int(ensure_aware_utc(dt).timestamp())


def from_unix_seconds(value: int | float) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
