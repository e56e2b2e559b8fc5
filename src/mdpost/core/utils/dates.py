"""Date normalization for post metadata"""

from datetime import date, datetime, timezone


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_datetime(value) -> datetime:
    """Coerce a datetime, date, or ISO-8601 string into a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValueError(f"Invalid date: {value!r}") from e


def format_utc(value: datetime) -> str:
    """Format as YYYY-MM-DD HH:MM:SS in UTC; naive values are taken as local time."""
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def format_timestamp(value: datetime) -> str:
    """Format as YYYY-MM-DD HH:MM:SS without timezone conversion."""
    return value.strftime(TIMESTAMP_FORMAT)
