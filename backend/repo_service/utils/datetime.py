from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt_value: datetime | None) -> datetime | None:
    """
    Ensure a datetime is timezone-aware UTC.

    Naive values are assumed to already be in UTC, which is how MongoDB
    hands them back when the client is not ``tz_aware``.
    """
    if dt_value is None:
        return None
    if dt_value.tzinfo is None:
        return dt_value.replace(tzinfo=timezone.utc)
    return dt_value.astimezone(timezone.utc)


def format_timestamp(dt_value: datetime) -> str:
    """Canonical textual form of a timestamp, as sent on the wire."""
    return str(ensure_utc(dt_value))
