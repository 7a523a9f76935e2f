from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime. Every stored timestamp uses this."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
