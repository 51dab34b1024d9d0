from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        # sqlite hands back naive datetimes; everything is stored as UTC
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
