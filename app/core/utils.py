from datetime import datetime, timezone

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def to_utc(value: datetime) -> datetime:
    # Naive values are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
