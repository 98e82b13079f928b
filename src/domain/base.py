from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, the representation stored in every DateTime column"""
    return datetime.now(UTC).replace(tzinfo=None)
