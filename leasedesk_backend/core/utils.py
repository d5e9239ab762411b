"""Common utilities for LeaseDesk backend."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime | None = None) -> int:
    """Milliseconds since the epoch for ``moment`` (defaults to now)."""
    moment = moment or utc_now()
    return int(moment.timestamp() * 1000)

