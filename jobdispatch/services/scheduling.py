"""Schedule helpers: UTC normalisation and technician booking overlap."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

# A job without an end time blocks this long after its start
DEFAULT_JOB_DURATION = timedelta(minutes=30)


def as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def overlaps(
    a_start: datetime, a_end: datetime | None,
    b_start: datetime, b_end: datetime | None,
) -> bool:
    a_start, b_start = as_utc(a_start), as_utc(b_start)
    end_a = as_utc(a_end) or a_start + DEFAULT_JOB_DURATION
    end_b = as_utc(b_end) or b_start + DEFAULT_JOB_DURATION
    return a_start < end_b and b_start < end_a
