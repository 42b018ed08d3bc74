from __future__ import annotations

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_naive() -> datetime:
    return utc_now().replace(tzinfo=None)


def naive_cutoff(*, days: int = 0, seconds: int = 0) -> datetime:
    """Naive UTC instant ``days``/``seconds`` in the past, for column filters."""
    return utc_now_naive() - timedelta(days=days, seconds=seconds)


def isoformat_or_none(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
