"""Calendar-day helpers shared by the scoring services."""

import math
from collections.abc import Iterable, Iterator
from datetime import UTC, date, datetime, timedelta
from typing import Protocol, TypeVar


class _Dated(Protocol):
    @property
    def date(self) -> date: ...


DatedT = TypeVar("DatedT", bound=_Dated)


def utc_today(now: datetime | None = None) -> date:
    """Return the UTC calendar day of ``now`` (current time by default)."""
    moment = now or datetime.now(tz=UTC)
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.date()


def to_date_key(value: date) -> str:
    return value.isoformat()


def parse_date_key(raw: str) -> date:
    """Parse ``YYYY-MM-DD``, ignoring any trailing time component."""
    return date.fromisoformat(raw[:10])


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def iso_week_key(value: date) -> str:
    year, week, _ = value.isocalendar()
    return f"{year}-W{week:02d}"


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


def in_window(value: date, start: date, end: date) -> bool:
    return start <= value <= end


def group_by_date(items: Iterable[DatedT]) -> dict[date, list[DatedT]]:
    """Group records by calendar day, preserving input order."""
    grouped: dict[date, list[DatedT]] = {}
    for item in items:
        grouped.setdefault(item.date, []).append(item)
    return grouped


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    """Round to the nearest integer and clamp into ``[low, high]``."""
    return max(low, min(high, round_half_up(value)))
