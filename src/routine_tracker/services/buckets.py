"""Range policy and trend bucketing of daily progress."""

from collections.abc import Callable, Sequence
from datetime import date

from routine_tracker.domain.dashboard import DashboardBucket
from routine_tracker.domain.routines import Granularity, RangeKey
from routine_tracker.domain.scoring import DailyProgress
from routine_tracker.services.dates import clamp_score, iso_week_key, month_key
from routine_tracker.services.scoring import percent_of

RANGE_DAYS: dict[RangeKey, int] = {"7d": 7, "30d": 30, "90d": 90}
RANGE_GRANULARITY: dict[RangeKey, Granularity] = {
    "7d": "day",
    "30d": "week",
    "90d": "month",
}


def range_to_days(range_key: RangeKey) -> int:
    return RANGE_DAYS.get(range_key, 7)


def range_to_granularity(range_key: RangeKey) -> Granularity:
    return RANGE_GRANULARITY.get(range_key, "day")


def build_buckets(
    daily: Sequence[DailyProgress], granularity: Granularity
) -> list[DashboardBucket]:
    """Group daily progress into day, ISO week or month buckets.

    Buckets are ordered by their first day. Rates are the share of days in
    the bucket with at least one meal, workout or body metric.
    """
    if granularity == "day":
        buckets = [_day_bucket(item) for item in daily]
    else:
        key_for = _GROUP_KEYS[granularity]
        groups: dict[str, list[DailyProgress]] = {}
        for item in daily:
            groups.setdefault(key_for(item.date), []).append(item)
        buckets = [_group_bucket(key, members) for key, members in groups.items()]
    return sorted(buckets, key=lambda bucket: bucket.start)


_GROUP_KEYS: dict[Granularity, Callable[[date], str]] = {
    "week": iso_week_key,
    "month": month_key,
}


def _day_bucket(item: DailyProgress) -> DashboardBucket:
    return DashboardBucket(
        key=item.date.isoformat(),
        label=item.date.strftime("%m-%d"),
        start=item.date,
        end=item.date,
        avg_overall_score=item.overall_score,
        meal_check_rate=100 if item.meal_log_count > 0 else 0,
        workout_rate=100 if item.workout_log_count > 0 else 0,
        body_metric_rate=100 if item.has_body_metric else 0,
    )


def _group_bucket(key: str, members: list[DailyProgress]) -> DashboardBucket:
    size = len(members)
    return DashboardBucket(
        key=key,
        label=key,
        start=min(item.date for item in members),
        end=max(item.date for item in members),
        avg_overall_score=clamp_score(
            sum(item.overall_score for item in members) / size
        ),
        meal_check_rate=percent_of(
            sum(1 for item in members if item.meal_log_count > 0), size
        ),
        workout_rate=percent_of(
            sum(1 for item in members if item.workout_log_count > 0), size
        ),
        body_metric_rate=percent_of(
            sum(1 for item in members if item.has_body_metric), size
        ),
    )
