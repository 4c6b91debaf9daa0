"""Dashboard aggregation over a user's routine logs."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from routine_tracker.domain.dashboard import (
    ConsistencyMeta,
    DashboardSummary,
    ReminderEvaluation,
    SummarySource,
)
from routine_tracker.domain.routines import (
    BodyMetric,
    Goal,
    MealLog,
    RangeKey,
    WorkoutLog,
)
from routine_tracker.domain.scoring import (
    DEFAULT_SCORING_POLICY,
    CalendarCell,
    ScoringPolicy,
)
from routine_tracker.services.buckets import (
    build_buckets,
    range_to_days,
    range_to_granularity,
)
from routine_tracker.services.dates import (
    group_by_date,
    in_window,
    iter_days,
    utc_today,
)
from routine_tracker.services.goals import calculate_goal_progress
from routine_tracker.services.scoring import (
    build_calendar_cells,
    calculate_adherence_rate,
    calculate_daily_progress,
)

logger = logging.getLogger(__name__)


class RoutineRepository(Protocol):
    """Read interface for a user's routine records."""

    source: SummarySource

    def list_meal_logs(self, user_id: UUID) -> list[MealLog]:
        """Return all meal logs for a user."""

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLog]:
        """Return all workout logs for a user."""

    def list_body_metrics(self, user_id: UUID) -> list[BodyMetric]:
        """Return all body metrics for a user."""

    def list_goals(self, user_id: UUID) -> list[Goal]:
        """Return all goals for a user."""


def latest_body_metric(metrics: Sequence[BodyMetric]) -> BodyMetric | None:
    """Return a metric with the most recent date, if any."""
    if not metrics:
        return None
    return max(metrics, key=lambda metric: metric.date)


def window_bounds(range_key: RangeKey, now: datetime) -> tuple[date, date]:
    end = utc_today(now)
    start = end - timedelta(days=range_to_days(range_key) - 1)
    return start, end


def aggregate_dashboard(  # noqa: PLR0913
    range_key: RangeKey,
    meals: Sequence[MealLog],
    workouts: Sequence[WorkoutLog],
    body_metrics: Sequence[BodyMetric],
    goals: Sequence[Goal],
    now: datetime | None = None,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
    source: SummarySource = "memory",
) -> DashboardSummary:
    """Aggregate raw logs into a dashboard summary for the range ending today.

    Soft-deleted records are ignored. The latest body metric is taken from
    all records so older readings still surface when the window has none.
    """
    moment = now or datetime.now(tz=UTC)
    start, end = window_bounds(range_key, moment)
    range_days = range_to_days(range_key)

    live_metrics = [item for item in body_metrics if not item.is_deleted]
    window_meals = [
        item
        for item in meals
        if not item.is_deleted and in_window(item.date, start, end)
    ]
    window_workouts = [
        item
        for item in workouts
        if not item.is_deleted and in_window(item.date, start, end)
    ]
    window_metrics = [
        item for item in live_metrics if in_window(item.date, start, end)
    ]

    meals_by_date = group_by_date(window_meals)
    workouts_by_date = group_by_date(window_workouts)
    metrics_by_date = group_by_date(window_metrics)

    daily = [
        calculate_daily_progress(
            day,
            meals_by_date.get(day, []),
            workouts_by_date.get(day, []),
            has_body_metric=day in metrics_by_date,
            policy=policy,
        )
        for day in iter_days(start, end)
    ]

    latest = latest_body_metric(live_metrics)
    granularity = range_to_granularity(range_key)
    goal_progress = [
        calculate_goal_progress(goal, window_workouts, latest, range_days, as_of=end)
        for goal in goals
    ]

    return DashboardSummary(
        range=range_key,
        granularity=granularity,
        adherence_rate=calculate_adherence_rate(daily),
        total_meals=len(window_meals),
        total_workouts=len(window_workouts),
        latest_weight_kg=latest.weight_kg if latest else None,
        latest_body_fat_pct=latest.body_fat_pct if latest else None,
        daily=daily,
        buckets=build_buckets(daily, granularity),
        goals=goal_progress,
        consistency_meta=ConsistencyMeta(
            source=source,
            refreshed_at=moment,
            range=range_key,
            window_start=start,
            window_end=end,
            covered_days=len(daily),
            meal_count=len(window_meals),
            workout_count=len(window_workouts),
            body_metric_count=len(window_metrics),
            days_with_any_log=sum(1 for item in daily if item.has_any_log),
        ),
    )


def evaluate_reminder(
    day: date,
    meals: Sequence[MealLog],
    workouts: Sequence[WorkoutLog],
    body_metrics: Sequence[BodyMetric],
) -> ReminderEvaluation:
    """Count the live records logged on ``day``."""
    return ReminderEvaluation(
        date=day,
        meal_count=_count_on(day, meals),
        workout_count=_count_on(day, workouts),
        body_metric_count=_count_on(day, body_metrics),
    )


def _count_on(day: date, items: Sequence[MealLog | WorkoutLog | BodyMetric]) -> int:
    return sum(1 for item in items if not item.is_deleted and item.date == day)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DashboardService:
    """Application service that loads a user's logs and aggregates them."""

    repository: RoutineRepository
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY
    clock: Callable[[], datetime] = _utc_now

    def get_summary(
        self, user_id: UUID, range_key: RangeKey, now: datetime | None = None
    ) -> DashboardSummary:
        """Return the dashboard summary for a user and range."""
        summary = aggregate_dashboard(
            range_key,
            meals=self.repository.list_meal_logs(user_id),
            workouts=self.repository.list_workout_logs(user_id),
            body_metrics=self.repository.list_body_metrics(user_id),
            goals=self.repository.list_goals(user_id),
            now=now or self.clock(),
            policy=self.policy,
            source=self.repository.source,
        )
        logger.info(
            "Dashboard aggregated",
            extra={
                "user_id": str(user_id),
                "range": range_key,
                "adherence_rate": summary.adherence_rate,
                "days_with_any_log": summary.consistency_meta.days_with_any_log,
            },
        )
        return summary

    def get_calendar(
        self, user_id: UUID, range_key: RangeKey, now: datetime | None = None
    ) -> list[CalendarCell]:
        """Return calendar cells for every day of the range."""
        summary = self.get_summary(user_id, range_key, now)
        return build_calendar_cells(summary.daily)

    def evaluate_reminder(
        self, user_id: UUID, day: date | None = None
    ) -> ReminderEvaluation:
        """Report whether the user has logged nothing on ``day``."""
        target = day or utc_today(self.clock())
        evaluation = evaluate_reminder(
            target,
            self.repository.list_meal_logs(user_id),
            self.repository.list_workout_logs(user_id),
            self.repository.list_body_metrics(user_id),
        )
        if evaluation.is_missing_log_candidate:
            logger.info(
                "Missing log reminder candidate",
                extra={"user_id": str(user_id), "date": target.isoformat()},
            )
        return evaluation
