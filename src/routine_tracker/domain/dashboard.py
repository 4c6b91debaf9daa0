"""Domain models for dashboard summaries."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from routine_tracker.domain.routines import Granularity, RangeKey
from routine_tracker.domain.scoring import DailyProgress

SummarySource = Literal["memory", "supabase"]


@dataclass(frozen=True)
class DashboardBucket:
    """Averaged progress for one day, ISO week or month."""

    key: str
    label: str
    start: date
    end: date
    avg_overall_score: int
    meal_check_rate: int
    workout_rate: int
    body_metric_rate: int


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a goal against the active window.

    Optional fields stay ``None`` when the goal or latest metric does not
    define them and are omitted when serialized.
    """

    weekly_routine_target: int
    completed_routine_count: int
    average_weekly_workouts: float
    routine_completion_rate: int
    goal_achievement_rate: int
    d_day: date | None = None
    days_to_d_day: int | None = None
    target_weight_kg: float | None = None
    latest_weight_kg: float | None = None
    weight_delta_kg: float | None = None
    weight_achievement_rate: int | None = None
    target_body_fat: float | None = None
    latest_body_fat_pct: float | None = None
    body_fat_delta_pct: float | None = None
    body_fat_achievement_rate: int | None = None


@dataclass(frozen=True)
class ConsistencyMeta:
    """Window boundaries and raw counts behind a summary."""

    source: SummarySource
    refreshed_at: datetime
    range: RangeKey
    window_start: date
    window_end: date
    covered_days: int
    meal_count: int
    workout_count: int
    body_metric_count: int
    days_with_any_log: int


@dataclass(frozen=True)
class DashboardSummary:
    """Full dashboard result for one range."""

    range: RangeKey
    granularity: Granularity
    adherence_rate: int
    total_meals: int
    total_workouts: int
    latest_weight_kg: float | None
    latest_body_fat_pct: float | None
    daily: list[DailyProgress]
    buckets: list[DashboardBucket]
    goals: list[GoalProgress]
    consistency_meta: ConsistencyMeta


@dataclass(frozen=True)
class ReminderEvaluation:
    """Logging counts for one day and whether a reminder is due."""

    date: date
    meal_count: int
    workout_count: int
    body_metric_count: int

    @property
    def is_missing_log_candidate(self) -> bool:
        return (
            self.meal_count == 0
            and self.workout_count == 0
            and self.body_metric_count == 0
        )
