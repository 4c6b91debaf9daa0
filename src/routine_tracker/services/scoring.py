"""Daily scoring for meals, workouts and body metrics."""

from collections.abc import Sequence
from datetime import date

from routine_tracker.domain.routines import (
    DEFAULT_WORKOUT_MINUTES,
    MealLog,
    WorkoutIntensity,
    WorkoutLog,
)
from routine_tracker.domain.scoring import (
    DEFAULT_SCORING_POLICY,
    CalendarBadge,
    CalendarCell,
    CalendarColor,
    DailyProgress,
    DailyStatus,
    ScoringPolicy,
)
from routine_tracker.services.dates import clamp_score

FULL_MEALS_PER_DAY = 3
FULL_WORKOUT_MINUTES = 45
ON_TRACK_THRESHOLD = 80
CAUTION_THRESHOLD = 50
BODY_METRIC_CONSISTENCY = 100
ACTIVITY_CONSISTENCY = 70

INTENSITY_MULTIPLIER: dict[WorkoutIntensity, float] = {
    "low": 0.8,
    "medium": 1.0,
    "high": 1.2,
}

_STATUS_COLORS: dict[DailyStatus, CalendarColor] = {
    "on_track": "green",
    "caution": "yellow",
    "off_track": "red",
}


def normalize_policy(policy: ScoringPolicy) -> ScoringPolicy:
    """Scale weights to sum to one, falling back to the default policy."""
    total = policy.total
    if total <= 0:
        return DEFAULT_SCORING_POLICY
    return ScoringPolicy(
        diet_weight=policy.diet_weight / total,
        workout_weight=policy.workout_weight / total,
        consistency_weight=policy.consistency_weight / total,
    )


def diet_score_from_count(meal_count: int) -> int:
    return clamp_score(meal_count / FULL_MEALS_PER_DAY * 100)


def diet_score_from_logs(meal_logs: Sequence[MealLog]) -> int:
    return diet_score_from_count(len(meal_logs))


def workout_score_from_count(workout_count: int) -> int:
    """Treat the count as a fraction of one workout per day."""
    return clamp_score(workout_count * 100)


def workout_score_from_logs(workout_logs: Sequence[WorkoutLog]) -> int:
    """Score intensity-weighted minutes against a 45 minute target."""
    if not workout_logs:
        return 0
    weighted_minutes = sum(
        _workout_minutes(log) * INTENSITY_MULTIPLIER[log.intensity]
        for log in workout_logs
    )
    return clamp_score(weighted_minutes / FULL_WORKOUT_MINUTES * 100)


def _workout_minutes(log: WorkoutLog) -> int:
    if log.duration_minutes is None:
        return DEFAULT_WORKOUT_MINUTES
    return log.duration_minutes


def consistency_score(
    meal_log_count: int, workout_log_count: int, has_body_metric: bool
) -> int:
    if has_body_metric:
        return BODY_METRIC_CONSISTENCY
    if meal_log_count + workout_log_count > 0:
        return ACTIVITY_CONSISTENCY
    return 0


def classify_status(overall_score: int) -> DailyStatus:
    if overall_score >= ON_TRACK_THRESHOLD:
        return "on_track"
    if overall_score >= CAUTION_THRESHOLD:
        return "caution"
    return "off_track"


def calculate_daily_progress(
    day: date,
    meal_logs: Sequence[MealLog],
    workout_logs: Sequence[WorkoutLog],
    has_body_metric: bool = False,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> DailyProgress:
    """Build the scored progress record for a single day."""
    weights = normalize_policy(policy)
    diet = diet_score_from_logs(meal_logs)
    workout = workout_score_from_logs(workout_logs)
    consistency = consistency_score(len(meal_logs), len(workout_logs), has_body_metric)
    overall = clamp_score(
        diet * weights.diet_weight
        + workout * weights.workout_weight
        + consistency * weights.consistency_weight
    )
    return DailyProgress(
        date=day,
        meal_log_count=len(meal_logs),
        workout_log_count=len(workout_logs),
        has_body_metric=has_body_metric,
        diet_score=diet,
        workout_score=workout,
        consistency_score=consistency,
        overall_score=overall,
        status=classify_status(overall),
    )


def calculate_adherence_rate(daily: Sequence[DailyProgress]) -> int:
    """Return the mean overall score, or 0 for an empty window."""
    if not daily:
        return 0
    total = sum(item.overall_score for item in daily)
    return clamp_score(total / len(daily))


def percent_of(count: int, total: int) -> int:
    if total <= 0:
        return 0
    return clamp_score(count / total * 100)


def to_calendar_cell(progress: DailyProgress) -> CalendarCell:
    badges: list[CalendarBadge] = []
    if progress.meal_log_count > 0:
        badges.append("M")
    if progress.workout_log_count > 0:
        badges.append("W")
    if progress.has_body_metric:
        badges.append("B")
    return CalendarCell(
        date=progress.date,
        has_meal_log=progress.meal_log_count > 0,
        has_workout_log=progress.workout_log_count > 0,
        has_body_metric=progress.has_body_metric,
        overall_score=progress.overall_score,
        color=_STATUS_COLORS[progress.status],
        day_label=progress.date.strftime("%m/%d"),
        badges=tuple(badges),
    )


def build_calendar_cells(daily: Sequence[DailyProgress]) -> list[CalendarCell]:
    return [to_calendar_cell(item) for item in daily]

