"""Goal progress against routine and body-composition targets."""

from collections.abc import Sequence
from datetime import date

from routine_tracker.domain.dashboard import GoalProgress
from routine_tracker.domain.routines import BodyMetric, Goal, WorkoutLog
from routine_tracker.services.dates import (
    clamp_score,
    days_between,
    round_one_decimal,
    utc_today,
)

DAYS_PER_WEEK = 7


def target_achievement_rate(latest: float, target: float) -> int:
    """Score closeness of ``latest`` to ``target`` on a 0-100 scale."""
    denominator = max(abs(target), 1)
    deviation = abs(latest - target) / denominator
    return clamp_score((1 - deviation) * 100)


def calculate_goal_progress(
    goal: Goal,
    workout_logs: Sequence[WorkoutLog],
    latest_metric: BodyMetric | None = None,
    range_days: int = 7,
    as_of: date | None = None,
) -> GoalProgress:
    """Project a goal against the workouts and latest metric of a window.

    Every workout in the window counts toward the routine, including
    several on the same day. The weekly average is normalized by the
    window length, never by less than one week.
    """
    completed = len(workout_logs)
    effective_weeks = max(range_days / DAYS_PER_WEEK, 1)
    average_weekly = round_one_decimal(completed / effective_weeks)
    completion_rate = clamp_score(
        average_weekly / max(goal.weekly_routine_target, 1) * 100
    )
    achievement_rates = [completion_rate]

    days_to_d_day = None
    if goal.d_day is not None:
        days_to_d_day = days_between(as_of or utc_today(), goal.d_day)

    latest_weight = latest_metric.weight_kg if latest_metric else None
    weight_delta = None
    weight_rate = None
    if latest_weight is not None and goal.target_weight_kg is not None:
        weight_delta = round_one_decimal(latest_weight - goal.target_weight_kg)
        weight_rate = target_achievement_rate(latest_weight, goal.target_weight_kg)
        achievement_rates.append(weight_rate)

    latest_body_fat = latest_metric.body_fat_pct if latest_metric else None
    body_fat_delta = None
    body_fat_rate = None
    if latest_body_fat is not None and goal.target_body_fat is not None:
        body_fat_delta = round_one_decimal(latest_body_fat - goal.target_body_fat)
        body_fat_rate = target_achievement_rate(latest_body_fat, goal.target_body_fat)
        achievement_rates.append(body_fat_rate)

    return GoalProgress(
        weekly_routine_target=goal.weekly_routine_target,
        completed_routine_count=completed,
        average_weekly_workouts=average_weekly,
        routine_completion_rate=completion_rate,
        goal_achievement_rate=clamp_score(
            sum(achievement_rates) / len(achievement_rates)
        ),
        d_day=goal.d_day,
        days_to_d_day=days_to_d_day,
        target_weight_kg=goal.target_weight_kg,
        latest_weight_kg=latest_weight,
        weight_delta_kg=weight_delta,
        weight_achievement_rate=weight_rate,
        target_body_fat=goal.target_body_fat,
        latest_body_fat_pct=latest_body_fat,
        body_fat_delta_pct=body_fat_delta,
        body_fat_achievement_rate=body_fat_rate,
    )
