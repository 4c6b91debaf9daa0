"""JSON payload builders for dashboard responses."""

from routine_tracker.domain.dashboard import (
    ConsistencyMeta,
    DashboardBucket,
    DashboardSummary,
    GoalProgress,
    ReminderEvaluation,
)
from routine_tracker.domain.scoring import CalendarCell, DailyProgress


def daily_payload(progress: DailyProgress) -> dict[str, object]:
    return {
        "date": progress.date.isoformat(),
        "mealLogCount": progress.meal_log_count,
        "workoutLogCount": progress.workout_log_count,
        "hasBodyMetric": progress.has_body_metric,
        "dietScore": progress.diet_score,
        "workoutScore": progress.workout_score,
        "consistencyScore": progress.consistency_score,
        "overallScore": progress.overall_score,
        "status": progress.status,
    }


def bucket_payload(bucket: DashboardBucket) -> dict[str, object]:
    return {
        "key": bucket.key,
        "label": bucket.label,
        "from": bucket.start.isoformat(),
        "to": bucket.end.isoformat(),
        "avgOverallScore": bucket.avg_overall_score,
        "mealCheckRate": bucket.meal_check_rate,
        "workoutRate": bucket.workout_rate,
        "bodyMetricRate": bucket.body_metric_rate,
    }


def goal_payload(progress: GoalProgress) -> dict[str, object]:
    """Serialize goal progress, omitting optional fields that are unset."""
    payload: dict[str, object] = {
        "weeklyRoutineTarget": progress.weekly_routine_target,
        "completedRoutineCount": progress.completed_routine_count,
        "averageWeeklyWorkouts": progress.average_weekly_workouts,
        "routineCompletionRate": progress.routine_completion_rate,
        "goalAchievementRate": progress.goal_achievement_rate,
    }
    optional: dict[str, object | None] = {
        "dDay": progress.d_day.isoformat() if progress.d_day else None,
        "daysToDday": progress.days_to_d_day,
        "targetWeightKg": progress.target_weight_kg,
        "latestWeightKg": progress.latest_weight_kg,
        "weightDeltaKg": progress.weight_delta_kg,
        "weightAchievementRate": progress.weight_achievement_rate,
        "targetBodyFat": progress.target_body_fat,
        "latestBodyFatPct": progress.latest_body_fat_pct,
        "bodyFatDeltaPct": progress.body_fat_delta_pct,
        "bodyFatAchievementRate": progress.body_fat_achievement_rate,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    return payload


def meta_payload(meta: ConsistencyMeta) -> dict[str, object]:
    return {
        "source": meta.source,
        "refreshedAt": meta.refreshed_at.isoformat(),
        "range": meta.range,
        "windowStart": meta.window_start.isoformat(),
        "windowEnd": meta.window_end.isoformat(),
        "coveredDays": meta.covered_days,
        "mealCount": meta.meal_count,
        "workoutCount": meta.workout_count,
        "bodyMetricCount": meta.body_metric_count,
        "daysWithAnyLog": meta.days_with_any_log,
    }


def summary_payload(summary: DashboardSummary) -> dict[str, object]:
    return {
        "range": summary.range,
        "granularity": summary.granularity,
        "adherenceRate": summary.adherence_rate,
        "totalMeals": summary.total_meals,
        "totalWorkouts": summary.total_workouts,
        "latestWeightKg": summary.latest_weight_kg,
        "latestBodyFatPct": summary.latest_body_fat_pct,
        "daily": [daily_payload(item) for item in summary.daily],
        "buckets": [bucket_payload(item) for item in summary.buckets],
        "goals": [goal_payload(item) for item in summary.goals],
        "consistencyMeta": meta_payload(summary.consistency_meta),
    }


def calendar_payload(cell: CalendarCell) -> dict[str, object]:
    return {
        "date": cell.date.isoformat(),
        "hasMealLog": cell.has_meal_log,
        "hasWorkoutLog": cell.has_workout_log,
        "hasBodyMetric": cell.has_body_metric,
        "overallScore": cell.overall_score,
        "color": cell.color,
        "dayLabel": cell.day_label,
        "badges": list(cell.badges),
    }


def reminder_payload(evaluation: ReminderEvaluation) -> dict[str, object]:
    return {
        "date": evaluation.date.isoformat(),
        "mealCount": evaluation.meal_count,
        "workoutCount": evaluation.workout_count,
        "bodyMetricCount": evaluation.body_metric_count,
        "isMissingLogCandidate": evaluation.is_missing_log_candidate,
    }
