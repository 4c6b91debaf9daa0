"""Tests for dashboard aggregation."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from routine_tracker.services.dashboard import aggregate_dashboard, latest_body_metric
from tests.conftest import make_goal, make_meal, make_metric, make_workout

NOW = datetime(2026, 3, 1, tzinfo=UTC)


def _base_records() -> dict[str, list]:
    return {
        "meals": [
            make_meal(date(2026, 2, 28)),
            make_meal(date(2026, 2, 10)),
            make_meal(date(2025, 12, 20)),
        ],
        "workouts": [
            make_workout(date(2026, 2, 27)),
            make_workout(date(2026, 1, 15), 35, "high"),
        ],
        "body_metrics": [
            make_metric(date(2025, 12, 25), weight_kg=72, body_fat_pct=21)
        ],
        "goals": [],
    }


def test_summary_for_seven_day_range() -> None:
    summary = aggregate_dashboard(
        "7d",
        meals=[make_meal(date(2026, 2, 26)), make_meal(date(2026, 1, 10))],
        workouts=[make_workout(date(2026, 2, 25))],
        body_metrics=[make_metric(date(2026, 2, 26), weight_kg=69, body_fat_pct=18)],
        goals=[make_goal(weekly_routine_target=4)],
        now=datetime(2026, 2, 27, tzinfo=UTC),
    )

    assert summary.range == "7d"
    assert summary.granularity == "day"
    assert summary.total_meals == 1
    assert summary.total_workouts == 1
    assert summary.latest_weight_kg == 69
    assert summary.latest_body_fat_pct == 18
    assert len(summary.goals) == 1
    assert len(summary.daily) == 7
    assert len(summary.buckets) == 7
    meta = summary.consistency_meta
    assert meta.range == "7d"
    assert meta.covered_days == 7
    assert meta.window_start == date(2026, 2, 21)
    assert meta.window_end == date(2026, 2, 27)
    assert meta.meal_count == 1
    assert meta.workout_count == 1
    assert meta.body_metric_count == 1
    assert meta.days_with_any_log == 2


@pytest.mark.parametrize(
    ("range_key", "days", "start", "meals", "workouts", "metrics", "active_days"),
    [
        ("30d", 30, date(2026, 1, 31), 2, 1, 0, 3),
        ("90d", 90, date(2025, 12, 2), 3, 2, 1, 6),
    ],
)
def test_totals_align_with_range_window(  # noqa: PLR0913
    range_key, days, start, meals, workouts, metrics, active_days
) -> None:
    summary = aggregate_dashboard(range_key, now=NOW, **_base_records())

    assert summary.total_meals == meals
    assert summary.total_workouts == workouts
    assert len(summary.daily) == days
    meta = summary.consistency_meta
    assert meta.window_start == start
    assert meta.window_end == date(2026, 3, 1)
    assert meta.covered_days == days
    assert meta.body_metric_count == metrics
    assert meta.days_with_any_log == active_days


def test_granularity_follows_range() -> None:
    weekly = aggregate_dashboard("30d", now=NOW, **_base_records())
    monthly = aggregate_dashboard("90d", now=NOW, **_base_records())

    assert weekly.granularity == "week"
    assert [bucket.key for bucket in weekly.buckets][0] == "2026-W05"
    assert monthly.granularity == "month"
    assert [bucket.key for bucket in monthly.buckets] == [
        "2025-12",
        "2026-01",
        "2026-02",
        "2026-03",
    ]


def test_goal_progress_uses_latest_metric_outside_window() -> None:
    summary = aggregate_dashboard(
        "30d",
        meals=[],
        workouts=[make_workout(date(2026, 2, 28))],
        body_metrics=[make_metric(date(2026, 1, 20), weight_kg=71.5, body_fat_pct=19)],
        goals=[
            make_goal(
                weekly_routine_target=4,
                d_day=date(2026, 3, 10),
                target_weight_kg=70,
                target_body_fat=18,
            )
        ],
        now=NOW,
    )

    (goal,) = summary.goals
    assert goal.d_day == date(2026, 3, 10)
    assert goal.days_to_d_day == 9
    assert goal.weight_delta_kg == 1.5
    assert goal.body_fat_delta_pct == 1.0
    assert isinstance(goal.goal_achievement_rate, int)
    assert summary.latest_weight_kg == 71.5
    assert summary.consistency_meta.body_metric_count == 0


@pytest.mark.parametrize(("range_key", "days"), [("7d", 7), ("30d", 30), ("90d", 90)])
def test_empty_input_is_zero_filled(range_key, days) -> None:
    summary = aggregate_dashboard(range_key, [], [], [], [], now=NOW)

    assert len(summary.daily) == days
    assert all(item.overall_score == 0 for item in summary.daily)
    assert all(item.status == "off_track" for item in summary.daily)
    assert summary.adherence_rate == 0
    assert summary.total_meals == 0
    assert summary.latest_weight_kg is None
    assert summary.latest_body_fat_pct is None
    assert summary.goals == []
    assert summary.consistency_meta.days_with_any_log == 0


def test_daily_series_covers_every_day_in_order() -> None:
    summary = aggregate_dashboard("30d", now=NOW, **_base_records())

    days = [item.date for item in summary.daily]
    assert days[0] == date(2026, 1, 31)
    assert days[-1] == date(2026, 3, 1)
    assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


def test_aggregation_is_idempotent_and_leaves_inputs_untouched() -> None:
    records = _base_records()
    snapshot = {key: list(value) for key, value in records.items()}

    first = aggregate_dashboard("90d", now=NOW, **records)
    second = aggregate_dashboard("90d", now=NOW, **records)

    assert first == second
    assert records == snapshot


def test_soft_deleted_records_are_ignored() -> None:
    summary = aggregate_dashboard(
        "7d",
        meals=[make_meal(date(2026, 2, 28), is_deleted=True)],
        workouts=[make_workout(date(2026, 2, 28), is_deleted=True)],
        body_metrics=[],
        goals=[],
        now=NOW,
    )

    assert summary.total_meals == 0
    assert summary.total_workouts == 0
    assert summary.consistency_meta.days_with_any_log == 0


def test_window_end_uses_utc_calendar_day() -> None:
    seoul = timezone(timedelta(hours=9))
    summary = aggregate_dashboard(
        "7d", [], [], [], [], now=datetime(2026, 3, 1, 8, 0, tzinfo=seoul)
    )

    assert summary.consistency_meta.window_end == date(2026, 2, 28)
    assert summary.daily[-1].date == date(2026, 2, 28)


def test_adherence_rate_is_mean_of_daily_scores() -> None:
    day = date(2026, 3, 1)
    summary = aggregate_dashboard(
        "7d",
        meals=[make_meal(day)] * 3,
        workouts=[make_workout(day, 45)],
        body_metrics=[make_metric(day)],
        goals=[],
        now=NOW,
    )

    assert summary.daily[-1].overall_score == 100
    assert summary.adherence_rate == 14


def test_latest_body_metric_picks_most_recent_date() -> None:
    older = make_metric(date(2026, 1, 1), weight_kg=75)
    newer = make_metric(date(2026, 2, 1), weight_kg=72)

    assert latest_body_metric([newer, older]) is newer
    assert latest_body_metric([]) is None
