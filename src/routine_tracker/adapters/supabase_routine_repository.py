"""Supabase repository for routine records."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal, TypeVar
from uuid import UUID

from supabase import Client

from routine_tracker.domain.routines import BodyMetric, Goal, MealLog, WorkoutLog
from routine_tracker.services.dashboard import RoutineRepository
from routine_tracker.services.dates import parse_date_key

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

MEAL_LOGS_TABLE = "meal_logs"
WORKOUT_LOGS_TABLE = "workout_logs"
BODY_METRICS_TABLE = "body_metrics"
GOALS_TABLE = "goals"


@dataclass
class SupabaseRoutineRepository(RoutineRepository):
    """Supabase implementation for routine record storage."""

    client: Client
    source: Literal["supabase"] = "supabase"

    def list_meal_logs(self, user_id: UUID) -> list[MealLog]:
        """Return all meal logs for a user ordered by date."""
        rows = self._select_for_user(MEAL_LOGS_TABLE, user_id, "date")
        return _parse_rows(MEAL_LOGS_TABLE, rows, _parse_meal_log)

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLog]:
        """Return all workout logs for a user ordered by date."""
        rows = self._select_for_user(WORKOUT_LOGS_TABLE, user_id, "date")
        return _parse_rows(WORKOUT_LOGS_TABLE, rows, _parse_workout_log)

    def list_body_metrics(self, user_id: UUID) -> list[BodyMetric]:
        """Return all body metrics for a user ordered by date."""
        rows = self._select_for_user(BODY_METRICS_TABLE, user_id, "date")
        return _parse_rows(BODY_METRICS_TABLE, rows, _parse_body_metric)

    def list_goals(self, user_id: UUID) -> list[Goal]:
        """Return goals for a user, most recent first."""
        response = (
            self.client.table(GOALS_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return _parse_rows(GOALS_TABLE, response.data or [], _parse_goal)

    def get_meal_log(self, record_id: UUID) -> MealLog | None:
        """Return a meal log by id, or None when it does not exist."""
        row = self._select_by_id(MEAL_LOGS_TABLE, record_id)
        return _parse_meal_log(row) if row is not None else None

    def get_workout_log(self, record_id: UUID) -> WorkoutLog | None:
        row = self._select_by_id(WORKOUT_LOGS_TABLE, record_id)
        return _parse_workout_log(row) if row is not None else None

    def get_body_metric(self, record_id: UUID) -> BodyMetric | None:
        row = self._select_by_id(BODY_METRICS_TABLE, record_id)
        return _parse_body_metric(row) if row is not None else None

    def get_goal(self, record_id: UUID) -> Goal | None:
        row = self._select_by_id(GOALS_TABLE, record_id)
        return _parse_goal(row) if row is not None else None

    def put_meal_log(self, meal_log: MealLog) -> MealLog:
        """Insert or replace a meal log."""
        self.client.table(MEAL_LOGS_TABLE).upsert(
            {
                **_base_payload(meal_log),
                "meal_type": meal_log.meal_type,
                "food_label": meal_log.food_label,
                "portion_size": meal_log.portion_size,
            }
        ).execute()
        return meal_log

    def put_workout_log(self, workout_log: WorkoutLog) -> WorkoutLog:
        """Insert or replace a workout log."""
        self.client.table(WORKOUT_LOGS_TABLE).upsert(
            {
                **_base_payload(workout_log),
                "body_part": workout_log.body_part,
                "purpose": workout_log.purpose,
                "tool": workout_log.tool,
                "exercise_name": workout_log.exercise_name,
                "sets": workout_log.sets,
                "reps": workout_log.reps,
                "weight_kg": workout_log.weight_kg,
                "duration_minutes": workout_log.duration_minutes,
                "intensity": workout_log.intensity,
            }
        ).execute()
        return workout_log

    def put_body_metric(self, body_metric: BodyMetric) -> BodyMetric:
        """Insert or replace a body metric."""
        self.client.table(BODY_METRICS_TABLE).upsert(
            {
                **_base_payload(body_metric),
                "weight_kg": body_metric.weight_kg,
                "body_fat_pct": body_metric.body_fat_pct,
            }
        ).execute()
        return body_metric

    def put_goal(self, goal: Goal) -> Goal:
        """Insert or replace a goal."""
        self.client.table(GOALS_TABLE).upsert(
            {
                "id": str(goal.id),
                "user_id": str(goal.user_id),
                "weekly_routine_target": goal.weekly_routine_target,
                "d_day": goal.d_day.isoformat() if goal.d_day else None,
                "target_weight_kg": goal.target_weight_kg,
                "target_body_fat": goal.target_body_fat,
                "created_at": goal.created_at.isoformat(),
            }
        ).execute()
        return goal

    def soft_delete(self, table: str, record_id: UUID) -> None:
        """Mark a record deleted without removing the row."""
        self.client.table(table).update(
            {
                "is_deleted": True,
                "deleted_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(record_id)).execute()

    def _select_for_user(
        self, table: str, user_id: UUID, order_column: str
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(table)
            .select("*")
            .eq("user_id", str(user_id))
            .order(order_column, desc=False)
            .execute()
        )
        return response.data or []

    def _select_by_id(self, table: str, record_id: UUID) -> dict[str, object] | None:
        response = (
            self.client.table(table)
            .select("*")
            .eq("id", str(record_id))
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0] if rows else None


def _base_payload(record: MealLog | WorkoutLog | BodyMetric) -> dict[str, object]:
    return {
        "id": str(record.id),
        "user_id": str(record.user_id),
        "date": record.date.isoformat(),
        "created_at": record.created_at.isoformat(),
        "is_deleted": record.is_deleted,
        "deleted_at": record.deleted_at.isoformat() if record.deleted_at else None,
    }

def _parse_rows(
    table: str,
    rows: list[dict[str, object]],
    parse: Callable[[dict[str, object]], RecordT],
) -> list[RecordT]:
    records: list[RecordT] = []
    for row in rows:
        try:
            records.append(parse(row))
        except (KeyError, TypeError, ValueError):
            logger.warning(
                "Skipping unparseable row",
                extra={"table": table, "row_id": row.get("id")},
            )
    return records


def _parse_meal_log(row: dict[str, object]) -> MealLog:
    return MealLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date_key(str(row["date"])),
        meal_type=row["meal_type"],  # type: ignore[arg-type]
        food_label=str(row.get("food_label") or ""),
        portion_size=row.get("portion_size") or "medium",  # type: ignore[arg-type]
        created_at=_parse_timestamp(row.get("created_at")),
        is_deleted=bool(row.get("is_deleted", False)),
        deleted_at=_parse_optional_timestamp(row.get("deleted_at")),
    )


def _parse_workout_log(row: dict[str, object]) -> WorkoutLog:
    return WorkoutLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date_key(str(row["date"])),
        body_part=row["body_part"],  # type: ignore[arg-type]
        purpose=row["purpose"],  # type: ignore[arg-type]
        tool=row["tool"],  # type: ignore[arg-type]
        exercise_name=str(row.get("exercise_name") or ""),
        created_at=_parse_timestamp(row.get("created_at")),
        sets=_optional_int(row.get("sets")),
        reps=_optional_int(row.get("reps")),
        weight_kg=_optional_float(row.get("weight_kg")),
        duration_minutes=_optional_int(row.get("duration_minutes")),
        intensity=row.get("intensity") or "medium",  # type: ignore[arg-type]
        is_deleted=bool(row.get("is_deleted", False)),
        deleted_at=_parse_optional_timestamp(row.get("deleted_at")),
    )


def _parse_body_metric(row: dict[str, object]) -> BodyMetric:
    return BodyMetric(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date_key(str(row["date"])),
        created_at=_parse_timestamp(row.get("created_at")),
        weight_kg=_optional_float(row.get("weight_kg")),
        body_fat_pct=_optional_float(row.get("body_fat_pct")),
        is_deleted=bool(row.get("is_deleted", False)),
        deleted_at=_parse_optional_timestamp(row.get("deleted_at")),
    )


def _parse_goal(row: dict[str, object]) -> Goal:
    d_day_raw = row.get("d_day")
    return Goal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        weekly_routine_target=int(row.get("weekly_routine_target") or 1),
        created_at=_parse_timestamp(row.get("created_at")),
        d_day=parse_date_key(d_day_raw) if isinstance(d_day_raw, str) else None,
        target_weight_kg=_optional_float(row.get("target_weight_kg")),
        target_body_fat=_optional_float(row.get("target_body_fat")),
    )


def _parse_timestamp(raw: object) -> datetime:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return datetime.min.replace(tzinfo=UTC)


def _parse_optional_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)  # type: ignore[arg-type]


def _optional_int(raw: object) -> int | None:
    if raw is None:
        return None
    return int(raw)  # type: ignore[call-overload]
