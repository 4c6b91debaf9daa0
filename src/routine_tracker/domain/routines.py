"""Domain models for logged routine records."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from uuid import UUID

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
PortionSize = Literal["small", "medium", "large"]
BodyPart = Literal[
    "chest", "back", "legs", "core", "shoulders", "arms", "full_body", "cardio"
]
WorkoutPurpose = Literal["muscle_gain", "fat_loss", "endurance", "mobility", "recovery"]
WorkoutTool = Literal[
    "bodyweight", "dumbbell", "machine", "barbell", "kettlebell", "mixed"
]
WorkoutIntensity = Literal["low", "medium", "high"]

RangeKey = Literal["7d", "30d", "90d"]
Granularity = Literal["day", "week", "month"]

DEFAULT_WORKOUT_MINUTES = 30


@dataclass(frozen=True)
class MealLog:
    """A single logged meal."""

    id: UUID
    user_id: UUID
    date: date
    meal_type: MealType
    food_label: str
    portion_size: PortionSize
    created_at: datetime
    is_deleted: bool = False
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class WorkoutLog:
    """A single logged workout; duration defaults to 30 minutes when absent."""

    id: UUID
    user_id: UUID
    date: date
    body_part: BodyPart
    purpose: WorkoutPurpose
    tool: WorkoutTool
    exercise_name: str
    created_at: datetime
    sets: int | None = None
    reps: int | None = None
    weight_kg: float | None = None
    duration_minutes: int | None = None
    intensity: WorkoutIntensity = "medium"
    is_deleted: bool = False
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class BodyMetric:
    """A body measurement; at least one of weight or body fat is present."""

    id: UUID
    user_id: UUID
    date: date
    created_at: datetime
    weight_kg: float | None = None
    body_fat_pct: float | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class Goal:
    """A user's routine and body-composition goal."""

    id: UUID
    user_id: UUID
    weekly_routine_target: int
    created_at: datetime
    d_day: date | None = None
    target_weight_kg: float | None = None
    target_body_fat: float | None = None
