"""Shared test fixtures."""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from routine_tracker.adapters.memory_routine_repository import (
    InMemoryRoutineRepository,
)
from routine_tracker.config import Settings
from routine_tracker.containers import AppContainer
from routine_tracker.domain.routines import (
    BodyMetric,
    Goal,
    MealLog,
    WorkoutIntensity,
    WorkoutLog,
)
from routine_tracker.services.dashboard import DashboardService

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
USER_ID = UUID("00000000-0000-4000-8000-000000000001")


def make_meal(
    day: date, user_id: UUID = USER_ID, *, is_deleted: bool = False
) -> MealLog:
    return MealLog(
        id=uuid4(),
        user_id=user_id,
        date=day,
        meal_type="lunch",
        food_label="Bibimbap",
        portion_size="medium",
        created_at=datetime(day.year, day.month, day.day, tzinfo=UTC),
        is_deleted=is_deleted,
    )


def make_workout(
    day: date,
    duration_minutes: int | None = 30,
    intensity: WorkoutIntensity = "medium",
    user_id: UUID = USER_ID,
    *,
    is_deleted: bool = False,
) -> WorkoutLog:
    return WorkoutLog(
        id=uuid4(),
        user_id=user_id,
        date=day,
        body_part="full_body",
        purpose="muscle_gain",
        tool="dumbbell",
        exercise_name="Circuit",
        created_at=datetime(day.year, day.month, day.day, tzinfo=UTC),
        duration_minutes=duration_minutes,
        intensity=intensity,
        is_deleted=is_deleted,
    )


def make_metric(
    day: date,
    weight_kg: float | None = 70.0,
    body_fat_pct: float | None = 18.0,
    user_id: UUID = USER_ID,
) -> BodyMetric:
    return BodyMetric(
        id=uuid4(),
        user_id=user_id,
        date=day,
        created_at=datetime(day.year, day.month, day.day, tzinfo=UTC),
        weight_kg=weight_kg,
        body_fat_pct=body_fat_pct,
    )


def make_goal(  # noqa: PLR0913
    weekly_routine_target: int = 4,
    d_day: date | None = None,
    target_weight_kg: float | None = None,
    target_body_fat: float | None = None,
    user_id: UUID = USER_ID,
    created_at: datetime = datetime(2026, 2, 1, tzinfo=UTC),
) -> Goal:
    return Goal(
        id=uuid4(),
        user_id=user_id,
        weekly_routine_target=weekly_routine_target,
        created_at=created_at,
        d_day=d_day,
        target_weight_kg=target_weight_kg,
        target_body_fat=target_body_fat,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory")


@pytest.fixture
def repository() -> InMemoryRoutineRepository:
    return InMemoryRoutineRepository()


@pytest.fixture
def dashboard_service(repository: InMemoryRoutineRepository) -> DashboardService:
    return DashboardService(repository=repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryRoutineRepository,
    dashboard_service: DashboardService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        routine_repository=repository,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
