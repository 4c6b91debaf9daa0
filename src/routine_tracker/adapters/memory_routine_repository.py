"""In-memory routine repository for local runs and tests."""

from dataclasses import dataclass, field
from typing import Literal
from uuid import UUID

from routine_tracker.domain.routines import BodyMetric, Goal, MealLog, WorkoutLog
from routine_tracker.services.dashboard import RoutineRepository


@dataclass
class InMemoryRoutineRepository(RoutineRepository):
    """Stores routine records in dictionaries keyed by record id."""

    source: Literal["memory"] = "memory"
    meal_logs: dict[UUID, MealLog] = field(default_factory=dict)
    workout_logs: dict[UUID, WorkoutLog] = field(default_factory=dict)
    body_metrics: dict[UUID, BodyMetric] = field(default_factory=dict)
    goals: dict[UUID, Goal] = field(default_factory=dict)

    def put_meal_log(self, meal_log: MealLog) -> MealLog:
        self.meal_logs[meal_log.id] = meal_log
        return meal_log

    def put_workout_log(self, workout_log: WorkoutLog) -> WorkoutLog:
        self.workout_logs[workout_log.id] = workout_log
        return workout_log

    def put_body_metric(self, body_metric: BodyMetric) -> BodyMetric:
        self.body_metrics[body_metric.id] = body_metric
        return body_metric

    def put_goal(self, goal: Goal) -> Goal:
        self.goals[goal.id] = goal
        return goal

    def get_meal_log(self, meal_log_id: UUID) -> MealLog | None:
        return self.meal_logs.get(meal_log_id)

    def get_workout_log(self, workout_log_id: UUID) -> WorkoutLog | None:
        return self.workout_logs.get(workout_log_id)

    def get_body_metric(self, body_metric_id: UUID) -> BodyMetric | None:
        return self.body_metrics.get(body_metric_id)

    def get_goal(self, goal_id: UUID) -> Goal | None:
        return self.goals.get(goal_id)

    def list_meal_logs(self, user_id: UUID) -> list[MealLog]:
        return [item for item in self.meal_logs.values() if item.user_id == user_id]

    def list_workout_logs(self, user_id: UUID) -> list[WorkoutLog]:
        return [
            item for item in self.workout_logs.values() if item.user_id == user_id
        ]

    def list_body_metrics(self, user_id: UUID) -> list[BodyMetric]:
        return [
            item for item in self.body_metrics.values() if item.user_id == user_id
        ]

    def list_goals(self, user_id: UUID) -> list[Goal]:
        goals = [item for item in self.goals.values() if item.user_id == user_id]
        return sorted(goals, key=lambda goal: goal.created_at, reverse=True)
