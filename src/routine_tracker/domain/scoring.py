"""Domain models for daily scoring."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

DailyStatus = Literal["on_track", "caution", "off_track"]
CalendarColor = Literal["green", "yellow", "red"]
CalendarBadge = Literal["M", "W", "B"]


@dataclass(frozen=True)
class ScoringPolicy:
    """Relative weights of the three daily score components."""

    diet_weight: float
    workout_weight: float
    consistency_weight: float

    @property
    def total(self) -> float:
        return self.diet_weight + self.workout_weight + self.consistency_weight


DEFAULT_SCORING_POLICY = ScoringPolicy(
    diet_weight=0.4, workout_weight=0.45, consistency_weight=0.15
)


@dataclass(frozen=True)
class DailyProgress:
    """Scores and status for one calendar day."""

    date: date
    meal_log_count: int
    workout_log_count: int
    has_body_metric: bool
    diet_score: int
    workout_score: int
    consistency_score: int
    overall_score: int
    status: DailyStatus

    @property
    def has_any_log(self) -> bool:
        return (
            self.meal_log_count > 0
            or self.workout_log_count > 0
            or self.has_body_metric
        )


@dataclass(frozen=True)
class CalendarCell:
    """Calendar view of a single day's progress."""

    date: date
    has_meal_log: bool
    has_workout_log: bool
    has_body_metric: bool
    overall_score: int
    color: CalendarColor
    day_label: str
    badges: tuple[CalendarBadge, ...]
