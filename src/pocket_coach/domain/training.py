"""Domain models for training summaries."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TrainingPlanSummary:
    """Active training plan as shown on the dashboard."""

    id: int
    name: str
    duration_weeks: int
    current_week: int
    current_block: str
    training_days_per_week: int
    is_active: bool


@dataclass(frozen=True)
class TodayWorkout:
    """Workout scheduled for today."""

    template_id: int | None
    name: str
    is_rest_day: bool
    exercises: tuple[str, ...]


@dataclass(frozen=True)
class PersonalRecord:
    """Best set recorded for an exercise."""

    exercise_name: str
    weight: float
    reps: int
    achieved_on: date | None
