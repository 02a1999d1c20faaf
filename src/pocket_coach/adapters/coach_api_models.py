"""Pydantic models for the coaching backend's JSON payloads."""

from datetime import date, datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from pocket_coach.domain.food_log import (
    DailyAdjustment,
    DailyFoodLog,
    FoodLogEntry,
    MacroTotals,
    MealType,
    parse_day,
)
from pocket_coach.domain.quotes import DailyQuote
from pocket_coach.domain.training import (
    PersonalRecord,
    TodayWorkout,
    TrainingPlanSummary,
)


def _zero_if_null(value: Any) -> Any:
    return 0 if value is None else value


class ApiEnvelope(BaseModel):
    """Common ``{success, data, error}`` wrapper around every response."""

    success: bool = False
    data: Any = None
    error: str | None = None


class MacroTotalsPayload(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _null_macros(cls, value: Any) -> Any:
        return _zero_if_null(value)

    def to_domain(self) -> MacroTotals:
        return MacroTotals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class DailyAdjustmentPayload(BaseModel):
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @field_validator("protein", "carbs", "fat", mode="before")
    @classmethod
    def _null_macros(cls, value: Any) -> Any:
        return _zero_if_null(value)

    def to_domain(self) -> DailyAdjustment:
        return DailyAdjustment(protein=self.protein, carbs=self.carbs, fat=self.fat)


class FoodLogEntryPayload(BaseModel):
    """Logged food item as returned by ``/log`` endpoints."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    food_name: str
    serving_size: float = 0.0
    serving_unit: str = ""
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    meal_type: MealType = "snack"
    logged_at: datetime

    @field_validator(
        "serving_size", "calories", "protein", "carbs", "fat", mode="before"
    )
    @classmethod
    def _null_numbers(cls, value: Any) -> Any:
        return _zero_if_null(value)

    @field_validator("serving_unit", mode="before")
    @classmethod
    def _null_unit(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_domain(self) -> FoodLogEntry:
        return FoodLogEntry(
            id=self.id,
            food_name=self.food_name,
            serving_size=self.serving_size,
            serving_unit=self.serving_unit,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            meal_type=self.meal_type,
            logged_at=self.logged_at,
        )


class DailyFoodLogPayload(BaseModel):
    """One day of entries with totals and targets."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: str
    entries: list[FoodLogEntryPayload] = Field(default_factory=list)
    totals: MacroTotalsPayload = Field(default_factory=MacroTotalsPayload)
    targets: MacroTotalsPayload = Field(default_factory=MacroTotalsPayload)
    base_targets: MacroTotalsPayload | None = Field(
        default=None, validation_alias=AliasChoices("baseTargets", "base_targets")
    )
    daily_adjustment: DailyAdjustmentPayload | None = Field(
        default=None,
        validation_alias=AliasChoices("dailyAdjustment", "daily_adjustment"),
    )
    adjustment_message: str | None = Field(
        default=None,
        validation_alias=AliasChoices("adjustmentMessage", "adjustment_message"),
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_null_collections(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        defaults = {"entries": [], "totals": {}, "targets": {}}
        nulls = {
            key: empty for key, empty in defaults.items() if value.get(key) is None
        }
        return {**value, **nulls} if nulls else value

    def to_domain(self) -> DailyFoodLog:
        day = parse_day(self.date)
        return DailyFoodLog(
            date=day.isoformat() if day else self.date,
            entries=tuple(entry.to_domain() for entry in self.entries),
            totals=self.totals.to_domain(),
            targets=self.targets.to_domain(),
            base_targets=self.base_targets.to_domain() if self.base_targets else None,
            daily_adjustment=(
                self.daily_adjustment.to_domain() if self.daily_adjustment else None
            ),
            adjustment_message=self.adjustment_message,
        )


class TrainingPlanPayload(BaseModel):
    """Active training plan, either bare or wrapped in ``{"plan": ...}``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    duration_weeks: int = 0
    current_week: int = 1
    current_block: str = ""
    training_days_per_week: int = 0
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _unwrap_plan(cls, value: Any) -> Any:
        if isinstance(value, dict) and isinstance(value.get("plan"), dict):
            return value["plan"]
        return value

    def to_domain(self) -> TrainingPlanSummary:
        return TrainingPlanSummary(
            id=self.id,
            name=self.name,
            duration_weeks=self.duration_weeks,
            current_week=self.current_week,
            current_block=self.current_block,
            training_days_per_week=self.training_days_per_week,
            is_active=self.is_active,
        )


class WorkoutExercisePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    exercise_name: str = Field(
        validation_alias=AliasChoices("exerciseName", "exercise_name")
    )


class TodayWorkoutPayload(BaseModel):
    """Workout template scheduled for today."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    workout_name: str = Field(
        default="Rest Day",
        validation_alias=AliasChoices("workout_name", "workoutName", "name"),
    )
    is_rest_day: bool = Field(
        default=False, validation_alias=AliasChoices("isRestDay", "is_rest_day")
    )
    exercises: list[WorkoutExercisePayload] = Field(default_factory=list)

    def to_domain(self) -> TodayWorkout:
        return TodayWorkout(
            template_id=self.id,
            name=self.workout_name,
            is_rest_day=self.is_rest_day or not self.exercises,
            exercises=tuple(exercise.exercise_name for exercise in self.exercises),
        )


class PersonalRecordPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    exercise_name: str
    weight: float = 0.0
    reps: int = 0
    achieved_at: str | None = None

    def to_domain(self) -> PersonalRecord:
        achieved_on: date | None = parse_day(self.achieved_at)
        return PersonalRecord(
            exercise_name=self.exercise_name,
            weight=self.weight,
            reps=self.reps,
            achieved_on=achieved_on,
        )


class QuotePayload(BaseModel):
    quote: str
    author: str = "Unknown"

    def to_domain(self) -> DailyQuote:
        return DailyQuote(quote=self.quote, author=self.author)
