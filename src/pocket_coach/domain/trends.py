"""Domain models for adherence and weekly trends."""

from dataclasses import dataclass
from typing import Literal

AdherenceBand = Literal[
    "way_under", "slightly_under", "perfect", "slightly_over", "way_over"
]
TrendDirection = Literal["improving", "steady", "declining", "new"]


@dataclass(frozen=True)
class BestDay:
    """Day with the highest primary adherence in a week."""

    date: str
    adherence: float


@dataclass(frozen=True)
class WeeklyTrend:
    """Summary of a week of logging."""

    days_logged: int
    total_days: int
    adherence_rate: float
    trend: TrendDirection
    avg_protein_adherence: float
    avg_calories_adherence: float
    best_day: BestDay | None
    coach_message: str
    emoji: str

SummaryGrade = Literal["A", "B", "C", "D", "F"]


@dataclass(frozen=True)
class SummaryBestDay:
    """Day closest to its targets, labelled for display."""

    label: str
    reason: str


@dataclass(frozen=True)
class WeeklySummaryReport:
    """End-of-week report card over the logged days."""

    week_range: str
    total_days_logged: int
    average_calories: int
    average_protein: int
    average_carbs: int
    average_fat: int
    target_adherence: int
    best_day: SummaryBestDay | None
    areas_to_improve: tuple[str, ...]
    achievements: tuple[str, ...]
    insights: tuple[str, ...]
    overall_grade: SummaryGrade
    motivational_message: str
