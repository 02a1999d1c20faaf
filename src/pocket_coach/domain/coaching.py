"""Domain models for coach-style messages."""

from dataclasses import dataclass
from typing import Literal

CoachTone = Literal[
    "encouraging", "celebrating", "motivating", "supportive", "neutral"
]
SummaryTone = Literal["great", "good", "okay", "tough"]


@dataclass(frozen=True)
class CoachMessage:
    """Short coach message with an emoji and tone."""

    text: str
    emoji: str
    tone: CoachTone


@dataclass(frozen=True)
class YesterdaySummary:
    """Recap of yesterday's adherence."""

    date: str
    adherence_rate: float
    overall_tone: SummaryTone
    message: str
    emoji: str
    highlight: str


@dataclass(frozen=True)
class InactivityStatus:
    """Result of the inactivity check-in rule."""

    is_inactive: bool
    days_since_last_log: int
    should_show_check_in: bool
    message: str


QuestionCategory = Literal["progress", "planning", "nutrition", "motivation"]


@dataclass(frozen=True)
class SuggestedQuestion:
    """Question offered as a one-tap prompt in the coach chat."""

    text: str
    emoji: str
    category: QuestionCategory
