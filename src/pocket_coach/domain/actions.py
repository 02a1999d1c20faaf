"""Domain models for quick actions and time-based prompts."""

from dataclasses import dataclass
from typing import Literal

from pocket_coach.domain.food_log import MealType

PromptTone = Literal["reminder", "encouragement", "suggestion"]
PromptConfidence = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class QuickAction:
    """Shortcut surfaced to the user; higher priority sorts first."""

    id: str
    label: str
    emoji: str
    route: str
    priority: int
    reason: str | None = None


@dataclass(frozen=True)
class TimeBasedPrompt:
    """The single "what to do right now" prompt."""

    message: str
    emoji: str
    tone: PromptTone
    action_text: str | None = None
    action_route: str | None = None


@dataclass(frozen=True)
class MealPrompt:
    """Meal-window detection result."""

    should_prompt: bool
    meal_type: MealType | None
    message: str
    emoji: str
    confidence: PromptConfidence
