"""Time-of-day prompts and meal-window detection."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from pocket_coach.domain.actions import MealPrompt, TimeBasedPrompt
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    MealType,
    entries_of,
    latest_entry,
    localize,
)
from pocket_coach.services.adherence import adherence_percent

PROMPT_INTERVAL = timedelta(hours=2)


@dataclass(frozen=True)
class PromptContext:
    """Snapshot of today's log used by the prompt rules."""

    today_log: DailyFoodLog | None
    now: datetime
    entries_count: int
    last_entry_at: datetime | None

    @classmethod
    def build(cls, today_log: DailyFoodLog | None, now: datetime) -> "PromptContext":
        """Derive the rule inputs from a log and the current time."""
        tz = now.tzinfo or UTC
        last = latest_entry(today_log, tz)
        return cls(
            today_log=today_log,
            now=now.replace(tzinfo=tz),
            entries_count=len(entries_of(today_log)),
            last_entry_at=localize(last.logged_at, tz) if last else None,
        )

    @property
    def hours_since_last_entry(self) -> float | None:
        if self.last_entry_at is None:
            return None
        return (self.now - self.last_entry_at).total_seconds() / 3600


@dataclass(frozen=True)
class PromptRule:
    """Hour range [start_hour, end_hour) plus the data conditions."""

    name: str
    start_hour: int
    end_hour: int
    evaluate: Callable[[PromptContext], TimeBasedPrompt | None]

    def matches_hour(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


def _morning(context: PromptContext) -> TimeBasedPrompt | None:
    if context.entries_count == 0:
        return TimeBasedPrompt(
            message=(
                "Good morning! Starting your day with a protein-rich breakfast "
                "sets you up for success. What are you having?"
            ),
            emoji="🌅",
            tone="suggestion",
            action_text="Log Breakfast",
            action_route="/food-search?mealType=breakfast",
        )
    return None


def _midmorning(context: PromptContext) -> TimeBasedPrompt | None:
    if context.entries_count == 0:
        return TimeBasedPrompt(
            message=(
                "Hey! I haven't seen any meals logged today. Let's get back on "
                "track - log your breakfast or brunch now!"
            ),
            emoji="⏰",
            tone="reminder",
            action_text="Log Now",
            action_route="/food-search",
        )
    log = context.today_log
    if context.entries_count == 1 and log is not None and log.targets.protein > 0:
        pace = log.targets.protein * 0.3
        if log.totals.protein < pace:
            return TimeBasedPrompt(
                message=(
                    f"You've logged {round(log.totals.protein)}g protein so far - "
                    f"aim for at least {round(pace)}g by lunch to stay on track!"
                ),
                emoji="💪",
                tone="encouragement",
            )
    return None


def _lunch(context: PromptContext) -> TimeBasedPrompt | None:
    if context.entries_count == 0:
        return TimeBasedPrompt(
            message=(
                "It's lunch time! Don't skip meals - your body needs consistent "
                "fuel. Log your lunch now!"
            ),
            emoji="🍽️",
            tone="reminder",
            action_text="Log Lunch",
            action_route="/food-search?mealType=lunch",
        )
    if context.entries_count == 1:
        return TimeBasedPrompt(
            message=(
                "Great job logging breakfast! Now let's fuel your afternoon "
                "with a balanced lunch."
            ),
            emoji="🥗",
            tone="encouragement",
            action_text="Log Lunch",
            action_route="/food-search?mealType=lunch",
        )
    return None


def _afternoon(context: PromptContext) -> TimeBasedPrompt | None:
    hours = context.hours_since_last_entry
    if hours is not None and hours >= 4 and context.entries_count < 3:
        return TimeBasedPrompt(
            message=(
                f"It's been {round(hours)} hours since your last meal! "
                "Time for a snack or early dinner?"
            ),
            emoji="🍎",
            tone="reminder",
            action_text="Log Snack",
            action_route="/food-search?mealType=snack",
        )
    return None


def _dinner(context: PromptContext) -> TimeBasedPrompt | None:
    if context.entries_count < 2:
        return TimeBasedPrompt(
            message=(
                "Dinner time! Make sure you're getting enough calories today - "
                "check your targets and log your meal."
            ),
            emoji="🌙",
            tone="reminder",
            action_text="Log Dinner",
            action_route="/food-search?mealType=dinner",
        )
    log = context.today_log
    if log is None or log.targets.calories <= 0 or log.targets.protein <= 0:
        return None
    calories_left = log.targets.calories - log.totals.calories
    protein_left = log.targets.protein - log.totals.protein
    if calories_left > 500 or protein_left > 30:
        return TimeBasedPrompt(
            message=(
                f"You have {round(calories_left)} calories and "
                f"{round(protein_left)}g protein left today. Make dinner count!"
            ),
            emoji="🎯",
            tone="encouragement",
            action_text="Log Dinner",
            action_route="/food-search?mealType=dinner",
        )
    return None


def _evening(context: PromptContext) -> TimeBasedPrompt | None:
    log = context.today_log
    if log is not None and context.entries_count >= 2:
        calories = adherence_percent(log.totals.calories, log.targets.calories)
        if calories is not None and calories < 80:
            return TimeBasedPrompt(
                message=(
                    f"You're at {round(calories)}% of your calorie target. "
                    "Consider a healthy evening snack to hit your goals!"
                ),
                emoji="🌃",
                tone="suggestion",
                action_text="Log Snack",
                action_route="/food-search?mealType=snack",
            )
        if calories is not None and 90 <= calories <= 110:
            return TimeBasedPrompt(
                message=(
                    "Excellent day of tracking! You hit your targets. Rest well "
                    "and let's do it again tomorrow! 💫"
                ),
                emoji="🌟",
                tone="encouragement",
            )
    if context.entries_count == 0:
        return TimeBasedPrompt(
            message=(
                "Hey! I notice you haven't logged anything today. It's not too "
                "late - log what you ate and let's start fresh tomorrow!"
            ),
            emoji="💙",
            tone="reminder",
            action_text="Log Today",
            action_route="/food-search",
        )
    return None


PROMPT_RULES: tuple[PromptRule, ...] = (
    PromptRule("morning", 6, 10, _morning),
    PromptRule("midmorning", 10, 12, _midmorning),
    PromptRule("lunch", 12, 14, _lunch),
    PromptRule("afternoon", 14, 17, _afternoon),
    PromptRule("dinner", 17, 20, _dinner),
    PromptRule("evening", 20, 23, _evening),
)


def get_time_based_prompt(
    today_log: DailyFoodLog | None, now: datetime
) -> TimeBasedPrompt | None:
    """Return the first prompt whose hour range and conditions both match."""
    context = PromptContext.build(today_log, now)
    for rule in PROMPT_RULES:
        if not rule.matches_hour(context.now.hour):
            continue
        prompt = rule.evaluate(context)
        if prompt is not None:
            return prompt
    return None


def should_show_prompt(
    last_prompt_at: datetime | None,
    now: datetime,
    min_interval: timedelta = PROMPT_INTERVAL,
) -> bool:
    """Return False when a prompt was already shown within the interval."""
    if last_prompt_at is None:
        return True
    tz = now.tzinfo or UTC
    return now.replace(tzinfo=tz) - localize(last_prompt_at, tz) >= min_interval


@dataclass(frozen=True)
class MealWindow:
    """Hour range during which a meal is expected."""

    meal_type: MealType
    start_hour: int
    end_hour: int
    message: str
    emoji: str


MEAL_WINDOWS: tuple[MealWindow, ...] = (
    MealWindow("breakfast", 6, 10, "Good morning! Time to log breakfast? 🌅", "🥞"),
    MealWindow("lunch", 11, 14, "Lunch time! What are you having? 🍽️", "🥗"),
    MealWindow("snack", 15, 17, "Afternoon snack? Let's log it! 🍎", "🥨"),
    MealWindow("dinner", 17, 21, "Dinner time! Ready to log your meal? 🌙", "🍝"),
)

_NO_MEAL_PROMPT = MealPrompt(
    should_prompt=False, meal_type=None, message="", emoji="", confidence="low"
)


def detect_meal_prompt(today_log: DailyFoodLog | None, now: datetime) -> MealPrompt:
    """Prompt for the meal whose window is open and not yet logged."""
    hour = now.hour
    window = next(
        (w for w in MEAL_WINDOWS if w.start_hour <= hour < w.end_hour), None
    )
    if window is None:
        return _NO_MEAL_PROMPT
    if any(entry.meal_type == window.meal_type for entry in entries_of(today_log)):
        return _NO_MEAL_PROMPT

    progress = (hour - window.start_hour) / (window.end_hour - window.start_hour)
    if progress < 0.3:
        confidence = "low"
    elif progress < 0.7:
        confidence = "high"
    else:
        confidence = "medium"
    return MealPrompt(
        should_prompt=True,
        meal_type=window.meal_type,
        message=window.message,
        emoji=window.emoji,
        confidence=confidence,
    )


def suggested_meal_type(now: datetime) -> MealType:
    """Return the meal type a new entry most likely belongs to."""
    hour = now.hour
    if 6 <= hour < 11:
        return "breakfast"
    if 11 <= hour < 15:
        return "lunch"
    if 15 <= hour < 18:
        return "snack"
    return "dinner"


def hours_since_last_meal(
    today_log: DailyFoodLog | None, now: datetime
) -> float | None:
    """Return hours since the latest entry today, or None without entries."""
    return PromptContext.build(today_log, now).hours_since_last_entry


def missed_meal_message(today_log: DailyFoodLog | None, now: datetime) -> str | None:
    """Return a nudge when the last meal was four or more hours ago."""
    hours = hours_since_last_meal(today_log, now)
    if hours is None:
        return None
    if hours >= 6:
        return (
            "It's been a while since your last meal! "
            "Make sure you're fueling your body 💪"
        )
    if hours >= 4:
        return "Haven't logged a meal in 4+ hours. Hungry? 🍴"
    return None
