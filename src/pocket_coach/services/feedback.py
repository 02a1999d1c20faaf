"""Coach-style feedback messages."""

import random
from datetime import UTC, datetime

from pocket_coach.domain.coaching import CoachMessage
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    MacroName,
    entries_of,
    localize,
)
from pocket_coach.services.adherence import (
    adherence_percent,
    classify_band,
    is_perfect_day,
)
from pocket_coach.services.phrasing import pick

EARLY_DAY_HOUR = 14
SUGGESTION_CUTOFF_HOUR = 21
TARGET_CHANGE_PERCENT = 5.0

_PERFECT_MACRO = (
    ("Perfect {macro}! You're right on target 🎯", "🎯", "celebrating"),
    ("Nailed it! Your {macro} is spot on", "✨", "celebrating"),
    ("Excellent work! {macro} is perfectly balanced", "💯", "celebrating"),
)
_SLIGHTLY_OVER_MACRO = (
    ("Slightly over on {macro}, but you're doing great!", "👍", "encouraging"),
    ("A bit high on {macro}, no worries - still crushing it", "💪", "supportive"),
    ("{macro} is a touch high, but well within range", "✅", "neutral"),
)
_SLIGHTLY_UNDER_MACRO = (
    ("{remaining}g {macro} left - you've got this!", "🎯", "encouraging"),
    ("On track! {remaining}g more {macro} to go", "📊", "neutral"),
    ("Looking good! {remaining}g {macro} remaining", "✨", "encouraging"),
)
_EXCELLENT_DAY = (
    ("Outstanding work! You're crushing your goals today 💪", "🌟", "celebrating"),
    ("On fire! Your nutrition is dialed in perfectly", "🔥", "celebrating"),
    ("Incredible progress! Keep this momentum going", "🚀", "celebrating"),
)
_ENCOURAGEMENTS = (
    ("Remember: consistency beats perfection every time", "💯", "encouraging"),
    ("You're building something amazing, one day at a time", "🌱", "supportive"),
    ("Every meal logged is progress toward your goals", "📊", "encouraging"),
    ("Trust the process - you're doing great!", "🎯", "motivating"),
    ("Small wins add up to big results", "✨", "encouraging"),
    ("I'm here to support you every step of the way", "🤝", "supportive"),
)
_FIRST_MEAL = (
    ("First meal logged! Great start to the day 🌅", "✅", "celebrating"),
    ("Boom! Day started right with your first log ⚡", "🎯", "celebrating"),
    (
        "First meal tracked! That's how champions start their day 💪",
        "🔥",
        "celebrating",
    ),
)
_PROTEIN_HIT = (
    ("Protein goal crushed! 💪 Your muscles are thanking you", "💪", "celebrating"),
    (
        "Hit your protein target! That's what I'm talking about 🎯",
        "🎯",
        "celebrating",
    ),
    ("Protein goal achieved! You're on fire today 🔥", "🔥", "celebrating"),
)
_FULL_DAY = (
    ("Full day tracked! This is how progress happens 📊", "📈", "celebrating"),
    ("All meals logged! Your consistency is paying off 💎", "💎", "celebrating"),
    (
        "Complete tracking today! You're building incredible habits ⭐",
        "⭐",
        "celebrating",
    ),
)
_MACRO_SUGGESTIONS: dict[MacroName, tuple[str, ...]] = {
    "protein": (
        "Quick idea: A protein shake would add {half}g protein 🥤",
        "Try adding chicken breast or Greek yogurt - easy {half}g protein boost 🍗",
        "Cottage cheese makes a great high-protein snack right now 🧀",
        "A few eggs would get you closer - about {third}g protein each 🥚",
    ),
    "carbs": (
        "Need energy? A banana or rice cake would help you hit your carb target 🍌",
        "Consider adding oats or sweet potato to your next meal 🍠",
        "Quick carbs: fruit, crackers, or a granola bar would help 🍎",
    ),
    "fat": (
        "Add healthy fats: avocado, nuts, or olive oil on your veggies 🥑",
        "A handful of almonds would give you about {half}g fat 🌰",
        "Try peanut butter - easy way to boost healthy fats 🥜",
    ),
    "calories": (
        "Running low on calories today. "
        "Add a balanced snack to fuel your goals 🍽️",
        "Your body needs fuel! Consider a nutrient-dense snack 💪",
    ),
}
_STREAK_CALLOUTS = {
    3: ("3 days in a row! You're building a solid habit 🔥", "🔥"),
    7: ("One full week! This is where transformation begins 🌟", "🌟"),
    14: ("2 weeks strong! Your discipline is impressive 💎", "💎"),
    30: ("30 days! You're officially a nutrition tracking pro 🏆", "🏆"),
}


def _message(variant: tuple[str, str, str], **values: object) -> CoachMessage:
    text, emoji, tone = variant
    return CoachMessage(text=text.format(**values), emoji=emoji, tone=tone)


def get_greeting(now: datetime) -> str:
    """Return the greeting for the local hour."""
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"


def get_macro_feedback(
    current: float,
    target: float,
    macro: MacroName,
    is_end_of_day: bool,
    rng: random.Random,
) -> CoachMessage:
    """Comment on one macro using the adherence bands.

    End-of-day mode talks about the day in the past tense and promises a
    target adjustment instead of urging more intake.
    """
    band = classify_band(adherence_percent(current, target))
    remaining = round(target - current)
    if band == "perfect":
        return _message(pick(_PERFECT_MACRO, rng), macro=macro)
    if band == "slightly_over":
        return _message(pick(_SLIGHTLY_OVER_MACRO, rng), macro=macro)
    if band == "way_over":
        if is_end_of_day:
            return CoachMessage(
                text=f"{macro} ran high today. No stress! "
                "I'll adjust tomorrow's targets",
                emoji="🔄",
                tone="supportive",
            )
        return CoachMessage(
            text=f"{macro} is running high. Let's balance the rest of the day",
            emoji="⚖️",
            tone="motivating",
        )
    if band == "slightly_under":
        if is_end_of_day:
            return CoachMessage(
                text=f"Slightly under on {macro} yesterday. "
                "I'll adjust today to compensate!",
                emoji="🔧",
                tone="supportive",
            )
        return _message(
            pick(_SLIGHTLY_UNDER_MACRO, rng), macro=macro, remaining=remaining
        )
    if band == "way_under":
        if is_end_of_day:
            return CoachMessage(
                text=f"{macro} was low yesterday. "
                "Don't worry, I've adjusted today's plan!",
                emoji="🎯",
                tone="supportive",
            )
        return CoachMessage(
            text=f"Let's get some more {macro} in! {remaining}g to go",
            emoji="💪",
            tone="motivating",
        )
    return CoachMessage(
        text=f"Keep going with your {macro}!", emoji="💪", tone="encouraging"
    )


def get_overall_feedback(
    today_log: DailyFoodLog | None, now: datetime, rng: random.Random
) -> CoachMessage:
    """Summarise today's calorie and protein progress in one message."""
    if today_log is None:
        return CoachMessage(
            text="Let's start tracking your meals today!",
            emoji="🍽️",
            tone="encouraging",
        )
    is_early_day = now.hour < EARLY_DAY_HOUR
    if today_log.totals.calories == 0:
        if is_early_day:
            return CoachMessage(
                text="Ready to fuel your day? Let's log your first meal!",
                emoji="☀️",
                tone="encouraging",
            )
        return CoachMessage(
            text="Haven't logged anything yet - let's get started!",
            emoji="📝",
            tone="motivating",
        )

    calories = adherence_percent(today_log.totals.calories, today_log.targets.calories)
    protein = adherence_percent(today_log.totals.protein, today_log.targets.protein)
    if calories is None or protein is None:
        return CoachMessage(
            text="Keep logging - every meal counts toward your goals",
            emoji="📝",
            tone="neutral",
        )
    average = (calories + protein) / 2

    if 90 <= average <= 110:
        return _message(pick(_EXCELLENT_DAY, rng))
    if 80 <= average < 90 or 110 < average <= 120:
        return CoachMessage(
            text="Great work! You're right on track with your goals",
            emoji="✅",
            tone="encouraging",
        )
    if average < 80:
        if is_early_day:
            return CoachMessage(
                text="Plenty of time to catch up - you've got this!",
                emoji="⏰",
                tone="encouraging",
            )
        return CoachMessage(
            text="Let's finish strong! You've got time to hit your targets",
            emoji="💪",
            tone="motivating",
        )
    return CoachMessage(
        text="Running a bit high today. Let's ease up for the rest of the day",
        emoji="⚖️",
        tone="supportive",
    )


def get_streak_feedback(days_logged: int) -> CoachMessage | None:
    """Celebrate 3, 7, 14, 30 and every further multiple of seven days."""
    if days_logged < 3:
        return None
    callout = _STREAK_CALLOUTS.get(days_logged)
    if callout is not None:
        text, emoji = callout
        return CoachMessage(text=text, emoji=emoji, tone="celebrating")
    if days_logged % 7 == 0:
        return CoachMessage(
            text=f"{days_logged} days logged! Your consistency is paying off",
            emoji="📈",
            tone="celebrating",
        )
    return None


def get_meal_timing_feedback(
    last_meal_at: datetime | None, now: datetime
) -> CoachMessage | None:
    """Nudge after a long gap since the last meal, or about a missed dinner."""
    if last_meal_at is None:
        return None
    tz = now.tzinfo or UTC
    hours = (now.replace(tzinfo=tz) - localize(last_meal_at, tz)).total_seconds() / 3600
    if hours > 5 and 12 <= now.hour <= 20:
        return CoachMessage(
            text="Time to refuel! It's been a while since your last meal",
            emoji="⏰",
            tone="motivating",
        )
    if 19 <= now.hour <= 21 and hours > 4:
        return CoachMessage(
            text="Don't forget dinner! Let's fuel recovery before bed",
            emoji="🌙",
            tone="encouraging",
        )
    return None


def get_random_encouragement(rng: random.Random) -> CoachMessage:
    """Pick a generic encouragement."""
    return _message(pick(_ENCOURAGEMENTS, rng))


def get_time_of_day_context(
    today_log: DailyFoodLog | None, now: datetime
) -> CoachMessage | None:
    """Return the meal-focused hint for the current part of the day."""
    if today_log is None:
        return None
    hour = now.hour
    entries = entries_of(today_log)
    meal_types = {entry.meal_type for entry in entries}
    totals, targets = today_log.totals, today_log.targets
    protein_left = targets.protein - totals.protein
    calories_left = targets.calories - totals.calories

    if 5 <= hour < 11:
        if not entries:
            return CoachMessage(
                text="Good morning! Starting with a protein-rich breakfast sets "
                "you up for success today ☀️",
                emoji="🍳",
                tone="encouraging",
            )
        if "breakfast" not in meal_types and len(entries) < 2:
            return CoachMessage(
                text="Don't skip breakfast! Your body needs fuel to power "
                "through the morning 💪",
                emoji="🥐",
                tone="motivating",
            )
    elif 11 <= hour < 14:
        if "lunch" not in meal_types:
            return CoachMessage(
                text="Time for lunch! Keep that metabolism firing and energy high 🌟",
                emoji="🍽️",
                tone="encouraging",
            )
    elif 14 <= hour < 17:
        if targets.protein > 0 and protein_left > targets.protein * 0.5:
            return CoachMessage(
                text=f"Afternoon check: You've got {round(protein_left)}g protein "
                "left. Plan a protein-rich dinner! 🍗",
                emoji="📊",
                tone="supportive",
            )
        if targets.calories > 0 and calories_left > targets.calories * 0.5:
            return CoachMessage(
                text="You're running light on calories. Make sure dinner is "
                "substantial to fuel recovery! 💪",
                emoji="🔋",
                tone="motivating",
            )
    elif 17 <= hour < 20:
        if "dinner" not in meal_types:
            if protein_left > 30:
                return CoachMessage(
                    text=f"Dinner time! Focus on getting {round(protein_left)}g "
                    "protein to hit your goal 🎯",
                    emoji="🍽️",
                    tone="motivating",
                )
            return CoachMessage(
                text="Don't forget dinner! It's your last chance to hit "
                "today's targets 🌙",
                emoji="🍴",
                tone="encouraging",
            )
        if protein_left > 15:
            return CoachMessage(
                text=f"Quick! You still need {round(protein_left)}g protein. A "
                "protein shake or snack would seal the deal! 🥤",
                emoji="💡",
                tone="motivating",
            )
    elif 20 <= hour < 23:
        protein = adherence_percent(totals.protein, targets.protein)
        calories = adherence_percent(totals.calories, targets.calories)
        if protein is None or calories is None:
            return None
        if protein >= 90 and calories >= 90:
            return CoachMessage(
                text="Great day of tracking! Rest well - recovery is when the "
                "magic happens ✨",
                emoji="🌙",
                tone="celebrating",
            )
        if protein < 80:
            return CoachMessage(
                text="Protein was low today. No stress! I'll adjust tomorrow's "
                "plan to get you back on track 🔄",
                emoji="💙",
                tone="supportive",
            )
    return None


def get_micro_win_celebration(
    today_log: DailyFoodLog | None, now: datetime, rng: random.Random
) -> CoachMessage | None:
    """Celebrate small wins: first log, protein goal, perfect day, full day."""
    if today_log is None:
        return None
    entries = entries_of(today_log)
    if len(entries) == 1:
        return _message(pick(_FIRST_MEAL, rng))
    protein = adherence_percent(today_log.totals.protein, today_log.targets.protein)
    if classify_band(protein) == "perfect":
        return _message(pick(_PROTEIN_HIT, rng))
    if is_perfect_day(today_log):
        return CoachMessage(
            text="Perfect day! All macros hit 🎯 This is elite-level tracking!",
            emoji="🏆",
            tone="celebrating",
        )
    if len(entries) >= 3 and now.hour >= 18:
        return _message(pick(_FULL_DAY, rng))
    return None


def get_smart_macro_suggestion(
    current: float,
    target: float,
    macro: MacroName,
    now: datetime,
    rng: random.Random,
) -> CoachMessage | None:
    """Suggest a food when a macro is below 70% and the day is not over."""
    percent = adherence_percent(current, target)
    if percent is None or percent >= 70 or now.hour >= SUGGESTION_CUTOFF_HOUR:
        return None
    remaining = target - current
    text = pick(_MACRO_SUGGESTIONS[macro], rng).format(
        half=round(remaining / 2), third=round(remaining / 3)
    )
    return CoachMessage(text=text, emoji="💡", tone="supportive")


def get_adaptive_target_message(
    today_log: DailyFoodLog | None, yesterday_log: DailyFoodLog | None
) -> CoachMessage | None:
    """Explain a target change of more than 5% since yesterday."""
    if today_log is None or yesterday_log is None:
        return None
    before, after = yesterday_log.targets, today_log.targets
    if before.calories <= 0 or before.protein <= 0:
        return None
    calories_diff = after.calories - before.calories
    protein_diff = after.protein - before.protein
    calories_change = abs(calories_diff / before.calories) * 100
    protein_change = abs(protein_diff / before.protein) * 100
    if max(calories_change, protein_change) <= TARGET_CHANGE_PERCENT:
        return None

    calories_adherence = 100 * yesterday_log.totals.calories / before.calories
    protein_adherence = 100 * yesterday_log.totals.protein / before.protein
    if calories_adherence < 90:
        if calories_diff > 0:
            return CoachMessage(
                text=f"I bumped your calories up {round(calories_diff)} today to "
                "help you hit your goals after yesterday. You got this! 💪",
                emoji="🔧",
                tone="encouraging",
            )
        return CoachMessage(
            text="I adjusted your targets slightly based on yesterday's intake. "
            "Let's find that sweet spot together! 🎯",
            emoji="🔧",
            tone="supportive",
        )
    if calories_adherence > 110:
        if calories_diff < 0:
            return CoachMessage(
                text=f"I reduced your calories by {round(abs(calories_diff))} today "
                "to balance yesterday's higher intake. We'll even it out! 🔧",
                emoji="🔧",
                tone="supportive",
            )
        return CoachMessage(
            text="I'm adjusting your plan based on your progress. These tweaks "
            "help you stay on track! 📊",
            emoji="🔧",
            tone="motivating",
        )
    if protein_change > TARGET_CHANGE_PERCENT and protein_adherence < 85:
        return CoachMessage(
            text=f"I increased your protein target by {round(protein_diff)}g today "
            "- you were a bit low yesterday. Let's get that protein in! 💪",
            emoji="🥩",
            tone="encouraging",
        )
    return CoachMessage(
        text="I fine-tuned your targets today based on your recent progress. "
        "These small adjustments keep you moving toward your goal! 🎯",
        emoji="🔧",
        tone="motivating",
    )
