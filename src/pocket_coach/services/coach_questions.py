"""Suggested questions for the coach chat."""

from datetime import datetime

from pocket_coach.domain.coaching import SuggestedQuestion
from pocket_coach.domain.food_log import DailyFoodLog, has_entries
from pocket_coach.services.adherence import adherence_percent

DEFAULT_QUESTION_LIMIT = 6

_MEAL_PLANNING: tuple[tuple[int, int, SuggestedQuestion], ...] = (
    (
        6,
        11,
        SuggestedQuestion("What should I eat for breakfast today?", "🍳", "planning"),
    ),
    (11, 15, SuggestedQuestion("What's a good lunch option?", "🥗", "planning")),
    (17, 21, SuggestedQuestion("What should I make for dinner?", "🍽️", "planning")),
)

MORE_PROTEIN = SuggestedQuestion("How can I get more protein today?", "💪", "nutrition")
ENOUGH_CALORIES = SuggestedQuestion("Am I eating enough calories?", "📊", "progress")
HOW_AM_I_DOING = SuggestedQuestion("How am I doing today?", "🎯", "progress")

ALWAYS_AVAILABLE = (
    SuggestedQuestion("What are good protein sources?", "🥩", "nutrition"),
    SuggestedQuestion("How do I stay consistent?", "💡", "motivation"),
    SuggestedQuestion("What's my progress this week?", "📈", "progress"),
)


def get_suggested_questions(
    today_log: DailyFoodLog | None,
    now: datetime,
    limit: int = DEFAULT_QUESTION_LIMIT,
) -> list[SuggestedQuestion]:
    """Return chat starters for the time of day and today's progress."""
    questions = [
        question
        for start, end, question in _MEAL_PLANNING
        if start <= now.hour < end
    ]

    if today_log is not None and has_entries(today_log):
        protein = adherence_percent(
            today_log.totals.protein, today_log.targets.protein
        )
        calories = adherence_percent(
            today_log.totals.calories, today_log.targets.calories
        )
        if protein is not None and protein < 50:
            questions.append(MORE_PROTEIN)
        if calories is not None and calories < 40:
            questions.append(ENOUGH_CALORIES)
        if calories is not None and 90 < calories < 110:
            questions.append(HOW_AM_I_DOING)

    questions.extend(ALWAYS_AVAILABLE)
    return questions[: max(limit, 0)]
