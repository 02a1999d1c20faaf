"""Yesterday recap and inactivity check-ins."""

from collections.abc import Sequence
from datetime import UTC, datetime

from pocket_coach.domain.coaching import InactivityStatus, YesterdaySummary
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    entries_of,
    has_entries,
    noon_of,
    parse_day,
)
from pocket_coach.services.adherence import classify_band, macro_adherence

CHECK_IN_AFTER_DAYS = 2
NO_HISTORY_DAYS = 7

_CHECK_IN_MESSAGES = (
    (
        7,
        "It's been a week! I miss working with you. 💙 No judgment - let's "
        "start fresh today. What's your first meal?",
    ),
    (
        5,
        "I haven't seen you in 5 days! 🥺 Remember, consistency is key. Even "
        "logging one meal helps. How can I support you?",
    ),
    (
        3,
        "It's been 3 days since your last log. Life gets busy - I get it! Want "
        "to catch up on what you've been eating? 😊",
    ),
    (
        2,
        "Hey! I noticed you haven't logged meals in 2 days. Everything okay? "
        "Let's keep that momentum going! 🔥",
    ),
)
_NO_HISTORY_MESSAGE = (
    "I noticed you haven't logged any meals recently. How have you been doing? "
    "I'm here to help get you back on track! 💪"
)


def get_yesterday_summary(
    yesterday_log: DailyFoodLog | None,
) -> YesterdaySummary | None:
    """Summarise yesterday's log, or None when nothing was logged."""
    if yesterday_log is None or not has_entries(yesterday_log):
        return None
    adherence = macro_adherence(yesterday_log)
    values = [value for value in adherence.values() if value is not None]
    if not values:
        return None
    average = sum(values) / len(values)
    count = len(entries_of(yesterday_log))
    totals = yesterday_log.totals
    protein = adherence["protein"]

    if 90 <= average <= 110:
        tone, emoji = "great", "🔥"
        message = (
            f"Yesterday was incredible! You hit {round(average)}% adherence - "
            "that's the kind of consistency that creates results!"
        )
        if classify_band(protein) == "perfect":
            highlight = f"Perfect protein: {round(totals.protein)}g 💪"
        elif classify_band(adherence["calories"]) == "perfect":
            highlight = f"Nailed your calories: {round(totals.calories)} kcal 🎯"
        else:
            highlight = f"{count} meals logged 📝"
    elif 75 <= average <= 120:
        tone, emoji = "good", "💪"
        message = (
            f"Solid day yesterday! {round(average)}% adherence. A few tweaks and "
            "you'll be crushing it!"
        )
        if count >= 3:
            highlight = f"Logged {count} meals - great consistency! 📊"
        elif protein is not None and protein > 80:
            highlight = f"Good protein intake: {round(totals.protein)}g ✅"
        else:
            highlight = "You're on the right track! 🎯"
    elif average >= 50:
        tone, emoji = "okay", "📈"
        message = (
            f"Yesterday was a bit off-target ({round(average)}% adherence), but "
            "that's okay! Today's a fresh start."
        )
        if count >= 2:
            highlight = f"You logged {count} meals - that's progress! 🌟"
        else:
            highlight = "One meal logged is better than zero! 💫"
    else:
        tone, emoji = "tough", "🌅"
        noun = "meal" if count == 1 else "meals"
        message = (
            f"Yesterday was tough - you logged {count} {noun}. No worries, let's "
            "make today better!"
        )
        highlight = "New day, new opportunity! 🌟"

    return YesterdaySummary(
        date=yesterday_log.date,
        adherence_rate=average,
        overall_tone=tone,
        message=message,
        emoji=emoji,
        highlight=highlight,
    )


def check_inactivity(
    today_log: DailyFoodLog | None,
    recent_logs: Sequence[DailyFoodLog] | None,
    now: datetime,
) -> InactivityStatus:
    """Decide whether the coach should check in after days without logs."""
    if has_entries(today_log):
        return InactivityStatus(
            is_inactive=False,
            days_since_last_log=0,
            should_show_check_in=False,
            message="",
        )

    logged_days = [
        day
        for day in (
            parse_day(log.date) for log in (recent_logs or ()) if has_entries(log)
        )
        if day is not None
    ]
    if not logged_days:
        return InactivityStatus(
            is_inactive=True,
            days_since_last_log=NO_HISTORY_DAYS,
            should_show_check_in=True,
            message=_NO_HISTORY_MESSAGE,
        )

    tz = now.tzinfo or UTC
    elapsed = noon_of(now.date(), tz) - noon_of(max(logged_days), tz)
    days_since = max(elapsed.days, 0)
    if days_since < CHECK_IN_AFTER_DAYS:
        return InactivityStatus(
            is_inactive=True,
            days_since_last_log=days_since,
            should_show_check_in=False,
            message="",
        )
    message = next(text for days, text in _CHECK_IN_MESSAGES if days_since >= days)
    return InactivityStatus(
        is_inactive=True,
        days_since_last_log=days_since,
        should_show_check_in=True,
        message=message,
    )
