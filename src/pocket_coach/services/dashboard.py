"""Dashboard composition from the rule engine and backend data."""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from pocket_coach.domain.actions import MealPrompt, QuickAction, TimeBasedPrompt
from pocket_coach.domain.calendar import StreakStatus
from pocket_coach.domain.coaching import (
    CoachMessage,
    InactivityStatus,
    SuggestedQuestion,
    YesterdaySummary,
)
from pocket_coach.domain.food_log import DailyFoodLog, day_key, find_log
from pocket_coach.domain.milestones import Milestone
from pocket_coach.domain.quotes import DailyQuote
from pocket_coach.domain.suggestions import (
    MealSuggestion,
    QuickLogSuggestion,
    RecentFood,
)
from pocket_coach.domain.training import TodayWorkout, TrainingPlanSummary
from pocket_coach.domain.trends import WeeklySummaryReport, WeeklyTrend
from pocket_coach.services import (
    actions,
    adherence,
    checkins,
    coach_questions,
    feedback,
    food_suggestions,
    meal_pairing,
    milestones,
    prompts,
    streaks,
    weekly_summary,
)
from pocket_coach.services.clock import Clock
from pocket_coach.services.food_logs import FoodLogService
from pocket_coach.services.quotes import DailyQuoteService
from pocket_coach.services.training import TrainingService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Everything the home screen renders for one request."""

    generated_at: datetime
    greeting: str
    today: DailyFoodLog | None
    streak: StreakStatus
    weekly_trend: WeeklyTrend
    weekly_summary: WeeklySummaryReport
    actions: list[QuickAction]
    time_prompt: TimeBasedPrompt | None
    meal_prompt: MealPrompt
    milestones: list[Milestone]
    overall_feedback: CoachMessage
    micro_win: CoachMessage | None
    time_of_day_context: CoachMessage | None
    adaptive_target_message: CoachMessage | None
    yesterday: YesterdaySummary | None
    inactivity: InactivityStatus
    recent_foods: list[RecentFood]
    quick_log_suggestions: list[QuickLogSuggestion]
    relevant_quick_log: QuickLogSuggestion | None
    meal_completion: list[MealSuggestion]
    suggested_questions: list[SuggestedQuestion]
    daily_quote: DailyQuote | None
    training_plan: TrainingPlanSummary | None
    today_workout: TodayWorkout | None


@dataclass
class DashboardService:
    """Fetches today's and the week's logs and runs every analyzer."""

    food_logs: FoodLogService
    training: TrainingService
    quotes: DailyQuoteService
    clock: Clock
    rng: random.Random = field(default_factory=random.Random)
    action_limit: int = actions.DASHBOARD_ACTION_LIMIT
    prompt_interval: timedelta = prompts.PROMPT_INTERVAL
    _last_prompt_at: datetime | None = None

    async def build(self, freezes_used_this_month: int = 0) -> DashboardView:
        now = self.clock.now()
        today, week, quote, plan, workout = await asyncio.gather(
            self.food_logs.get_today(now),
            self.food_logs.get_week(),
            self.quotes.get_daily_quote(),
            self.training.get_plan_summary(),
            self.training.get_today_workout(),
        )
        week = merge_today(week, today)
        yesterday_log = find_log(week, day_key(now.date() - timedelta(days=1)))

        streak = streaks.build_streak_status(week, now, freezes_used_this_month)
        suggestions = food_suggestions.get_quick_log_suggestions(week)
        _logger.info(
            "Dashboard built",
            extra={"streak": streak.current_streak, "days": len(week)},
        )
        return DashboardView(
            generated_at=now,
            greeting=feedback.get_greeting(now),
            today=today,
            streak=streak,
            weekly_trend=adherence.analyze_week(week, self.rng),
            weekly_summary=weekly_summary.generate_weekly_summary(week),
            actions=actions.select_actions(
                today, streak.current_streak, now, limit=self.action_limit
            ),
            time_prompt=self._throttled_prompt(today, now),
            meal_prompt=prompts.detect_meal_prompt(today, now),
            milestones=milestones.detect_milestones(
                today,
                week,
                milestones.calculate_total_meals_logged(week),
                streak.current_streak,
                now,
            ),
            overall_feedback=feedback.get_overall_feedback(today, now, self.rng),
            micro_win=feedback.get_micro_win_celebration(today, now, self.rng),
            time_of_day_context=feedback.get_time_of_day_context(today, now),
            adaptive_target_message=feedback.get_adaptive_target_message(
                today, yesterday_log
            ),
            yesterday=checkins.get_yesterday_summary(yesterday_log),
            inactivity=checkins.check_inactivity(today, week, now),
            recent_foods=food_suggestions.get_recent_foods(week),
            quick_log_suggestions=suggestions,
            relevant_quick_log=food_suggestions.get_relevant_quick_log(
                suggestions, now
            ),
            meal_completion=meal_pairing.get_meal_completion_suggestions(
                today, food_suggestions.current_meal_type(now)
            ),
            suggested_questions=coach_questions.get_suggested_questions(today, now),
            daily_quote=quote,
            training_plan=plan,
            today_workout=workout,
        )

    def _throttled_prompt(
        self, today: DailyFoodLog | None, now: datetime
    ) -> TimeBasedPrompt | None:
        if not prompts.should_show_prompt(
            self._last_prompt_at, now, self.prompt_interval
        ):
            return None
        prompt = prompts.get_time_based_prompt(today, now)
        if prompt is not None:
            self._last_prompt_at = now
        return prompt


def merge_today(
    week: list[DailyFoodLog], today: DailyFoodLog | None
) -> list[DailyFoodLog]:
    """Replace or append today's log so the week reflects the latest entries."""
    if today is None:
        return list(week)
    merged = [log for log in week if log.date != today.date]
    merged.append(today)
    return merged
