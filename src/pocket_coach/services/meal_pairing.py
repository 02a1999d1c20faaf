"""Foods that would round out the current meal."""

from collections.abc import Mapping

from pocket_coach.domain.food_log import DailyFoodLog, MacroTotals, MealType
from pocket_coach.domain.suggestions import MealSuggestion

DEFAULT_SUGGESTION_LIMIT = 3

MEAL_CALORIE_MINIMUMS: Mapping[MealType, int] = {
    "breakfast": 300,
    "lunch": 400,
    "dinner": 400,
    "snack": 100,
}

_LIGHT_MEAL_MESSAGES: Mapping[MealType, str] = {
    "breakfast": "This breakfast seems light. Want to add something else?",
    "lunch": "This lunch might leave you hungry. Consider adding a side?",
    "dinner": "This dinner is pretty light. Maybe add a protein or veggie?",
    "snack": "Perfect snack size! You can add more if you're still hungry.",
}

_SALAD = MealSuggestion(
    food="Mixed Green Salad",
    reason="Add micronutrients and fiber",
    macros=MacroTotals(calories=50, protein=2, carbs=8, fat=2),
    priority=70,
)


def get_meal_completion_suggestions(
    today_log: DailyFoodLog | None,
    meal_type: MealType,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[MealSuggestion]:
    """Rank foods that cover what is left of today's targets."""
    if today_log is None:
        return []
    totals, targets = today_log.totals, today_log.targets
    calories = max(0.0, targets.calories - totals.calories)
    protein = max(0.0, targets.protein - totals.protein)
    carbs = max(0.0, targets.carbs - totals.carbs)
    fat = max(0.0, targets.fat - totals.fat)

    suggestions: list[MealSuggestion] = []
    if protein > 30:
        suggestions += [
            MealSuggestion(
                food="Grilled Chicken Breast",
                reason=f"Add {round(protein)}g protein to hit your target",
                macros=MacroTotals(calories=165, protein=31, carbs=0, fat=3.6),
                priority=95,
            ),
            MealSuggestion(
                food="Greek Yogurt (plain, nonfat)",
                reason="High protein, low fat snack",
                macros=MacroTotals(calories=100, protein=17, carbs=6, fat=0),
                priority=90,
            ),
            MealSuggestion(
                food="Protein Shake",
                reason="Quick protein boost",
                macros=MacroTotals(calories=120, protein=24, carbs=3, fat=2),
                priority=85,
            ),
        ]
    if carbs > 40:
        suggestions += [
            MealSuggestion(
                food="Brown Rice (1 cup)",
                reason=f"Need {round(carbs)}g carbs for energy",
                macros=MacroTotals(calories=216, protein=5, carbs=45, fat=1.8),
                priority=90,
            ),
            MealSuggestion(
                food="Sweet Potato (medium)",
                reason="Complex carbs with vitamins",
                macros=MacroTotals(calories=103, protein=2, carbs=24, fat=0.2),
                priority=85,
            ),
            MealSuggestion(
                food="Oatmeal (1 cup)",
                reason="Slow-release energy",
                macros=MacroTotals(calories=150, protein=6, carbs=27, fat=3),
                priority=80,
            ),
        ]
    if fat > 15:
        suggestions += [
            MealSuggestion(
                food="Avocado (half)",
                reason=f"Add {round(fat)}g healthy fats",
                macros=MacroTotals(calories=120, protein=1.5, carbs=6, fat=11),
                priority=85,
            ),
            MealSuggestion(
                food="Almonds (handful, ~23)",
                reason="Healthy fats + protein",
                macros=MacroTotals(calories=160, protein=6, carbs=6, fat=14),
                priority=80,
            ),
        ]
    if protein > 20 and carbs > 30:
        suggestions.append(
            MealSuggestion(
                food="Salmon with Quinoa",
                reason="Balanced protein, carbs, and omega-3s",
                macros=MacroTotals(calories=350, protein=30, carbs=35, fat=12),
                priority=100,
            )
        )
    if meal_type == "breakfast":
        suggestions.append(
            MealSuggestion(
                food="Eggs & Whole Wheat Toast",
                reason="Complete breakfast with protein and carbs",
                macros=MacroTotals(calories=250, protein=18, carbs=24, fat=10),
                priority=92,
            )
        )
    if meal_type == "snack" and calories < 200:
        suggestions.append(
            MealSuggestion(
                food="Apple with Peanut Butter",
                reason="Perfect snack size",
                macros=MacroTotals(calories=180, protein=4, carbs=22, fat=8),
                priority=88,
            )
        )
    suggestions.append(_SALAD)

    ranked = sorted(suggestions, key=lambda suggestion: -suggestion.priority)
    return ranked[: max(limit, 0)]


def is_meal_incomplete(meal_type: MealType, calories: float) -> bool:
    """Return True when a meal falls below its calorie minimum."""
    return calories < MEAL_CALORIE_MINIMUMS[meal_type]


def get_meal_completion_message(meal_type: MealType, calories: float) -> str | None:
    """Return a nudge for a light meal, or None when it is filling enough."""
    if not is_meal_incomplete(meal_type, calories):
        return None
    return _LIGHT_MEAL_MESSAGES[meal_type]
