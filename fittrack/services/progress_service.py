from typing import Optional

from fittrack.schemas.meal_plan import NutrientTotals
from fittrack.schemas.health import MacroProgress, NutrientProgress
from fittrack.utils.nutrition_calc import round_half_up, safe_ratio


def percent_of_target(actual: float, target: Optional[float]) -> float:
    """Progress-bar fill, capped at 100. A zero target reads as 0%."""
    if not target:
        return 0.0
    return min((actual / target) * 100, 100.0)


def variance_percent(actual: float, target: Optional[float]) -> int:
    """Signed '+X% over / -X% under' figure. Not clamped."""
    return round_half_up(safe_ratio(actual - target, target) * 100) if target else 0


def _nutrient_progress(actual: float, target: float) -> NutrientProgress:
    return NutrientProgress(
        actual=actual,
        target=target,
        percent=percent_of_target(actual, target),
        variance=variance_percent(actual, target),
        remaining=max(target - actual, 0.0),
    )


def build_progress(totals: NutrientTotals, targets: NutrientTotals) -> MacroProgress:
    progress = MacroProgress(
        calories=_nutrient_progress(totals.calories, targets.calories),
        protein=_nutrient_progress(totals.protein, targets.protein),
        carbs=_nutrient_progress(totals.carbs, targets.carbs),
        fat=_nutrient_progress(totals.fat, targets.fat),
    )

    variance = progress.calories.variance
    if not targets.calories:
        return progress

    if variance > 0:
        progress.summary = f"+{variance}% over your calorie target"
    elif variance < 0:
        progress.summary = f"{abs(variance)}% under your calorie target"
    else:
        progress.summary = "On your calorie target"
    return progress
