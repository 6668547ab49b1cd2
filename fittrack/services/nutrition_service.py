import logging
import math
from typing import Iterable, Optional

from fittrack.schemas.meal_plan import NutrientTotals
from fittrack.schemas.health import TargetMacros, BMICategory, HealthMetrics
from fittrack.utils.nutrition_calc import NUTRIENT_FIELDS, round_half_up, read_nutrient

logger = logging.getLogger(__name__)

"""
Nutrition Service
-----------------
Handles all the mathematical logic for nutrition planning.
This module is pure business logic and does not depend on the Database or Models directly.
"""

# Used whenever the profile is missing a field
DEFAULT_WEIGHT_KG = 75.0
DEFAULT_HEIGHT_CM = 178.0
DEFAULT_AGE = 32
DEFAULT_GENDER = "male"
DEFAULT_ACTIVITY_LEVEL = "moderate"

ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,        # Little or no exercise
    'light': 1.375,          # Light exercise 1-3 days/week
    'moderate': 1.55,        # Moderate exercise 3-5 days/week
    'active': 1.725,         # Hard exercise 6-7 days/week
    'very-active': 1.9       # Very hard exercise & physical job
}

WATER_MULTIPLIERS = {
    'sedentary': 1.0,
    'light': 1.2,
    'moderate': 1.4,
    'active': 1.6,
    'very-active': 1.8
}

BMI_CATEGORIES = [
    # (upper bound exclusive, key, label)
    (18.5, "UNDERWEIGHT", "Underweight"),
    (25.0, "NORMAL", "Normal Weight"),
    (30.0, "OVERWEIGHT", "Overweight"),
    (math.inf, "OBESE", "Obese"),
]

BMI_RECOMMENDATIONS = {
    "UNDERWEIGHT": "Consider increasing calorie intake and consulting a healthcare provider.",
    "NORMAL": "Maintain your current weight with balanced diet and exercise.",
    "OVERWEIGHT": "Consider increasing physical activity and reducing calorie intake.",
    "OBESE": "Consult a healthcare provider about weight management strategies.",
}


# --- AGGREGATION ---

def aggregate_totals(items: Iterable) -> NutrientTotals:
    """
    Sums calories, protein, carbs and fat over meals or log entries.
    Items may be dicts, ORM rows or pydantic models; absent fields count as 0.
    """
    items = list(items)
    # fsum keeps the result independent of item order
    return NutrientTotals(**{
        field: math.fsum(read_nutrient(item, field) for item in items)
        for field in NUTRIENT_FIELDS
    })


# --- BODY METRICS ---

def calculate_bmr(weight: float, height: float, age: int, gender: str) -> float:
    """
    Revised Harris-Benedict coefficients, as used across the dashboard.
    'male' selects the male equation; every other value uses the female one.
    """
    if (gender or '').lower() == 'male':
        return 88.362 + (13.397 * weight) + (4.799 * height) - (5.677 * age)
    return 447.593 + (9.247 * weight) + (3.098 * height) - (4.330 * age)


def activity_multiplier(activity_level: Optional[str]) -> float:
    level = (activity_level or DEFAULT_ACTIVITY_LEVEL).lower()
    if level not in ACTIVITY_MULTIPLIERS:
        logger.warning(f"Unknown activity level '{activity_level}', using moderate multiplier")
    return ACTIVITY_MULTIPLIERS.get(level, 1.55)


def calculate_tdee(bmr: float, activity_level: Optional[str]) -> int:
    return round_half_up(bmr * activity_multiplier(activity_level))


def calculate_bmi(weight: float, height: float) -> float:
    if not height:
        return 0.0
    height_m = height / 100
    return round(weight / (height_m * height_m), 1)


def bmi_category(bmi: float) -> BMICategory:
    for upper, key, label in BMI_CATEGORIES:
        if bmi < upper:
            return BMICategory(category=key, label=label, recommendation=BMI_RECOMMENDATIONS[key])
    # Only reachable for NaN
    return BMICategory(category="OBESE", label="Obese", recommendation=BMI_RECOMMENDATIONS["OBESE"])


def ideal_body_weight(height: float, gender: str) -> float:
    """
    Devine formula: 50kg (45.5kg for women) + 2.3kg per inch over 5 feet.
    """
    height_in = height / 2.54
    base_weight = 45.5 if (gender or '').lower() == 'female' else 50.0
    extra_inches = max(0.0, height_in - 60)
    return round(base_weight + extra_inches * 2.3, 1)


def body_fat_percentage(weight: float, height: float, gender: str) -> int:
    """
    Log-based body fat estimate.
    The 60 offset is subtracted from the height in centimetres, which is how
    the published dashboard figures were produced.
    Returns 0 when the inputs fall outside the logarithm's domain.
    """
    offset_height = height - 5 * 12
    if offset_height <= 0 or weight <= 0:
        return 0

    if (gender or '').lower() == 'male':
        density = 1.0324 - 0.19077 * math.log10(offset_height) + 0.15456 * math.log10(weight)
    else:
        density = 1.29579 - 0.35004 * math.log10(offset_height) + 0.221 * math.log10(weight)

    if density <= 0:
        return 0
    return round_half_up(495 / density - 450)


def water_intake_liters(weight: float, activity_level: Optional[str]) -> float:
    """35 ml per kg, scaled by activity. Returned in liters."""
    level = (activity_level or DEFAULT_ACTIVITY_LEVEL).lower()
    base_water_ml = weight * 35
    return base_water_ml * WATER_MULTIPLIERS.get(level, 1.4) / 1000


def fiber_needs(age: int, gender: str) -> int:
    is_male = (gender or '').lower() == 'male'
    if age >= 50:
        return 30 if is_male else 21
    return 38 if is_male else 25


# --- TARGETS ---

def calculate_macro_targets(tdee: float, weight: float) -> TargetMacros:
    """
    Canonical macro split used by every view:
    protein 2 g/kg, carbs 45% of TDEE, fat 30% of TDEE.
    """
    return TargetMacros(
        calories=round_half_up(tdee),
        protein=round_half_up(weight * 2),
        carbs=round_half_up((tdee * 0.45) / 4),
        fat=round_half_up((tdee * 0.3) / 9),
    )


def _with_defaults(weight, height, age, gender, activity_level):
    return (
        float(weight or DEFAULT_WEIGHT_KG),
        float(height or DEFAULT_HEIGHT_CM),
        int(age or DEFAULT_AGE),
        (gender or DEFAULT_GENDER).lower(),
        (activity_level or DEFAULT_ACTIVITY_LEVEL).lower(),
    )


def calculate_daily_targets(
    weight: Optional[float],
    height: Optional[float],
    age: Optional[int],
    gender: Optional[str],
    activity_level: Optional[str],
) -> dict:
    """
    Calculates daily calorie and macronutrient targets based on physical attributes.

    Algorithm:
    1. BMR, rounded to whole kcal
    2. TDEE (Activity Multiplier applied to the rounded BMR)
    3. Macro Split (see calculate_macro_targets)

    Returns:
        dict: { "calories": int, "protein": int, "fat": int, "carbs": int }
    """
    weight, height, age, gender, activity_level = _with_defaults(weight, height, age, gender, activity_level)
    logger.info(f"[Nutrition Service] Calculating for: {weight}kg, {height}cm, {age}yrs, {gender}, {activity_level}")

    bmr = round_half_up(calculate_bmr(weight, height, age, gender))
    tdee = calculate_tdee(bmr, activity_level)
    return calculate_macro_targets(tdee, weight).model_dump()


def calculate_health_metrics(
    weight: Optional[float] = None,
    height: Optional[float] = None,
    age: Optional[int] = None,
    gender: Optional[str] = None,
    activity_level: Optional[str] = None,
) -> HealthMetrics:
    """
    Full set of reference values shown on the dashboard's health tab.
    Missing inputs fall back to the module defaults.
    """
    weight, height, age, gender, activity_level = _with_defaults(weight, height, age, gender, activity_level)

    bmr = round_half_up(calculate_bmr(weight, height, age, gender))
    tdee = calculate_tdee(bmr, activity_level)
    bmi = calculate_bmi(weight, height)

    return HealthMetrics(
        weight_kg=weight,
        height_cm=height,
        age=age,
        gender=gender,
        activity_level=activity_level,
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        ideal_body_weight=ideal_body_weight(height, gender),
        bmr=bmr,
        tdee=tdee,
        body_fat_percentage=body_fat_percentage(weight, height, gender),
        water_intake_liters=round_half_up(water_intake_liters(weight, activity_level)),
        fiber_grams=fiber_needs(age, gender),
        targets=calculate_macro_targets(tdee, weight),
    )
