from pydantic import BaseModel
from typing import Optional

from fittrack.schemas.meal_plan import NutrientTotals


class TargetMacros(NutrientTotals):
    """Daily calorie and macro targets derived from the profile."""
    pass


class BMICategory(BaseModel):
    category: str
    label: str
    recommendation: str


class HealthMetrics(BaseModel):
    weight_kg: float
    height_cm: float
    age: int
    gender: str
    activity_level: str

    bmi: float
    bmi_category: BMICategory
    ideal_body_weight: float
    bmr: int
    tdee: int
    body_fat_percentage: int
    water_intake_liters: int
    fiber_grams: int
    targets: TargetMacros


class NutrientProgress(BaseModel):
    actual: float
    target: float
    percent: float
    variance: int
    remaining: float


class MacroProgress(BaseModel):
    calories: NutrientProgress
    protein: NutrientProgress
    carbs: NutrientProgress
    fat: NutrientProgress
    summary: Optional[str] = None
