from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as DateType, datetime

from fittrack.schemas.meal_plan import MEAL_TYPE_PATTERN, NutrientTotals, ScheduledMeal
from fittrack.schemas.health import MacroProgress


class LogMealRequest(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=100)
    meal_type: Optional[str] = Field(None, pattern=MEAL_TYPE_PATTERN)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    date: Optional[DateType] = None
    created_at: Optional[datetime] = None


class NutritionLogResponse(BaseModel):
    id: int
    date: DateType
    food_name: str
    meal_type: Optional[str]
    calories: float
    protein: float
    carbs: float
    fat: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DailyDietResponse(BaseModel):
    date: DateType
    calories_target: float
    meals: List[NutritionLogResponse]
    totals: NutrientTotals
    planned_meals: List[ScheduledMeal]
    planned_totals: NutrientTotals
    progress: MacroProgress
