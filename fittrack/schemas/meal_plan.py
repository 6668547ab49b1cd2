from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional, Union
from datetime import date, datetime

MEAL_TYPE_PATTERN = "^(breakfast|lunch|dinner|snack|snack2)$"


def as_steps(value: Union[str, List[str], None]) -> List[str]:
    # Generators send either a list of steps or one block of text
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


class NutrientTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class MealBase(BaseModel):
    meal_name: str
    meal_type: str = Field(..., pattern=MEAL_TYPE_PATTERN)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0, description="grams")
    carbs: float = Field(0.0, ge=0, description="grams")
    fat: float = Field(0.0, ge=0, description="grams")
    prep_time: Optional[int] = Field(None, ge=0, description="minutes")
    ingredients: List[str] = []
    instructions: List[str] = []
    image: Optional[str] = None
    source_url: Optional[str] = None

    @field_validator("instructions", mode="before")
    @classmethod
    def split_instructions(cls, value: Union[str, List[str], None]):
        return as_steps(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def default_ingredients(cls, value):
        return value or []


class MealCreate(MealBase):
    pass


class MealUpdate(BaseModel):
    """Partial edit of one stored meal. Omitted fields keep their value."""
    meal_name: Optional[str] = None
    meal_type: Optional[str] = Field(None, pattern=MEAL_TYPE_PATTERN)
    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    prep_time: Optional[int] = Field(None, ge=0)
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    image: Optional[str] = None
    source_url: Optional[str] = None

    @field_validator("instructions", mode="before")
    @classmethod
    def split_instructions(cls, value):
        return None if value is None else as_steps(value)


class MealItem(MealBase):
    id: Optional[int] = None
    position: Optional[int] = None

    class Config:
        from_attributes = True


class ScheduledMeal(MealItem):
    """A plan meal annotated with the calendar day it was bucketed into."""
    day_index: int
    day_date: date
    plan_id: Optional[int] = None


class ShoppingListItem(BaseModel):
    name: str
    quantity: Optional[float] = None
    measure: Optional[str] = None
    category: Optional[str] = None
    checked: bool = False


class ShoppingListCreate(BaseModel):
    name: str = "Shopping List"
    items: List[ShoppingListItem] = []


class ShoppingListResponse(ShoppingListCreate):
    id: int

    class Config:
        from_attributes = True


class MealPlanCreate(BaseModel):
    plan_date: date
    plan_end_date: Optional[date] = None
    meals_per_day: Optional[int] = Field(None, ge=1, description="Set by the generator; inferred when absent")
    meals: List[MealCreate] = []
    shopping_lists: List[ShoppingListCreate] = []

    @model_validator(mode="after")
    def check_date_range(self):
        if self.plan_end_date and self.plan_end_date < self.plan_date:
            raise ValueError("plan_end_date must not be before plan_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "plan_date": "2024-01-01",
                "plan_end_date": "2024-01-07",
                "meals_per_day": 3,
                "meals": [
                    {
                        "meal_name": "Oats with Berries",
                        "meal_type": "breakfast",
                        "calories": 420,
                        "protein": 18,
                        "carbs": 62,
                        "fat": 11,
                        "prep_time": 10,
                        "ingredients": ["80g rolled oats", "150g mixed berries"],
                        "instructions": ["Cook oats", "Top with berries"]
                    }
                ],
                "shopping_lists": []
            }
        }


class MealPlanStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(active|completed)$")


class MealPlanResponse(BaseModel):
    id: int
    user_id: str
    plan_date: date
    plan_end_date: Optional[date] = None
    meals_per_day: Optional[int] = None
    status: str
    meals: List[MealItem]
    shopping_lists: List[ShoppingListResponse] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlanDay(BaseModel):
    day_index: int
    day_date: date
    meals: List[ScheduledMeal]
    totals: NutrientTotals


class MealPlanDaysResponse(BaseModel):
    plan_id: int
    plan_date: date
    plan_end_date: Optional[date] = None
    total_days: int
    meals_per_day: int
    days: List[PlanDay]
