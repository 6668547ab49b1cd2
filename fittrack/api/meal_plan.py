import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.crud import meal_plan as crud_meal_plan
from fittrack.schemas.meal_plan import (
    MealCreate, MealItem, MealPlanCreate, MealPlanDaysResponse, MealPlanResponse,
    MealPlanStatusUpdate, MealUpdate, PlanDay, ScheduledMeal
)
from fittrack.services.meal_schedule import (
    bucket_meals_by_day, group_plans_by_date, plan_total_days, resolve_meals_per_day
)
from fittrack.services.nutrition_service import aggregate_totals
from fittrack.api.auth import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/meal-plans",
    tags=["Meal Plans"]
)

MONTH_PATTERN = r"^\d{4}-\d{2}$"


@router.post("/", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_meal_plan_endpoint(
    plan: MealPlanCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Store a plan produced by the meal-plan generator.
    """
    return crud_meal_plan.create_meal_plan(db, user_id, plan)


@router.get("/", response_model=List[MealPlanResponse])
def list_meal_plans(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_meal_plan.get_meal_plans(db, user_id, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/calendar", response_model=Dict[str, List[ScheduledMeal]])
def get_meal_calendar(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Meals of every plan keyed by ISO date, for the meal calendar.
    """
    try:
        plans = crud_meal_plan.get_meal_plans(db, user_id, month)
        return group_plans_by_date(plans)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_meal_plan_endpoint(
    plan_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    plan = crud_meal_plan.get_meal_plan(db, user_id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return plan


@router.get("/{plan_id}/days", response_model=MealPlanDaysResponse)
def get_meal_plan_days(
    plan_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    The plan's meals split into calendar days, with per-day nutrition totals.
    """
    plan = crud_meal_plan.get_meal_plan(db, user_id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")

    try:
        total_days = plan_total_days(plan.plan_date, plan.plan_end_date)
        items = [MealItem.model_validate(m) for m in plan.meals]
        buckets = bucket_meals_by_day(items, plan.plan_date, plan.plan_end_date, plan.meals_per_day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    days = [
        PlanDay(
            day_index=day_index,
            day_date=meals[0].day_date,
            meals=meals,
            totals=aggregate_totals(meals)
        )
        for day_index, meals in sorted(buckets.items())
    ]

    return MealPlanDaysResponse(
        plan_id=plan.id,
        plan_date=plan.plan_date,
        plan_end_date=plan.plan_end_date,
        total_days=total_days,
        meals_per_day=resolve_meals_per_day(len(items), total_days, plan.meals_per_day),
        days=days
    )


@router.patch("/{plan_id}/status", response_model=MealPlanResponse)
def update_meal_plan_status_endpoint(
    plan_id: int,
    request: MealPlanStatusUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    plan = crud_meal_plan.update_meal_plan_status(db, user_id, plan_id, request.status)
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")

    if plan.status == "completed":
        logger.info(f"User {user_id} completed meal plan {plan.id} ({plan.plan_date})")
    return plan


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan_endpoint(
    plan_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Delete a plan together with its meals and shopping lists.
    """
    plan = crud_meal_plan.delete_meal_plan(db, user_id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return None


# --- Meals inside a plan ---

@router.post("/{plan_id}/meals", response_model=MealItem, status_code=status.HTTP_201_CREATED)
def add_meal_endpoint(
    plan_id: int,
    meal: MealCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Add a custom meal (e.g. an extra snack) to the end of a stored plan.
    """
    db_meal = crud_meal_plan.add_meal_to_plan(db, user_id, plan_id, meal)
    if not db_meal:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return db_meal


@router.get("/{plan_id}/meals/{meal_id}", response_model=MealItem)
def get_meal_endpoint(
    plan_id: int,
    meal_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_meal = crud_meal_plan.get_plan_meal(db, user_id, plan_id, meal_id)
    if not db_meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return db_meal


@router.put("/{plan_id}/meals/{meal_id}", response_model=MealItem)
def update_meal_endpoint(
    plan_id: int,
    meal_id: int,
    meal_update: MealUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_meal = crud_meal_plan.update_plan_meal(db, user_id, plan_id, meal_id, meal_update)
    if not db_meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return db_meal


@router.delete("/{plan_id}/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_endpoint(
    plan_id: int,
    meal_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Delete one meal. Later meals move up one slot in the schedule.
    """
    db_meal = crud_meal_plan.delete_plan_meal(db, user_id, plan_id, meal_id)
    if not db_meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return None
