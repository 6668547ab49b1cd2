from datetime import date as DateType, datetime
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.api.auth import get_current_user_id
from fittrack.crud import nutrition_log as crud_nutrition_log
from fittrack.crud.meal_plan import get_meal_plans_for_date
from fittrack.crud.user_profile import get_user_profile_by_user_id
from fittrack.schemas.meal_plan import MealItem
from fittrack.schemas.health import TargetMacros
from fittrack.schemas.tracking import LogMealRequest, DailyDietResponse, NutritionLogResponse
from fittrack.services.meal_schedule import planned_meals_for_date
from fittrack.services.nutrition_service import aggregate_totals, calculate_daily_targets
from fittrack.services.progress_service import build_progress

router = APIRouter()


# --- Helper to get Local Time ---
def get_user_local_time(profile) -> datetime:
    """
    Returns the current datetime in the user's timezone (naive).
    Defaults to UTC if timezone is invalid or not set.
    """
    tz_name = getattr(profile, 'timezone', None) or 'UTC'

    try:
        user_tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        user_tz = pytz.UTC

    # Get current UTC time and convert to user's timezone
    server_now = datetime.now(pytz.UTC)
    user_now = server_now.astimezone(user_tz)

    # Stored as the user's wall clock time
    return user_now.replace(tzinfo=None)


def get_user_targets(profile) -> TargetMacros:
    """Stored profile targets, or the defaults for users without a profile."""
    if profile:
        return TargetMacros(
            calories=profile.calories or 0.0,
            protein=profile.protein or 0.0,
            carbs=profile.carbs or 0.0,
            fat=profile.fat or 0.0,
        )
    return TargetMacros(**calculate_daily_targets(None, None, None, None, None))


# --- Endpoints ---

@router.post("/log-meal", status_code=status.HTTP_201_CREATED)
def log_meal(
    request: LogMealRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Log a food item to the user's history.
    """
    # Determine defaults based on user's timezone
    if not request.date or not request.created_at:
        profile = get_user_profile_by_user_id(db, user_id)
        local_now = get_user_local_time(profile)

        final_date = request.date if request.date else local_now.date()
        final_created_at = request.created_at if request.created_at else local_now
    else:
        final_date = request.date
        final_created_at = request.created_at

    new_log = crud_nutrition_log.create_nutrition_log(db, user_id, request, final_date, final_created_at)
    return {"message": "Meal logged successfully", "log_id": new_log.id, "date": new_log.date.isoformat()}


@router.get("/daily-diet", response_model=DailyDietResponse)
def get_daily_diet_logs(
    date: Optional[DateType] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Logged food for a day (defaults to the user's today) with totals,
    the meals every covering plan schedules for that day, and progress against targets.
    """
    profile = get_user_profile_by_user_id(db, user_id)
    if date is None:
        date = get_user_local_time(profile).date()

    logs = crud_nutrition_log.get_nutrition_logs(db, user_id, date)
    totals = aggregate_totals(logs)
    targets = get_user_targets(profile)

    planned = []
    for plan in get_meal_plans_for_date(db, user_id, date):
        items = [MealItem.model_validate(m) for m in plan.meals]
        planned.extend(planned_meals_for_date(
            items, plan.plan_date, plan.plan_end_date, date, plan.meals_per_day, plan_id=plan.id
        ))

    return DailyDietResponse(
        date=date,
        calories_target=targets.calories,
        meals=[NutritionLogResponse.model_validate(log) for log in logs],
        totals=totals,
        planned_meals=planned,
        planned_totals=aggregate_totals(planned),
        progress=build_progress(totals, targets),
    )


@router.delete("/log-meal/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_log(
    log_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Delete a meal log.
    """
    log = crud_nutrition_log.delete_nutrition_log(db, user_id, log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Log not found")
    return None


@router.delete("/daily-diet", status_code=status.HTTP_204_NO_CONTENT)
def delete_daily_diet_logs(
    date: DateType = Query(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Delete all meal logs for the specified date.
    """
    crud_nutrition_log.delete_nutrition_logs_for_date(db, user_id, date)
    return None
