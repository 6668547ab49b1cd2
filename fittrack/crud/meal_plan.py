"""
Meal Plan CRUD
--------------
Pure Database Access Object for Meal Plans.
Plans are produced by the external generator and stored here as-is;
day bucketing lives in fittrack.services.meal_schedule.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload
from fittrack.models.meal_plan import MealPlan, Meal, ShoppingList
from fittrack.schemas.meal_plan import MealCreate, MealPlanCreate, MealUpdate

logger = logging.getLogger(__name__)


def month_bounds(month: str) -> Tuple[date, date]:
    """
    "2025-11" -> (2025-11-01, 2025-12-01). The upper bound is exclusive.
    """
    try:
        year, mon = (int(part) for part in month.split("-"))
        start = date(year, mon, 1)
    except ValueError:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")

    if mon == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, mon + 1, 1)


def _plans_query(db: Session, user_id: str):
    return db.query(MealPlan).options(
        selectinload(MealPlan.meals),
        selectinload(MealPlan.shopping_lists)
    ).filter(MealPlan.user_id == user_id)


def create_meal_plan(db: Session, user_id: str, plan: MealPlanCreate) -> MealPlan:
    """
    Store a generated plan. Meal order is kept through the position column.
    """
    db_plan = MealPlan(
        user_id=user_id,
        plan_date=plan.plan_date,
        plan_end_date=plan.plan_end_date,
        meals_per_day=plan.meals_per_day,
        status="active",
    )

    for position, meal in enumerate(plan.meals):
        db_plan.meals.append(Meal(position=position, **meal.model_dump()))

    for shopping_list in plan.shopping_lists:
        db_plan.shopping_lists.append(ShoppingList(
            name=shopping_list.name,
            items=[item.model_dump() for item in shopping_list.items]
        ))

    try:
        db.add(db_plan)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_plan)
    logger.info(f"Stored meal plan {db_plan.id} with {len(plan.meals)} meals for user {user_id}")
    return db_plan


def get_meal_plans(db: Session, user_id: str, month: Optional[str] = None) -> List[MealPlan]:
    """All plans for a user, newest plan_date first, optionally limited to one month."""
    query = _plans_query(db, user_id)

    if month:
        start, end = month_bounds(month)
        query = query.filter(MealPlan.plan_date >= start, MealPlan.plan_date < end)

    return query.order_by(MealPlan.plan_date.desc(), MealPlan.id.desc()).all()


def get_meal_plan(db: Session, user_id: str, plan_id: int) -> Optional[MealPlan]:
    return _plans_query(db, user_id).filter(MealPlan.id == plan_id).first()


def get_meal_plans_for_date(db: Session, user_id: str, on_date: date) -> List[MealPlan]:
    """
    Every plan whose range covers on_date, oldest plan_date first.
    A plan without an end date covers its start day only.
    """
    return _plans_query(db, user_id).filter(
        MealPlan.plan_date <= on_date,
        or_(
            MealPlan.plan_end_date >= on_date,
            and_(MealPlan.plan_end_date.is_(None), MealPlan.plan_date == on_date),
        )
    ).order_by(MealPlan.plan_date.asc(), MealPlan.id.asc()).all()


def update_meal_plan_status(db: Session, user_id: str, plan_id: int, status: str) -> Optional[MealPlan]:
    db_plan = get_meal_plan(db, user_id, plan_id)
    if not db_plan:
        return None

    db_plan.status = status
    db.commit()
    db.refresh(db_plan)
    return db_plan


def delete_meal_plan(db: Session, user_id: str, plan_id: int) -> Optional[MealPlan]:
    """Delete a plan; meals and shopping lists go with it."""
    db_plan = get_meal_plan(db, user_id, plan_id)
    if db_plan:
        db.delete(db_plan)
        db.commit()
    return db_plan


# --- Single meals inside a plan ---

def get_plan_meal(db: Session, user_id: str, plan_id: int, meal_id: int) -> Optional[Meal]:
    return db.query(Meal).join(MealPlan).filter(
        Meal.id == meal_id,
        Meal.meal_plan_id == plan_id,
        MealPlan.user_id == user_id
    ).first()


def add_meal_to_plan(db: Session, user_id: str, plan_id: int, meal: MealCreate) -> Optional[Meal]:
    """
    Append a custom meal after the plan's last meal.
    meals_per_day is left alone, so the day it lands on follows the stored
    value when there is one and the re-inferred value otherwise.
    """
    db_plan = get_meal_plan(db, user_id, plan_id)
    if not db_plan:
        return None

    next_position = max((m.position for m in db_plan.meals), default=-1) + 1
    db_meal = Meal(position=next_position, **meal.model_dump())
    db_plan.meals.append(db_meal)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_meal)
    logger.info(f"Added meal {db_meal.id} at position {next_position} to plan {plan_id}")
    return db_meal


def update_plan_meal(
    db: Session, user_id: str, plan_id: int, meal_id: int, meal_update: MealUpdate
) -> Optional[Meal]:
    db_meal = get_plan_meal(db, user_id, plan_id, meal_id)
    if not db_meal:
        return None

    update_data = meal_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(db_meal, field, value)

    db.commit()
    db.refresh(db_meal)
    return db_meal


def delete_plan_meal(db: Session, user_id: str, plan_id: int, meal_id: int) -> Optional[Meal]:
    """
    Remove one meal and close the gap it leaves, so positions stay 0..n-1
    and every later meal shifts one slot earlier in the schedule.
    """
    db_meal = get_plan_meal(db, user_id, plan_id, meal_id)
    if not db_meal:
        return None

    db_plan = db_meal.meal_plan
    db_plan.meals.remove(db_meal)
    for position, meal in enumerate(db_plan.meals):
        meal.position = position

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return db_meal
