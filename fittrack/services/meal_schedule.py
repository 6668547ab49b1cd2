"""
Meal Schedule
-------------
Spreads the flat, ordered meal list of a plan across its calendar days.
Meals carry no date of their own; the day is derived from list position.
"""
import logging
import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from fittrack.schemas.meal_plan import MealItem, ScheduledMeal

logger = logging.getLogger(__name__)


def plan_total_days(plan_date: date, plan_end_date: Optional[date] = None) -> int:
    """Inclusive number of days covered by a plan. A plan without an end date is one day."""
    if plan_end_date is None:
        return 1
    if plan_end_date < plan_date:
        raise ValueError(f"Plan ends ({plan_end_date}) before it starts ({plan_date})")
    return (plan_end_date - plan_date).days + 1


def resolve_meals_per_day(meal_count: int, total_days: int, meals_per_day: Optional[int] = None) -> int:
    """
    Uses the count stored at generation time when there is one,
    otherwise assumes the meals are spread evenly over the plan.
    """
    if meals_per_day and meals_per_day > 0:
        return meals_per_day
    if meal_count == 0:
        return 0
    return math.ceil(meal_count / total_days)


def bucket_meals_by_day(
    meals: Sequence[MealItem],
    plan_date: date,
    plan_end_date: Optional[date] = None,
    meals_per_day: Optional[int] = None,
    plan_id: Optional[int] = None,
) -> Dict[int, List[ScheduledMeal]]:
    """
    Groups meals by 0-based day index.

    Meal i lands on day i // meals_per_day, dated plan_date + that many days.
    Order within a day follows the input order. Every meal appears exactly once.
    plan_id, when given, is stamped on every scheduled meal.
    """
    if not meals:
        return {}

    total_days = plan_total_days(plan_date, plan_end_date)
    per_day = resolve_meals_per_day(len(meals), total_days, meals_per_day)

    grouped: Dict[int, List[ScheduledMeal]] = defaultdict(list)
    for index, meal in enumerate(meals):
        day_index = index // per_day
        grouped[day_index].append(ScheduledMeal(
            **meal.model_dump(exclude={"day_index", "day_date", "plan_id"}),
            day_index=day_index,
            day_date=plan_date + timedelta(days=day_index),
            plan_id=plan_id,
        ))

    last_day = max(grouped)
    if last_day >= total_days:
        logger.warning(
            f"{len(meals)} meals at {per_day}/day run {last_day + 1 - total_days} day(s) past the plan end"
        )

    return dict(grouped)


def planned_meals_for_date(
    meals: Sequence[MealItem],
    plan_date: date,
    plan_end_date: Optional[date],
    on_date: date,
    meals_per_day: Optional[int] = None,
    plan_id: Optional[int] = None,
) -> List[ScheduledMeal]:
    """Meals the plan schedules on on_date; empty outside the plan's range."""
    days_diff = (on_date - plan_date).days
    if days_diff < 0:
        return []
    if days_diff >= plan_total_days(plan_date, plan_end_date):
        return []

    buckets = bucket_meals_by_day(meals, plan_date, plan_end_date, meals_per_day, plan_id)
    return buckets.get(days_diff, [])


def group_plans_by_date(plans: Iterable) -> Dict[str, List[ScheduledMeal]]:
    """
    Calendar view over several plans: ISO date -> meals from every plan on that day.
    Accepts ORM MealPlan rows or MealPlanResponse models.
    """
    by_date: Dict[str, List[ScheduledMeal]] = defaultdict(list)

    for plan in plans:
        if not plan.meals or not plan.plan_date:
            continue

        items = [MealItem.model_validate(m) for m in plan.meals]
        buckets = bucket_meals_by_day(
            items, plan.plan_date, plan.plan_end_date, plan.meals_per_day, plan_id=plan.id
        )

        for day_index in sorted(buckets):
            for meal in buckets[day_index]:
                by_date[meal.day_date.isoformat()].append(meal)

    return dict(by_date)
