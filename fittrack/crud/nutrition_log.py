from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session
from fittrack.models.tracking import NutritionLog
from fittrack.schemas.tracking import LogMealRequest


def create_nutrition_log(
    db: Session,
    user_id: str,
    request: LogMealRequest,
    log_date: date,
    created_at: datetime
) -> NutritionLog:
    new_log = NutritionLog(
        user_id=user_id,
        date=log_date,
        food_name=request.food_name,
        meal_type=request.meal_type,
        calories=request.calories,
        protein=request.protein,
        carbs=request.carbs,
        fat=request.fat,
        created_at=created_at
    )

    db.add(new_log)
    db.commit()
    db.refresh(new_log)
    return new_log


def get_nutrition_logs(db: Session, user_id: str, log_date: date) -> List[NutritionLog]:
    """Logs for one day, latest first."""
    return db.query(NutritionLog).filter(
        NutritionLog.user_id == user_id,
        NutritionLog.date == log_date
    ).order_by(NutritionLog.created_at.desc(), NutritionLog.id.desc()).all()


def delete_nutrition_log(db: Session, user_id: str, log_id: int) -> Optional[NutritionLog]:
    log = db.query(NutritionLog).filter(
        NutritionLog.id == log_id,
        NutritionLog.user_id == user_id
    ).first()
    if log:
        db.delete(log)
        db.commit()
    return log


def delete_nutrition_logs_for_date(db: Session, user_id: str, log_date: date) -> int:
    deleted = db.query(NutritionLog).filter(
        NutritionLog.user_id == user_id,
        NutritionLog.date == log_date
    ).delete()
    db.commit()
    return deleted
