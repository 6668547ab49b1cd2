# fittrack/models/user_profile.py
from sqlalchemy import Column, Integer, Float, String, DateTime, event
from datetime import datetime
import logging
from fittrack.config import DEFAULT_TIMEZONE
from fittrack.database import Base

logger = logging.getLogger(__name__)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    # Subject claim issued by the auth provider
    user_id = Column(String(64), unique=True, nullable=False, index=True)

    # Inputs
    gender = Column(String(10))          # "male", "female", "other"
    age = Column(Integer)
    height_cm = Column(Float)
    weight_kg = Column(Float)
    activity_level = Column(String(20))  # "sedentary", "light", "moderate", "active", "very-active"

    # Calculated Columns (Stored in DB)
    calories = Column(Float, default=0.0)
    protein = Column(Float, default=0.0)
    carbs = Column(Float, default=0.0)
    fat = Column(Float, default=0.0)

    timezone = Column(String(50), default=DEFAULT_TIMEZONE)  # e.g. "Asia/Karachi"
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# --- CALCULATION ENGINE ---
from fittrack.services.nutrition_service import calculate_daily_targets


def apply_nutrition_plan(target):
    """
    Applies calculated nutrition targets to the UserProfile instance.
    Missing body metrics are filled with the service defaults.
    """
    logger.info(f"Refreshing nutrition plan for profile {getattr(target, 'id', 'new')}")

    results = calculate_daily_targets(
        weight=target.weight_kg,
        height=target.height_cm,
        age=target.age,
        gender=target.gender,
        activity_level=target.activity_level,
    )

    def is_diff(attr, new_val):
        old_val = getattr(target, attr, 0.0) or 0.0
        return abs(old_val - new_val) > 0.1

    # Only touch changed values to prevent spurious updated_at bumps
    for attr in ('calories', 'protein', 'carbs', 'fat'):
        if is_diff(attr, results[attr]):
            setattr(target, attr, results[attr])


# --- AUTOMATION LISTENERS ---

@event.listens_for(UserProfile, 'before_insert')
def receive_before_insert(mapper, connection, target):
    logger.info("Before insert event triggered for new profile")
    apply_nutrition_plan(target)


@event.listens_for(UserProfile, 'before_update')
def receive_before_update(mapper, connection, target):
    logger.info(f"Before update event triggered for profile {getattr(target, 'id', 'unknown')}")
    apply_nutrition_plan(target)
