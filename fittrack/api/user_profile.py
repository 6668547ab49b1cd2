# fittrack/api/user_profile.py
import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.schemas.user_profile import UserProfileResponse, UserProfileUpdate, TimezoneUpdate
from fittrack.schemas.health import HealthMetrics
from fittrack.crud import user_profile as crud_user_profile
from fittrack.services.nutrition_service import calculate_health_metrics
from fittrack.api.auth import get_current_user_id


router = APIRouter(prefix="/user-profiles", tags=["user-profiles"])


# GET - Get profile for current user
@router.get("/me", response_model=UserProfileResponse)
def read_my_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_profile = crud_user_profile.get_user_profile_by_user_id(db, user_id=user_id)
    if db_profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return db_profile


# PUT - Create or update profile for current user
@router.put("/me", response_model=UserProfileResponse)
def update_my_profile(
    profile_update: UserProfileUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Save body metrics. Calorie and macro targets are recalculated on every write.
    """
    return crud_user_profile.upsert_user_profile(db, user_id=user_id, user_profile_update=profile_update)


# PATCH - Update Timezone
@router.patch("/timezone", status_code=status.HTTP_200_OK)
def update_profile_timezone(
    tz_data: TimezoneUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update the user's timezone. Used to pick the default day for new logs.
    """
    if tz_data.timezone not in pytz.all_timezones_set:
        raise HTTPException(status_code=400, detail=f"Unknown timezone '{tz_data.timezone}'")

    profile = crud_user_profile.update_timezone(db, user_id, tz_data.timezone)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    return {"message": "Timezone updated", "timezone": profile.timezone}


# GET - Health metrics (BMI, BMR, TDEE, body fat, water, targets)
@router.get("/me/health-metrics", response_model=HealthMetrics)
def read_my_health_metrics(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Reference values for the dashboard. Users without a profile get the defaults.
    """
    profile = crud_user_profile.get_user_profile_by_user_id(db, user_id=user_id)
    if not profile:
        return calculate_health_metrics()

    return calculate_health_metrics(
        weight=profile.weight_kg,
        height=profile.height_cm,
        age=profile.age,
        gender=profile.gender,
        activity_level=profile.activity_level,
    )
