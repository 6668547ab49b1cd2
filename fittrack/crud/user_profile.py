# fittrack/crud/user_profile.py
from sqlalchemy.orm import Session
from fittrack.models.user_profile import UserProfile
from fittrack.schemas.user_profile import UserProfileUpdate


def get_user_profile_by_user_id(db: Session, user_id: str):
    """Get user profile by user ID"""
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def upsert_user_profile(db: Session, user_id: str, user_profile_update: UserProfileUpdate):
    """
    Create the profile on first write, update it afterwards.
    Targets are recalculated by the SQLAlchemy event listeners on the model.
    """
    db_profile = get_user_profile_by_user_id(db, user_id)
    if not db_profile:
        db_profile = UserProfile(user_id=user_id)
        db.add(db_profile)

    update_data = user_profile_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(db_profile, field, value)

    db.commit()
    db.refresh(db_profile)
    return db_profile


def update_timezone(db: Session, user_id: str, timezone: str):
    db_profile = get_user_profile_by_user_id(db, user_id)
    if not db_profile:
        return None

    db_profile.timezone = timezone
    db.commit()
    db.refresh(db_profile)
    return db_profile
