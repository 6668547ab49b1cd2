# fittrack/schemas/user_profile.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

GENDER_PATTERN = "^(male|female|other)$"
ACTIVITY_PATTERN = "^(sedentary|light|moderate|active|very-active)$"


class UserProfileUpdate(BaseModel):
    gender: Optional[str] = Field(None, pattern=GENDER_PATTERN, description="male, female or other")
    age: Optional[int] = Field(None, gt=0, le=120)
    height_cm: Optional[float] = Field(None, gt=0, description="Height in cm")
    weight_kg: Optional[float] = Field(None, gt=0, description="Current weight in kg")
    activity_level: Optional[str] = Field(
        None,
        pattern=ACTIVITY_PATTERN,
        description="sedentary, light, moderate, active, or very-active"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "gender": "male",
                "age": 32,
                "height_cm": 178.0,
                "weight_kg": 75.0,
                "activity_level": "moderate"
            }
        }


class TimezoneUpdate(BaseModel):
    timezone: str


class UserProfileResponse(BaseModel):
    id: int
    user_id: str

    gender: Optional[str]
    age: Optional[int]
    height_cm: Optional[float]
    weight_kg: Optional[float]
    activity_level: Optional[str]

    # Filled in by the ORM listeners
    calories: float
    protein: float
    carbs: float
    fat: float

    timezone: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
