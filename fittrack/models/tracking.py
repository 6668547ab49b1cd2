from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from datetime import datetime, date
from fittrack.database import Base


class NutritionLog(Base):
    __tablename__ = "nutrition_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    date = Column(Date, default=date.today, index=True)

    # Logged Item
    food_name = Column(String(100), nullable=False)
    meal_type = Column(String(20), nullable=True)  # e.g. breakfast, lunch, dinner
    calories = Column(Float, default=0.0)
    protein = Column(Float, default=0.0)
    carbs = Column(Float, default=0.0)
    fat = Column(Float, default=0.0)

    created_at = Column(DateTime, default=datetime.now)
