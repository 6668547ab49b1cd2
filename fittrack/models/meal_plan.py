from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Float, Date, ForeignKey, DateTime
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from fittrack.database import Base


class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)

    plan_date = Column(Date, nullable=False, index=True)   # inclusive start
    plan_end_date = Column(Date, nullable=True)            # inclusive end; NULL = single day
    meals_per_day = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="active")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    meals = relationship(
        "Meal",
        back_populates="meal_plan",
        order_by="Meal.position",
        cascade="all, delete-orphan"
    )
    shopping_lists = relationship(
        "ShoppingList",
        back_populates="meal_plan",
        cascade="all, delete-orphan"
    )


class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)

    meal_plan_id = Column(
        Integer,
        ForeignKey("meal_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # Order inside the plan; the day is derived from it
    position = Column(Integer, nullable=False)

    meal_name = Column(String, nullable=False)
    meal_type = Column(String(20), nullable=False)

    calories = Column(Float, default=0.0)
    protein = Column(Float, default=0.0)
    carbs = Column(Float, default=0.0)
    fat = Column(Float, default=0.0)
    prep_time = Column(Integer, nullable=True)

    # JSON fields
    ingredients = Column(
        JSONB,
        nullable=True,
        comment="Ordered ingredient lines"
        # Example:
        # ["80g rolled oats", "150g mixed berries"]
    )

    instructions = Column(
        JSONB,
        nullable=True,
        comment="Preparation steps"
    )

    image = Column(String, nullable=True)
    source_url = Column(String, nullable=True)

    meal_plan = relationship("MealPlan", back_populates="meals")


class ShoppingList(Base):
    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(
        Integer,
        ForeignKey("meal_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = Column(String(100), nullable=False, default="Shopping List")

    items = Column(
        JSONB,
        nullable=False,
        comment="[{ name, quantity, measure, category, checked }]"
    )

    created_at = Column(DateTime, default=datetime.utcnow)

    meal_plan = relationship("MealPlan", back_populates="shopping_lists")
