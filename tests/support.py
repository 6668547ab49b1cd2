from datetime import date, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fittrack.database import Base
import fittrack.models  # registers every table on Base.metadata

# Use an in-memory SQLite DB shared across threads (TestClient runs handlers in a worker thread)
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

MEAL_TYPES = ["breakfast", "lunch", "dinner"]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    Base.metadata.create_all(bind=engine)


def drop_tables():
    Base.metadata.drop_all(bind=engine)


def meal_payload(index: int) -> dict:
    """Meal i has 100 + i kcal so per-day sums are easy to check."""
    return {
        "meal_name": f"Meal {index}",
        "meal_type": MEAL_TYPES[index % len(MEAL_TYPES)],
        "calories": 100 + index,
        "protein": 10,
        "carbs": 20,
        "fat": 5,
        "prep_time": 15,
        "ingredients": [f"ingredient {index}"],
        "instructions": f"Cook meal {index}",
    }


def plan_payload(start: date, days: int = None, meal_count: int = 21, **extra) -> dict:
    payload = {
        "plan_date": start.isoformat(),
        "plan_end_date": (start + timedelta(days=days - 1)).isoformat() if days else None,
        "meals": [meal_payload(i) for i in range(meal_count)],
    }
    payload.update(extra)
    return payload
