import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fittrack.config import CORS_ORIGINS, LOG_LEVEL
from fittrack.database import engine, Base
import fittrack.models
from fittrack.api import meal_plan, tracking, user_profile

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


def run_migrations():
    """Run pending Alembic migrations, then make sure every table exists."""
    try:
        from alembic.config import Config
        from alembic import command
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")
        logger.info("[Alembic] Migrations applied successfully")
    except Exception as e:
        logger.warning(f"[Alembic] Migration failed, falling back to create_all: {e}")

    logger.info("[Startup] Ensuring all tables exist via create_all...")
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Database: {engine.url.render_as_string(hide_password=True)}")
    run_migrations()
    yield


app = FastAPI(title="FitTrack Nutrition API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_profile.router)
app.include_router(meal_plan.router)
app.include_router(tracking.router, prefix="/tracking", tags=["Tracking"])


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Welcome to FitTrack Nutrition API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy", "message": "API is running"}
