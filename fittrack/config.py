import os
from dotenv import load_dotenv

load_dotenv(override=False)

SQLALCHEMY_DATABASE_URL = os.getenv("SQLALCHEMY_DATABASE_URL", "sqlite:///./fittrack.db")

# Shared with the auth provider that issues the JWTs
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
