"""
Application settings.

Every value is read from the environment (a local .env file is loaded first),
so the same build runs against PostgreSQL in production and against the
in-memory storage backend in tests.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Storage backend: "sql" (PostgreSQL through SQLAlchemy) or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()

# JWT settings
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))  # 7 days

# Timezone used to decide what "today" is for dashboards
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

CORS_ALLOWED_ORIGINS = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173"
)

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
