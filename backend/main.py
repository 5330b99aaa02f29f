from fastapi import FastAPI
from dotenv import load_dotenv

load_dotenv()
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime
import os
import logging
from fastapi.openapi.utils import get_openapi

from config import CORS_ALLOWED_ORIGINS, LOG_DIR, LOG_LEVEL, STORAGE_BACKEND
from database import Base, engine
import models  # noqa: F401  registers every table on Base.metadata
from crud.memory_storage import MemoryStorage
from utils.compliance import InvalidMrlLevel
from utils.exception_handlers import invalid_mrl_level_handler, unhandled_exception_handler
import auth
import routers.farms as farms
import routers.animals as animals
import routers.treatments as treatments
import routers.farm_reports as farm_reports
import routers.dashboard as dashboard
import routers.admin as admin


os.makedirs(LOG_DIR, exist_ok=True) # Create the log directory if it doesn't exist

# Create a unique log file name based on current date/time
current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
LOG_FILE = os.path.join(LOG_DIR, f"app_{current_time_str}.log")

# Configure the root logger
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE, # Log to a file
    filemode='a' # Append to the file if it exists
)

# Also log to the console
console_handler = logging.StreamHandler()
console_handler.setLevel(LOG_LEVEL)
console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logging.getLogger().addHandler(console_handler) # Add to the root logger

logger = logging.getLogger(__name__)
logger.info(f"Application starting up with '{STORAGE_BACKEND}' storage...")
# --- End Logging Configuration ---


if STORAGE_BACKEND == "sql":
    # Create database tables (Alembic manages later schema changes)
    Base.metadata.create_all(bind=engine)


app = FastAPI()

if STORAGE_BACKEND == "memory":
    app.state.memory_storage = MemoryStorage()


allowed_origins = [origin.strip() for origin in CORS_ALLOWED_ORIGINS.split(',')]

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(InvalidMrlLevel, invalid_mrl_level_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Farm MRL Tracker API",
        version="1.0.0",
        description="Antimicrobial treatment records and MRL compliance monitoring for farms",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    # Apply security globally to all endpoints
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


app.include_router(auth.router)
app.include_router(farms.router)
app.include_router(animals.router)
app.include_router(treatments.router)
app.include_router(farm_reports.router)
app.include_router(dashboard.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    return {"message": "Farm MRL Tracker API"}
