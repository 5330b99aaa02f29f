from fastapi import Request

from config import STORAGE_BACKEND
from crud.sql_storage import SqlStorage
from database import SessionLocal


def get_storage(request: Request):
    """
    FastAPI dependency that yields the storage backend for one request.

    The in-memory backend is created once per application (see main.py) and
    kept on app.state; the SQL backend gets a fresh session per request.
    """
    if STORAGE_BACKEND == "memory":
        yield request.app.state.memory_storage
        return

    db = SessionLocal()
    try:
        yield SqlStorage(db)
    finally:
        db.close()
