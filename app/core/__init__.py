"""Core: settings, database sessions, error taxonomy."""

from app.core.config import Settings, get_settings, settings
from app.core.database import SessionLocal, get_db
from app.core.errors import AppError

__all__ = ["AppError", "SessionLocal", "Settings", "get_db", "get_settings", "settings"]
