"""Core app configuration, database and security helpers."""

from app.core.config import get_settings, settings
from app.core.database import SessionLocal, get_db

__all__ = ["get_settings", "settings", "get_db", "SessionLocal"]
