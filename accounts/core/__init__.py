"""Core app configuration, database, security and error handling."""

from accounts.core.config import Settings, get_settings
from accounts.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
