"""Core app configuration, database, errors and logging."""

from traintrack.core.config import get_settings, settings
from traintrack.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
