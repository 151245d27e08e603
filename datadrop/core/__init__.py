"""Core app configuration, database, errors and logging."""

from datadrop.core.config import get_settings, settings
from datadrop.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
