"""Database infrastructure."""

from .connection import (
    DatabaseSessionManager,
    db_manager,
    get_db_session,
    get_read_session,
)
from .models import Base

__all__ = [
    "Base",
    "DatabaseSessionManager",
    "db_manager",
    "get_db_session",
    "get_read_session",
]
