"""Database layer for reconkit application."""

from reconkit.database.base import Database
from reconkit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
