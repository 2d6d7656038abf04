"""Database layer for diamondbook application."""

from diamondbook.database.base import Database
from diamondbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
