"""Database layer for sharedledger."""

from sharedledger.database.base import Database
from sharedledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
