"""Database layer for ledgerkeep application."""

from ledgerkeep.database.base import Database
from ledgerkeep.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
