"""Database store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from monthlies.store.repository import ExpenseRepository
from monthlies.store.schema import create_schema, database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "create_schema",
    "database_exists",
    "get_db_path",
    "init_database",
    # Repository
    "ExpenseRepository",
]
