"""Database schema initialization and migrations."""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

# ISO-8601 UTC with milliseconds so timestamps sort lexically
TIMESTAMP_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "monthlies" / "expenses.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the expenses table on an open connection if it is absent.

    Safe to run any number of times. Older tables missing ``updated_at``
    get the column added.

    Args:
        conn: Open database connection.

    Raises:
        sqlite3.Error: If the storage medium is unreachable or unwritable.
    """
    cursor = conn.cursor()

    try:
        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS expenses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount REAL NOT NULL,
                description TEXT NOT NULL,
                category TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT ({TIMESTAMP_SQL}),
                updated_at TEXT NOT NULL DEFAULT ({TIMESTAMP_SQL})
            )
        """
        )

        # Migrations for older databases (must run before creating indexes on new columns)
        cursor.execute("PRAGMA table_info(expenses)")
        columns = [row[1] for row in cursor.fetchall()]

        # Migration: Add 'updated_at' column if missing. ALTER TABLE cannot use a
        # non-constant default, so backfill from created_at instead.
        if "updated_at" not in columns:
            logger.info("Adding updated_at column to expenses")
            cursor.execute("ALTER TABLE expenses ADD COLUMN updated_at TEXT")
            cursor.execute("UPDATE expenses SET updated_at = created_at WHERE updated_at IS NULL")

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_expenses_created_at ON expenses(created_at)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database file with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        create_schema(conn)
    finally:
        conn.close()
