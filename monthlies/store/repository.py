"""Expense repository backed by a single SQLite connection.

Each operation is one statement against the store, except ``update``,
which reads the current row and then writes it. That read-modify-write is
not wrapped in a transaction: two concurrent updates to the same id are
last-writer-wins. This is accepted for a single-user local tool.

The connection is shared by the web server's threadpool. A lock serializes
statements on it; the read and the write inside ``update`` take it
separately, so the race above is unchanged.
"""

import logging
import sqlite3
import threading
from collections.abc import Sequence
from pathlib import Path
from types import TracebackType

from monthlies.dates import month_range
from monthlies.domain import expenses as domain
from monthlies.domain.expenses import Expense, ExpenseInput, ExpensePatch
from monthlies.domain.models import ExpenseId, Month
from monthlies.errors import ExpenseConsistencyError, ExpenseNotFoundError
from monthlies.store.schema import TIMESTAMP_SQL, create_schema, get_db_path

logger = logging.getLogger(__name__)

_SELECT = "SELECT id, amount, description, category, created_at, updated_at FROM expenses"


class ExpenseRepository:
    """CRUD and aggregation over the expenses table.

    The repository owns its connection for its whole lifetime. Build one at
    startup with :meth:`open` and hand it to whatever needs it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._lock = threading.Lock()

    @classmethod
    def open(cls, db_path: Path | str | None = None) -> "ExpenseRepository":
        """Connect to a database file, creating the schema if needed.

        Args:
            db_path: Path to the database file, or ":memory:". If None, uses default location.

        Returns:
            Repository owning the new connection.

        Raises:
            sqlite3.Error: If the database cannot be opened or initialized.
        """
        if db_path is None:
            db_path = get_db_path()
        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        # Threadpool workers share this connection; _lock serializes use
        conn = sqlite3.connect(db_path, check_same_thread=False)
        try:
            create_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        logger.debug("Opened expense store at %s", db_path)
        return cls(conn)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _fetch(self, query: str, params: Sequence[object] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(query, params).fetchall()

    def _write(self, statement: str, params: Sequence[object] = ()) -> sqlite3.Cursor:
        """Run one mutating statement and commit it, rolling back on failure."""
        with self._lock:
            try:
                cursor = self._conn.execute(statement, params)
                self._conn.commit()
            except sqlite3.Error:
                self._conn.rollback()
                raise
        return cursor

    def __enter__(self) -> "ExpenseRepository":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def list_all(self, month: Month | None = None) -> list[Expense]:
        """Get all expenses, newest first.

        Args:
            month: Optional YYYY-MM filter on creation date. If None, every row is returned.

        Returns:
            Expenses ordered by created_at descending, id descending on ties.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        query = _SELECT
        params: list[str] = []

        if month is not None:
            since, until, _ = month_range(month)
            query += " WHERE created_at >= ? AND created_at < ?"
            params.extend([since, until])

        query += " ORDER BY created_at DESC, id DESC"

        rows = self._fetch(query, params)
        return [Expense.from_row(row) for row in rows]

    def get_by_id(self, expense_id: ExpenseId) -> Expense | None:
        """Get a single expense.

        Args:
            expense_id: Expense ID.

        Returns:
            The expense, or None if no row has that id.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        rows = self._fetch(f"{_SELECT} WHERE id = ?", (expense_id,))
        return Expense.from_row(rows[0]) if rows else None

    def create(self, payload: ExpenseInput) -> Expense:
        """Insert an expense and return it as stored.

        Both timestamps are stamped with the same insertion time.

        Args:
            payload: Amount, description and category.

        Returns:
            The persisted expense, including its id and timestamps.

        Raises:
            ExpenseValidationError: If the payload is structurally invalid.
            ExpenseConsistencyError: If the new row cannot be read back.
            sqlite3.Error: If database operation fails.
        """
        payload = domain.validate_input(payload)

        cursor = self._write(
            "INSERT INTO expenses (amount, description, category, created_at, updated_at) "
            f"VALUES (?, ?, ?, {TIMESTAMP_SQL}, {TIMESTAMP_SQL})",
            (payload.amount, payload.description, payload.category),
        )

        expense_id = ExpenseId(cursor.lastrowid)
        expense = self.get_by_id(expense_id)
        if expense is None:
            raise ExpenseConsistencyError("Failed to create expense")

        logger.debug("Created expense %d", expense.id)
        return expense

    def update(self, expense_id: ExpenseId, patch: ExpensePatch) -> Expense:
        """Apply a sparse patch to an expense.

        Only present fields change. An empty patch returns the current record
        untouched, without refreshing updated_at.

        Args:
            expense_id: Expense ID.
            patch: Fields to change.

        Returns:
            The expense after the update.

        Raises:
            ExpenseNotFoundError: If no expense has that id.
            ExpenseValidationError: If a present field is invalid.
            ExpenseConsistencyError: If the row vanishes after the write.
            sqlite3.Error: If database operation fails.
        """
        current = self.get_by_id(expense_id)
        if current is None:
            raise ExpenseNotFoundError(expense_id)

        if patch.is_empty():
            return current

        changes = domain.validate_patch(patch).changes()
        assignments = ", ".join(f"{column} = ?" for column, _ in changes)
        values = [value for _, value in changes]

        self._write(
            f"UPDATE expenses SET {assignments}, updated_at = {TIMESTAMP_SQL} WHERE id = ?",
            (*values, expense_id),
        )

        expense = self.get_by_id(expense_id)
        if expense is None:
            raise ExpenseConsistencyError("Failed to update expense")

        logger.debug("Updated expense %d (%s)", expense_id, ", ".join(column for column, _ in changes))
        return expense

    def delete(self, expense_id: ExpenseId) -> bool:
        """Delete an expense.

        Args:
            expense_id: Expense ID.

        Returns:
            True if a row was removed, False if no row had that id.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        cursor = self._write("DELETE FROM expenses WHERE id = ?", (expense_id,))

        deleted = cursor.rowcount > 0
        logger.debug("Delete expense %d: %s", expense_id, "removed" if deleted else "no row")
        return deleted

    def sum_amounts(self, month: Month | None = None) -> float:
        """Total of expense amounts.

        Without a month this sums every row in the store, whatever its
        creation date, which is what the monthly total has always shown.

        Args:
            month: Optional YYYY-MM filter on creation date.

        Returns:
            The total, 0 when there are no matching expenses.
        """
        return domain.sum_amounts(self.list_all(month))
