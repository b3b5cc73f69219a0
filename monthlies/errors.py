"""Typed failure conditions raised by the domain and store layers.

Storage faults are not wrapped: they surface as ``sqlite3.Error``.
"""


class MonthliesError(Exception):
    """Base class for monthlies errors."""


class ExpenseValidationError(MonthliesError, ValueError):
    """Caller-supplied expense data is invalid."""


class ExpenseNotFoundError(MonthliesError, LookupError):
    """No expense exists with the requested id."""

    def __init__(self, expense_id: int) -> None:
        super().__init__("Expense not found")
        self.expense_id = expense_id


class ExpenseConsistencyError(MonthliesError):
    """A row that was just written could not be read back."""
