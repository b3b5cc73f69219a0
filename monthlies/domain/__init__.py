"""Domain models and types for monthlies.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from monthlies.domain.expenses import (
    DEFAULT_CAPITAL_RATIO,
    DEFAULT_CATEGORIES,
    Expense,
    ExpenseInput,
    ExpensePatch,
    capital_needed,
    sum_amounts,
    validate_input,
    validate_patch,
)
from monthlies.domain.models import Amount, CategoryName, Description, ExpenseId, Month

__all__ = [
    "Amount",
    "CategoryName",
    "Description",
    "ExpenseId",
    "Month",
    "DEFAULT_CAPITAL_RATIO",
    "DEFAULT_CATEGORIES",
    "Expense",
    "ExpenseInput",
    "ExpensePatch",
    "capital_needed",
    "sum_amounts",
    "validate_input",
    "validate_patch",
]
