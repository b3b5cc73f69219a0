"""Pure functions and records for expenses.

This module contains the functional core for expense handling:
- No I/O operations (no database, no console, no files)
- Validation of create payloads and sparse patches
- Aggregation of amounts

Amounts are plain floats. Categories are free text: DEFAULT_CATEGORIES is a
list of suggestions and is never enforced.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from monthlies.domain.models import Amount, CategoryName, Description, ExpenseId
from monthlies.errors import ExpenseValidationError

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(name)
    for name in (
        "Groceries",
        "Dining Out",
        "Transportation",
        "Gas",
        "Public Transit",
        "Entertainment",
        "Movies",
        "Streaming Services",
        "Shopping",
        "Clothing",
        "Utilities",
        "Rent/Mortgage",
        "Insurance",
        "Medical/Healthcare",
        "Fitness/Gym",
        "Education",
        "Personal Care",
        "Bills",
        "Other",
    )
)

AMOUNT_ERROR = "Amount must be a positive number"

# 12 months * 25 (4% withdrawal rate)
DEFAULT_CAPITAL_RATIO = 300.0


@dataclass(frozen=True)
class Expense:
    """Immutable persisted expense."""

    id: ExpenseId
    amount: Amount
    description: Description
    category: CategoryName
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        """Build an expense from a database row."""
        return cls(
            id=ExpenseId(row["id"]),
            amount=Amount(row["amount"]),
            description=Description(row["description"]),
            category=CategoryName(row["category"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExpenseInput:
    """Payload for creating an expense."""

    amount: Amount
    description: Description
    category: CategoryName


@dataclass(frozen=True)
class ExpensePatch:
    """Sparse patch for an expense.

    Each field is independently present or absent; ``None`` means absent.
    Fields are applied in the order given by FIELDS.
    """

    FIELDS: ClassVar[tuple[str, ...]] = ("amount", "description", "category")

    amount: Amount | None = None
    description: Description | None = None
    category: CategoryName | None = None

    def changes(self) -> list[tuple[str, Any]]:
        """Return (column, value) pairs for present fields, in FIELDS order."""
        return [(name, getattr(self, name)) for name in self.FIELDS if getattr(self, name) is not None]

    def is_empty(self) -> bool:
        return not self.changes()


def parse_amount(value: Any) -> Amount:
    """Check an amount and convert it to the float that gets stored.

    Args:
        value: Candidate amount.

    Returns:
        The amount as a float.

    Raises:
        ExpenseValidationError: If value is not a positive finite number.
    """
    # bool is an int subclass; JSON true must not pass as 1
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExpenseValidationError(AMOUNT_ERROR)
    try:
        amount = float(value)
    except OverflowError:
        raise ExpenseValidationError(AMOUNT_ERROR) from None
    if not math.isfinite(amount) or amount <= 0:
        raise ExpenseValidationError(AMOUNT_ERROR)
    return Amount(amount)


def parse_text(label: str, value: Any) -> str:
    """Check a required text field and strip surrounding whitespace.

    Raises:
        ExpenseValidationError: If value is not a string or is blank.
    """
    if not isinstance(value, str) or not value.strip():
        raise ExpenseValidationError(f"{label} must be a non-empty string")
    return value.strip()


def validate_input(payload: ExpenseInput) -> ExpenseInput:
    """Validate a create payload.

    Args:
        payload: Expense to be created.

    Returns:
        The payload with a float amount and stripped text.

    Raises:
        ExpenseValidationError: If amount is not a positive number or a text field is empty.
    """
    return ExpenseInput(
        amount=parse_amount(payload.amount),
        description=Description(parse_text("Description", payload.description)),
        category=CategoryName(parse_text("Category", payload.category)),
    )


def validate_patch(patch: ExpensePatch) -> ExpensePatch:
    """Validate the fields present in a patch. An empty patch is valid.

    Returns:
        The patch with present fields normalized as in validate_input.

    Raises:
        ExpenseValidationError: If a present field is invalid.
    """
    amount = description = category = None
    if patch.amount is not None:
        amount = parse_amount(patch.amount)
    if patch.description is not None:
        description = Description(parse_text("Description", patch.description))
    if patch.category is not None:
        category = CategoryName(parse_text("Category", patch.category))
    return ExpensePatch(amount=amount, description=description, category=category)


def sum_amounts(expenses: Iterable[Expense]) -> float:
    """Sum expense amounts with ordinary float addition, seeded at 0.

    Args:
        expenses: Expenses to total.

    Returns:
        The total, 0 for no expenses.
    """
    total = 0.0
    for expense in expenses:
        total += expense.amount
    return total


def capital_needed(monthly_total: float, ratio: float = DEFAULT_CAPITAL_RATIO) -> float:
    """Capital required to fund a monthly cost indefinitely.

    The default ratio of 300 is twelve months at a 4% withdrawal rate.

    Args:
        monthly_total: Recurring monthly cost.
        ratio: Multiplier applied to the monthly cost.

    Returns:
        The capital figure.
    """
    return monthly_total * ratio
