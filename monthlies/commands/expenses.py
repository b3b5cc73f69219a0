"""Expense management commands (add, edit, delete, total)."""

import sqlite3
import sys

from rich.console import Console

from monthlies.commands.common import format_amount, month_or_exit, settings_or_exit
from monthlies.domain.expenses import Expense, ExpenseInput, ExpensePatch, capital_needed
from monthlies.domain.models import Amount, CategoryName, Description, ExpenseId
from monthlies.errors import ExpenseNotFoundError, ExpenseValidationError
from monthlies.store.repository import ExpenseRepository

console = Console()


def _print_expense(expense: Expense) -> None:
    console.print(f"  ID: {expense.id}")
    console.print(f"  Amount: {format_amount(expense.amount)}")
    console.print(f"  Description: {expense.description}")
    console.print(f"  Category: {expense.category}")
    console.print(f"  [dim]Updated: {expense.updated_at}[/dim]")


def add_command(amount: float, description: str, category: str) -> None:
    """Add a recurring monthly expense.

    Args:
        amount: Monthly cost, must be positive.
        description: Expense description.
        category: Category label (free text).
    """
    settings = settings_or_exit()
    payload = ExpenseInput(Amount(amount), Description(description), CategoryName(category))

    try:
        with ExpenseRepository.open(settings.database) as repository:
            expense = repository.create(payload)
    except ExpenseValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Expense added:")
    _print_expense(expense)


def edit_command(
    expense_id: int,
    amount: float | None = None,
    description: str | None = None,
    category: str | None = None,
) -> None:
    """Change some fields of an expense. Omitted fields keep their value.

    Args:
        expense_id: Expense ID (from 'monthlies list').
        amount: New monthly cost.
        description: New description.
        category: New category.
    """
    settings = settings_or_exit()
    patch = ExpensePatch(amount=amount, description=description, category=category)

    try:
        with ExpenseRepository.open(settings.database) as repository:
            expense = repository.update(ExpenseId(expense_id), patch)
    except ExpenseNotFoundError:
        console.print(f"[red]Expense {expense_id} not found[/red]")
        sys.exit(1)
    except ExpenseValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if patch.is_empty():
        console.print("[yellow]Nothing to change[/yellow]")
    else:
        console.print(f"[green]✓[/green] Updated expense {expense_id}:")
    _print_expense(expense)


def delete_command(expense_id: int) -> None:
    """Delete an expense."""
    settings = settings_or_exit()

    try:
        with ExpenseRepository.open(settings.database) as repository:
            deleted = repository.delete(ExpenseId(expense_id))
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not deleted:
        console.print(f"[red]Expense {expense_id} not found[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted expense {expense_id}")


def total_command(month: str | None = None) -> None:
    """Print the monthly total and the capital needed to cover it."""
    settings = settings_or_exit()
    selected = month_or_exit(month)

    try:
        with ExpenseRepository.open(settings.database) as repository:
            total = repository.sum_amounts(selected)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"Monthly total: {format_amount(total)}")
    console.print(f"Capital needed: {format_amount(capital_needed(total, settings.capital_ratio))}")
