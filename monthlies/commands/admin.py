"""Admin commands for init and listing expenses."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from monthlies.commands.common import format_amount, month_or_exit, settings_or_exit
from monthlies.config import create_default_config, get_config_path
from monthlies.dates import month_range
from monthlies.domain.expenses import capital_needed, sum_amounts
from monthlies.store.repository import ExpenseRepository
from monthlies.store.schema import init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize database and write a config pointing at it."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path, database=db_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize monthlies database and configuration."""
    settings = settings_or_exit()
    db_path = settings.database
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'monthlies init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(month: str | None = None) -> None:
    """List expenses, newest first, with the monthly total."""
    settings = settings_or_exit()
    selected = month_or_exit(month)

    try:
        with ExpenseRepository.open(settings.database) as repository:
            expenses = repository.list_all(selected)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    title = f"Expenses ({len(expenses)})"
    if selected:
        title += f" - {month_range(selected)[2]}"

    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right", style="green")
    table.add_column("Capital", justify="right", style="blue")
    table.add_column("Created", style="cyan")

    for expense in expenses:
        table.add_row(
            str(expense.id),
            expense.description,
            expense.category,
            format_amount(expense.amount),
            format_amount(capital_needed(expense.amount, settings.capital_ratio)),
            expense.created_at,
        )

    console.print(table)

    total = sum_amounts(expenses)
    console.print(f"\n[bold]Monthly total:[/bold] {format_amount(total)}")
    console.print(f"[bold blue]Capital needed:[/bold blue] {format_amount(capital_needed(total, settings.capital_ratio))}")
