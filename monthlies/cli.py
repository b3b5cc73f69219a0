"""CLI entry point for monthlies."""

import typer

from monthlies.commands.admin import init_command, list_command
from monthlies.commands.common import settings_or_exit
from monthlies.commands.expenses import add_command, delete_command, edit_command, total_command
from monthlies.commands.serve import serve_command
from monthlies.domain.expenses import DEFAULT_CATEGORIES
from monthlies.log import setup_logging

app = typer.Typer(
    name="monthlies",
    help="Track recurring monthly expenses and the capital needed to cover them",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track recurring monthly expenses and the capital needed to cover them."""
    setup_logging("DEBUG" if verbose else settings_or_exit().log_level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and re-run schema setup"),
) -> None:
    """Initialize the expense database and configuration."""
    init_command(force)


@app.command(name="list")
def list_expenses(
    month: str = typer.Option(None, "--month", help="Only expenses created in this month (YYYY-MM, current or previous)"),
) -> None:
    """List your expenses, newest first."""
    list_command(month)


@app.command()
def add(
    amount: float = typer.Argument(..., help="Monthly cost"),
    description: str = typer.Argument(..., help="What the expense is for"),
    category: str = typer.Option(
        ..., "--category", "-c", help=f"Category, e.g. {', '.join(DEFAULT_CATEGORIES[:4])}"
    ),
) -> None:
    """Add a recurring monthly expense."""
    add_command(amount, description, category)


@app.command()
def edit(
    expense_id: int = typer.Argument(..., help="Expense ID (from 'monthlies list')"),
    amount: float = typer.Option(None, "--amount", "-a", help="New monthly cost"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
) -> None:
    """Change fields of an expense; omitted fields are left alone."""
    edit_command(expense_id, amount, description, category)


@app.command()
def delete(
    expense_id: int = typer.Argument(..., help="Expense ID (from 'monthlies list')"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id)


@app.command()
def total(
    month: str = typer.Option(None, "--month", help="Only expenses created in this month (YYYY-MM, current or previous)"),
) -> None:
    """Show the monthly total and the capital needed."""
    total_command(month)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
) -> None:
    """Serve the expense API over HTTP."""
    serve_command(host, port)


if __name__ == "__main__":
    app()
