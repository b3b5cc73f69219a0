"""Helpers shared by the CLI commands."""

import sys
import tomllib
from datetime import datetime, timezone

from rich.console import Console

from monthlies.config import Settings, load_settings
from monthlies.dates import current_month, parse_month, previous_month, to_month
from monthlies.domain.models import Month

console = Console()


def settings_or_exit() -> Settings:
    """Load settings, exiting with an error message if the config is broken."""
    try:
        return load_settings()
    except (tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Invalid config: {e}[/red]", style="bold")
        sys.exit(1)


def month_or_exit(month: str | None) -> Month | None:
    """Resolve a --month value: YYYY-MM, or the keywords "current" and "previous"."""
    if month is None:
        return None
    keyword = month.strip().lower()
    # created_at is stamped in UTC
    today = datetime.now(timezone.utc).date()
    if keyword == "current":
        return to_month(*current_month(today))
    if keyword == "previous":
        return to_month(*previous_month(*current_month(today)))
    try:
        return parse_month(month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}'. Use YYYY-MM, current or previous.[/red]")
        sys.exit(1)


def format_amount(amount: float) -> str:
    return f"${amount:,.2f}"
