"""Date utilities for monthlies.

Pure functions for month arithmetic, range calculations and formatting.
"""

from datetime import date, datetime

from monthlies.domain.models import Month


def parse_month(text: str) -> Month:
    """Validate a YYYY-MM string.

    Args:
        text: Candidate month string.

    Returns:
        The month in canonical YYYY-MM form.

    Raises:
        ValueError: If text is not a valid YYYY-MM month.
    """
    dt = datetime.strptime(text.strip(), "%Y-%m")
    return Month(dt.strftime("%Y-%m"))


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    following = next_month(dt.year, dt.month)
    since = f"{to_month(dt.year, dt.month)}-01"
    until = f"{to_month(*following)}-01"
    return since, until, format_month(dt.year, dt.month)


def format_month(year: int, month: int) -> str:
    """Format a year and month number as e.g. "January 2024"."""
    return date(year, month, 1).strftime("%B %Y")


def current_month(today: date | None = None) -> tuple[int, int]:
    """Return (year, month) for today, or for the given date."""
    today = today or date.today()
    return today.year, today.month


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def to_month(year: int, month: int) -> Month:
    """Combine a year and month number into YYYY-MM."""
    return Month(f"{year:04d}-{month:02d}")
