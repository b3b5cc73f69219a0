"""Tests for monthlies.dates pure functions."""

from datetime import date

import pytest

from monthlies.dates import (
    current_month,
    format_month,
    month_range,
    next_month,
    parse_month,
    previous_month,
    to_month,
)
from monthlies.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(Month("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(Month("2025-12"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, _ = month_range(Month("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))


class TestParseMonth:
    """Tests for parse_month."""

    def test_accepts_canonical_month(self) -> None:
        assert parse_month("2024-06") == "2024-06"

    def test_pads_single_digit_month(self) -> None:
        """Should normalize to two-digit months."""
        assert parse_month("2024-6") == "2024-06"

    def test_strips_whitespace(self) -> None:
        assert parse_month(" 2024-06 ") == "2024-06"

    @pytest.mark.parametrize("text", ["", "2024", "June 2024", "2024-00", "2024-13", "2024-06-01"])
    def test_rejects_invalid_text(self, text: str) -> None:
        """Should raise ValueError for anything that isn't YYYY-MM."""
        with pytest.raises(ValueError):
            parse_month(text)


class TestFormatMonth:
    """Tests for format_month."""

    def test_formats_month_names(self) -> None:
        assert format_month(2024, 1) == "January 2024"
        assert format_month(2024, 6) == "June 2024"
        assert format_month(2024, 12) == "December 2024"

    def test_handles_different_years(self) -> None:
        assert format_month(2023, 3) == "March 2023"
        assert format_month(2025, 7) == "July 2025"


class TestCurrentMonth:
    """Tests for current_month."""

    def test_uses_given_date(self) -> None:
        assert current_month(date(2024, 1, 15)) == (2024, 1)

    def test_december(self) -> None:
        assert current_month(date(2024, 12, 25)) == (2024, 12)

    def test_defaults_to_today(self) -> None:
        today = date.today()
        assert current_month() == (today.year, today.month)


class TestMonthNavigation:
    """Tests for previous_month and next_month."""

    def test_previous_within_year(self) -> None:
        assert previous_month(2024, 6) == (2024, 5)
        assert previous_month(2024, 12) == (2024, 11)

    def test_previous_crosses_year_boundary(self) -> None:
        assert previous_month(2024, 1) == (2023, 12)
        assert previous_month(2020, 1) == (2019, 12)

    def test_next_within_year(self) -> None:
        assert next_month(2024, 1) == (2024, 2)
        assert next_month(2024, 6) == (2024, 7)

    def test_next_crosses_year_boundary(self) -> None:
        assert next_month(2024, 12) == (2025, 1)
        assert next_month(2020, 12) == (2021, 1)

    def test_to_month_zero_pads(self) -> None:
        """Should produce a YYYY-MM string usable as a filter."""
        assert to_month(*next_month(2024, 9)) == "2024-10"
        assert to_month(2024, 3) == "2024-03"
