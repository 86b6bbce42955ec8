"""
Test suite for date utilities in FinTrack.
"""

import sys
import os
import pytest
from datetime import datetime, date
import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from fintrack.utils.date_utils import parse_date, add_months, fractional_months_between
from fintrack.utils.error_utils import InvalidInputError


def test_parse_date_iso_format():
    """Test parsing ISO format dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_date_day_first_format():
    """Test parsing day-first format dates."""
    assert parse_date("15/01/2024") == date(2024, 1, 15)
    assert parse_date("15-01-2024") == date(2024, 1, 15)


def test_parse_date_normalize_to_month_start():
    assert parse_date("2024-01-15", normalize_to_month_start=True) == date(2024, 1, 1)


def test_parse_date_datetime_object():
    """Test parsing datetime objects."""
    assert parse_date(datetime(2024, 1, 15, 10, 30)) == date(2024, 1, 15)


def test_parse_date_timestamp():
    """Test parsing pandas Timestamp."""
    assert parse_date(pd.Timestamp("2024-01-15")) == date(2024, 1, 15)


def test_parse_date_iso_timestamp_string():
    assert parse_date("2024-01-15T10:30:00") == date(2024, 1, 15)


def test_parse_date_invalid():
    """Test invalid date inputs."""
    with pytest.raises(InvalidInputError):
        parse_date(None)
    with pytest.raises(InvalidInputError):
        parse_date("")
    with pytest.raises(InvalidInputError):
        parse_date("not a date")
    with pytest.raises(InvalidInputError):
        parse_date(20240115)


def test_add_months():
    assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)
    assert add_months(date(2024, 1, 15), 12) == date(2025, 1, 15)
    assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)
    assert add_months(date(2024, 3, 15), -3) == date(2023, 12, 15)


def test_fractional_months_between():
    assert fractional_months_between(date(2024, 1, 1), date(2024, 7, 1)) == 6.0
    assert fractional_months_between(date(2024, 1, 15), date(2024, 3, 10)) == 1.0
    assert fractional_months_between(date(2024, 1, 1), date(2024, 2, 15)) == pytest.approx(1 + 14 / 29)


def test_fractional_months_between_negative():
    assert fractional_months_between(date(2024, 6, 1), date(2024, 1, 1)) == -5.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
