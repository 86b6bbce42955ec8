"""
Test suite for rate utilities in FinTrack.
"""

import sys
import os
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from fintrack.utils.rate_utils import (
    annual_pct_to_decimal,
    annual_pct_to_monthly_decimal,
    annual_pct_to_effective_monthly_decimal,
    normalize_rate_input,
    round_currency,
    round_percentage,
)
from fintrack.utils.error_utils import InvalidInputError


def test_annual_pct_to_decimal():
    """Test percentage to decimal conversion."""
    assert annual_pct_to_decimal(5.0) == 0.05
    assert annual_pct_to_decimal("7.5") == 0.075
    assert annual_pct_to_decimal(0) == 0.0
    assert annual_pct_to_decimal(100) == 1.0


def test_annual_pct_to_monthly_decimal():
    """Nominal monthly rate used by loans."""
    assert round(annual_pct_to_monthly_decimal(6.0), 6) == 0.005
    assert round(annual_pct_to_monthly_decimal(10.0), 6) == 0.008333
    assert annual_pct_to_monthly_decimal(0) == 0.0


def test_annual_pct_to_effective_monthly_decimal():
    """Effective monthly rate compounds back to the annual rate."""
    monthly = annual_pct_to_effective_monthly_decimal(12.0)
    assert round(monthly, 6) == 0.009489
    assert (1 + monthly) ** 12 == pytest.approx(1.12)
    assert annual_pct_to_effective_monthly_decimal(0) == 0.0


def test_normalize_rate_input():
    """Test rate input normalization."""
    assert normalize_rate_input(5.5) == 5.5
    assert normalize_rate_input("5.5") == 5.5
    assert normalize_rate_input("5.5%") == 5.5
    assert normalize_rate_input(" 7.25% ") == 7.25
    assert normalize_rate_input(0) == 0.0


def test_normalize_rate_input_range():
    """Rates outside the allowed range are rejected."""
    with pytest.raises(InvalidInputError):
        normalize_rate_input(-1)
    with pytest.raises(InvalidInputError):
        normalize_rate_input(101)
    assert normalize_rate_input(-3, min_pct=-100.0) == -3.0


def test_normalize_rate_input_invalid():
    """Test invalid rate input."""
    with pytest.raises(InvalidInputError):
        normalize_rate_input("invalid")
    with pytest.raises(InvalidInputError):
        normalize_rate_input(None)
    with pytest.raises(InvalidInputError):
        normalize_rate_input(float("nan"))


def test_round_currency():
    assert round_currency(8791.588723) == 8791.59
    assert round_currency(833.3333333) == 833.33
    assert round_currency(0) == 0.0


def test_round_percentage():
    assert round_percentage(33.33333) == 33.33
    assert round_percentage(100) == 100.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
