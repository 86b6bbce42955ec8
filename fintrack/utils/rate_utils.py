"""
Rate conversion and rounding utilities for financial calculations.

Conventions:
- All user inputs are annual rates as percentages (e.g., 10.0 = 10%)
- All calculations use decimal rates (e.g., 0.10 = 10%)
- Loan monthly rates are nominal: annual_decimal / 12
- Investment monthly rates are effective: (1 + annual_decimal) ** (1/12) - 1
- Engines never round; currency and percentage outputs are rounded once,
  at the presentation boundary, with round_currency / round_percentage
"""

from typing import Union
from fintrack.utils.error_utils import error_handler, InvalidInputError


MONTHS_PER_YEAR = 12
PERCENTAGE_TO_DECIMAL = 100.0
CURRENCY_DECIMALS = 2
PERCENTAGE_DECIMALS = 2


@error_handler
def annual_pct_to_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert annual percentage rate to decimal format.

    Examples:
        >>> annual_pct_to_decimal(5.0)
        0.05
        >>> annual_pct_to_decimal("7.5")
        0.075
    """
    return float(rate_pct) / PERCENTAGE_TO_DECIMAL


@error_handler
def annual_pct_to_monthly_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert a nominal annual percentage rate to the monthly decimal rate
    used in loan amortization.

    Examples:
        >>> round(annual_pct_to_monthly_decimal(6.0), 6)
        0.005
        >>> round(annual_pct_to_monthly_decimal(10.0), 6)
        0.008333
    """
    return annual_pct_to_decimal(rate_pct) / MONTHS_PER_YEAR


@error_handler
def annual_pct_to_effective_monthly_decimal(rate_pct: Union[float, str]) -> float:
    """
    Convert an annual percentage rate to the equivalent monthly compounding
    rate, so that twelve months of compounding reproduce the annual rate.

    Examples:
        >>> round(annual_pct_to_effective_monthly_decimal(12.0), 6)
        0.009489
    """
    return (1 + annual_pct_to_decimal(rate_pct)) ** (1 / MONTHS_PER_YEAR) - 1


@error_handler
def normalize_rate_input(rate_input: Union[str, float, int], min_pct: float = 0.0, max_pct: float = 100.0) -> float:
    """
    Normalize rate input from various formats to a standard float percentage.

    Handles string inputs, removes percentage signs, and validates ranges.

    Raises:
        InvalidInputError: If rate cannot be converted or is out of range

    Examples:
        >>> normalize_rate_input("5.5%")
        5.5
        >>> normalize_rate_input(7.25)
        7.25
    """
    if isinstance(rate_input, str):
        cleaned = rate_input.strip().rstrip('%')
        try:
            rate_float = float(cleaned)
        except ValueError:
            raise InvalidInputError(f"Cannot convert rate input '{rate_input}' to number")
    else:
        try:
            rate_float = float(rate_input)
        except (TypeError, ValueError):
            raise InvalidInputError(f"Cannot convert rate input '{rate_input}' to number")

    if rate_float != rate_float:
        raise InvalidInputError("Rate must be a number, got NaN")

    if not min_pct <= rate_float <= max_pct:
        raise InvalidInputError(f"Rate {rate_float}% is outside valid range ({min_pct}% to {max_pct}%)")

    return rate_float


def round_currency(amount: float) -> float:
    """Round a currency amount for display (2 decimal places)."""
    return round(float(amount), CURRENCY_DECIMALS)


def round_percentage(pct: float) -> float:
    """Round a percentage for display (2 decimal places)."""
    return round(float(pct), PERCENTAGE_DECIMALS)
