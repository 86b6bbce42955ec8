"""
Utility modules for FinTrack.

This package contains reusable utility functions for date handling,
rate conversions and rounding, and error handling throughout the application.
"""

from fintrack.utils.date_utils import (
    parse_date,
    add_months,
    fractional_months_between,
)

from fintrack.utils.rate_utils import (
    annual_pct_to_decimal,
    annual_pct_to_monthly_decimal,
    annual_pct_to_effective_monthly_decimal,
    normalize_rate_input,
    round_currency,
    round_percentage,
    MONTHS_PER_YEAR,
    PERCENTAGE_TO_DECIMAL,
)

from fintrack.utils.error_utils import (
    FinanceTrackerError,
    InvalidInputError,
    ArithmeticDegenerateError,
    error_handler,
    logger,
)

__all__ = [
    # Date utilities
    "parse_date",
    "add_months",
    "fractional_months_between",
    # Rate utilities
    "annual_pct_to_decimal",
    "annual_pct_to_monthly_decimal",
    "annual_pct_to_effective_monthly_decimal",
    "normalize_rate_input",
    "round_currency",
    "round_percentage",
    "MONTHS_PER_YEAR",
    "PERCENTAGE_TO_DECIMAL",
    # Error handling
    "FinanceTrackerError",
    "InvalidInputError",
    "ArithmeticDegenerateError",
    "error_handler",
    "logger",
]
