"""
Date utilities for FinTrack.

Parses the date formats accepted from callers and provides the month
arithmetic used for EMI due dates. Nothing here reads the clock: every
"current date" is supplied by the caller.
"""

import calendar
from datetime import datetime, date
from typing import Union

import pandas as pd
from dateutil.relativedelta import relativedelta

from fintrack.utils.error_utils import error_handler, InvalidInputError


DateLike = Union[str, datetime, date, pd.Timestamp]


@error_handler
def parse_date(date_input: DateLike, normalize_to_month_start: bool = False) -> date:
    """
    Universal date parser.

    Args:
        date_input: Date in various formats (str, datetime, date, pd.Timestamp)
        normalize_to_month_start: If True, sets day to 1

    Returns:
        date: Parsed calendar date

    Raises:
        InvalidInputError: If the input is empty or cannot be parsed

    Examples:
        >>> parse_date("2024-01-15")
        datetime.date(2024, 1, 15)
        >>> parse_date("15/01/2024", normalize_to_month_start=True)
        datetime.date(2024, 1, 1)
    """
    if date_input is None:
        raise InvalidInputError("Date input cannot be None")

    if isinstance(date_input, pd.Timestamp):
        result = date_input.date()
    elif isinstance(date_input, datetime):
        result = date_input.date()
    elif isinstance(date_input, date):
        result = date_input
    elif isinstance(date_input, str):
        result = _parse_date_string(date_input.strip())
    else:
        raise InvalidInputError(f"Unsupported date input type: {type(date_input)}")

    if normalize_to_month_start:
        result = result.replace(day=1)

    return result


def _parse_date_string(date_str: str) -> date:
    """Parse ISO (YYYY-MM-DD) first, then day-first (DD/MM/YYYY)."""
    if not date_str:
        raise InvalidInputError("Date string cannot be empty")

    format_patterns = [
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%d/%m/%Y",
        "%d-%m-%Y",
    ]

    for format_str in format_patterns:
        try:
            return datetime.strptime(date_str, format_str).date()
        except ValueError:
            continue

    # ISO timestamps with a time component
    try:
        return pd.Timestamp(date_str).date()
    except (ValueError, TypeError):
        pass

    raise InvalidInputError(
        f"Unable to parse date string '{date_str}'. Supported formats include: YYYY-MM-DD, DD/MM/YYYY"
    )


def add_months(start: date, months: int) -> date:
    """
    Add calendar months, clamping to the end of shorter months.

    Examples:
        >>> add_months(date(2024, 1, 31), 1)
        datetime.date(2024, 2, 29)
    """
    return start + relativedelta(months=months)


def fractional_months_between(start: date, end: date) -> float:
    """
    Months elapsed from start to end, with partial months measured in days
    of the end date's month. Negative when end precedes start.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    day_diff = end.day - start.day

    if day_diff < 0:
        months -= 1
    elif day_diff > 0:
        days_in_month = calendar.monthrange(end.year, end.month)[1]
        months += day_diff / days_in_month

    return float(months)
