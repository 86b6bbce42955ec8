"""
Portfolio snapshot helpers for the FIRE simulator.

Derive the simulator's inputs (current portfolio value, average monthly
income and expenses) from raw holdings and transactions supplied by the
caller.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from fintrack.core.constants import ETransactionType, GOLD_RATE_PER_GRAM
from fintrack.utils.date_utils import add_months, parse_date, DateLike
from fintrack.utils.error_utils import error_handler, InvalidInputError


def _total(records: Optional[Iterable[Mapping[str, Any]]], field: str) -> float:
    df = pd.DataFrame(list(records or []))
    if df.empty or field not in df:
        return 0.0
    return float(pd.to_numeric(df[field], errors="coerce").fillna(0).sum())


def _mutual_fund_value(mutual_funds: Optional[Iterable[Mapping[str, Any]]]) -> float:
    df = pd.DataFrame(list(mutual_funds or []))
    if df.empty:
        return 0.0
    for column in ("current_nav", "units", "total_invested"):
        if column not in df:
            df[column] = 0.0
        df[column] = pd.to_numeric(df[column], errors="coerce").fillna(0)

    # Market value when NAV and units are known, otherwise the amount invested
    has_market_value = (df["current_nav"] > 0) & (df["units"] > 0)
    value = np.where(has_market_value, df["current_nav"] * df["units"], df["total_invested"])
    return float(value.sum())


@error_handler
def current_portfolio_value(
    accounts: Optional[Iterable[Mapping[str, Any]]] = None,
    fixed_deposits: Optional[Iterable[Mapping[str, Any]]] = None,
    mutual_funds: Optional[Iterable[Mapping[str, Any]]] = None,
    gold: Optional[Iterable[Mapping[str, Any]]] = None,
    gold_rate_per_gram: float = GOLD_RATE_PER_GRAM,
) -> float:
    """
    Sum the value of every holding.

    Args:
        accounts: Records with a `balance`
        fixed_deposits: Records with an `amount`
        mutual_funds: Records with `current_nav`, `units`, `total_invested`
        gold: Records with `grams`
        gold_rate_per_gram: Valuation rate for gold holdings

    Returns:
        Total portfolio value
    """
    if gold_rate_per_gram < 0:
        raise InvalidInputError(f"gold_rate_per_gram must not be negative, got {gold_rate_per_gram}")

    return (
        _total(accounts, "balance")
        + _total(fixed_deposits, "amount")
        + _mutual_fund_value(mutual_funds)
        + _total(gold, "grams") * gold_rate_per_gram
    )


@error_handler
def monthly_cash_flow(
    transactions: Optional[Iterable[Mapping[str, Any]]], as_of: DateLike, months: int = 12
) -> Dict[str, float]:
    """
    Average monthly income and expenses over the trailing window.

    Transactions dated from `as_of - months` through `as_of` count; totals are divided
    by `months` regardless of how many months actually hold transactions.

    Args:
        transactions: Records with `date`, `amount` and `type` ("income" / "expense")
        as_of: End of the window
        months: Window length in months

    Returns:
        Dict with monthly_income and monthly_expenses
    """
    if months <= 0:
        raise InvalidInputError(f"months must be positive, got {months}")

    df = pd.DataFrame(list(transactions or []))
    if df.empty:
        return {"monthly_income": 0.0, "monthly_expenses": 0.0}

    missing = {"date", "amount", "type"} - set(df.columns)
    if missing:
        raise InvalidInputError(f"Transactions missing fields: {sorted(missing)}")

    as_of = parse_date(as_of)
    since = pd.Timestamp(add_months(as_of, -months))
    until = pd.Timestamp(as_of) + pd.Timedelta(days=1)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0)
    window = df[(df["date"] >= since) & (df["date"] < until)]

    totals = window.groupby("type")["amount"].sum()
    income = float(totals.get(ETransactionType.INCOME, 0.0))
    expenses = float(totals.get(ETransactionType.EXPENSE, 0.0))

    return {"monthly_income": income / months, "monthly_expenses": expenses / months}
