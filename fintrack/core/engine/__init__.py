"""
FinTrack Core Engine Package.

Pure, deterministic calculation engines. Nothing here performs I/O or reads
the clock; any "current date" is an argument.

Modules:
    amortization: EMI schedules, outstanding principal, prepayment simulation
    emi_calendar: Due dates and payment-status reconciliation
    retirement: FIRE retirement projection
    portfolio: FIRE inputs derived from holdings and transactions
"""

from fintrack.core.engine.amortization import (
    calculate_emi,
    generate_emi_schedule,
    calculate_outstanding_principal,
    calculate_tenure_for_emi,
    simulate_prepayment,
    calculate_total_outstanding,
    calculate_pending_amounts,
    calculate_principal_for_emi,
    calculate_loan_affordability,
    prepayment_recommendation,
)
from fintrack.core.engine.emi_calendar import (
    build_emi_calendar,
    reconcile_emi_status,
    calculate_emi_end_date,
    calculate_next_emi_due,
    calculate_time_based_completion,
)
from fintrack.core.engine.retirement import project, PortfolioSeries
from fintrack.core.engine.portfolio import current_portfolio_value, monthly_cash_flow

__all__ = [
    # Amortization
    "calculate_emi",
    "generate_emi_schedule",
    "calculate_outstanding_principal",
    "calculate_tenure_for_emi",
    "simulate_prepayment",
    "calculate_total_outstanding",
    "calculate_pending_amounts",
    "calculate_principal_for_emi",
    "calculate_loan_affordability",
    "prepayment_recommendation",
    # EMI calendar
    "build_emi_calendar",
    "reconcile_emi_status",
    "calculate_emi_end_date",
    "calculate_next_emi_due",
    "calculate_time_based_completion",
    # Retirement
    "project",
    "PortfolioSeries",
    # Portfolio snapshot
    "current_portfolio_value",
    "monthly_cash_flow",
]
