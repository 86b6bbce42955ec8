"""
FinTrack - Personal Finance Calculation Engines

Loan amortization and FIRE retirement projections:
- EMI schedules and outstanding principal
- Prepayment simulation (reduce tenure / reduce payment)
- EMI calendar with payment-status reconciliation
- Financial-independence projections
"""

__version__ = "1.0.0"
