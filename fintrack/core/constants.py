"""
Core constants and enumerations for FinTrack.

This module defines the constant values and enumerations shared by the
amortization and retirement projection engines.
"""

from enum import Enum

# Projection constants
FIRE_MULTIPLE = 25  # 4% safe withdrawal rate
DEFAULT_ANNUAL_RETURN_PCT = 10.0
DEFAULT_ANNUAL_INFLATION_PCT = 6.0

# Loan affordability constants
DEFAULT_DEBT_TO_INCOME_RATIO = 0.4
AFFORDABILITY_REFERENCE_RATE_PCT = 10.0
AFFORDABILITY_REFERENCE_TENURE_MONTHS = 240
AFFORDABILITY_COMFORT_EMI = 5000

# Longest tenure accepted over HTTP (100 years)
MAX_TENURE_MONTHS = 1200

# Gold valuation per gram
GOLD_RATE_PER_GRAM = 9380


class PrepaymentMode(Enum):
    """
    How a lump-sum prepayment is applied to the remaining schedule.

    REDUCE_TENURE keeps the installment and shortens the loan;
    REDUCE_PAYMENT keeps the tenure and lowers the installment.
    """
    REDUCE_TENURE = "reduce_tenure"
    REDUCE_PAYMENT = "reduce_payment"

    @classmethod
    def from_value(cls, value) -> 'PrepaymentMode':
        """Accept an enum member, its value, or a legacy alias."""
        if isinstance(value, cls):
            return value
        aliases = {
            "reduce_emi": cls.REDUCE_PAYMENT,
            "emi_reduction": cls.REDUCE_PAYMENT,
            "tenure_reduction": cls.REDUCE_TENURE,
        }
        if value in aliases:
            return aliases[value]
        return cls(value)


class EmiStatus(Enum):
    """Payment status of a scheduled installment."""
    PENDING = "pending"
    PAID = "paid"


class ETransactionType:
    """Transaction types considered when deriving monthly cash flow"""
    INCOME = "income"
    EXPENSE = "expense"
