"""
Loan value objects for FinTrack.

These objects carry the inputs and outputs of the amortization engine. None
of them is persisted or shared between calls: they are built from request
input, computed, and returned.

Classes:
    LoanTerms: Validated principal / rate / tenure triple
    EmiScheduleEntry: One month of an amortization schedule
    EmiSchedule: Complete schedule with totals
    PrepaymentResult: Outcome of a simulated prepayment
    ScheduledEmi: Schedule entry placed on the calendar with a payment status
"""

import math
from datetime import date
from typing import Dict, Any, Optional, List, Iterator

import pandas as pd

from fintrack.core.constants import EmiStatus, PrepaymentMode
from fintrack.utils.error_utils import InvalidInputError, ArithmeticDegenerateError
from fintrack.utils.rate_utils import normalize_rate_input, annual_pct_to_monthly_decimal


def validate_positive_amount(value, field: str) -> float:
    """Coerce to float and require a finite, strictly positive amount."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInputError(f"{field} must be positive, got {value!r}")
    return amount


def validate_tenure(value, field: str = "tenure_months") -> int:
    """Require a whole number of months; zero is degenerate, negative is invalid."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be an integer, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be an integer, got {value!r}")
    if not math.isfinite(as_float) or as_float != int(as_float):
        raise InvalidInputError(f"{field} must be a whole number of months, got {value!r}")
    months = int(as_float)
    if months == 0:
        raise ArithmeticDegenerateError(f"{field} is zero: cannot amortize over zero periods")
    if months < 0:
        raise InvalidInputError(f"{field} must be positive, got {value!r}")
    return months


class LoanTerms:
    """
    Immutable loan input.

    Attributes:
        principal: Amount borrowed (positive)
        interest_rate_annual_pct: Nominal annual rate as percentage (0 allowed)
        tenure_months: Number of monthly installments
    """

    __slots__ = ("principal", "interest_rate_annual_pct", "tenure_months")

    def __init__(self, principal: float, interest_rate_annual_pct: float, tenure_months: int):
        object.__setattr__(self, "principal", validate_positive_amount(principal, "principal"))
        object.__setattr__(
            self, "interest_rate_annual_pct", normalize_rate_input(interest_rate_annual_pct, min_pct=0.0)
        )
        object.__setattr__(self, "tenure_months", validate_tenure(tenure_months))

    def __setattr__(self, key, value):
        raise AttributeError("LoanTerms is immutable")

    @property
    def monthly_rate(self) -> float:
        """Monthly decimal rate (annual / 12 / 100)."""
        return annual_pct_to_monthly_decimal(self.interest_rate_annual_pct)

    def __eq__(self, other):
        if not isinstance(other, LoanTerms):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.principal, self.interest_rate_annual_pct, self.tenure_months))

    def __repr__(self):
        return (
            f"<LoanTerms(principal={self.principal}, rate={self.interest_rate_annual_pct}%, "
            f"tenure={self.tenure_months})>"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "principal": self.principal,
            "interest_rate_annual_pct": self.interest_rate_annual_pct,
            "tenure_months": self.tenure_months,
        }


class EmiScheduleEntry:
    """One month of an amortization schedule."""

    def __init__(
        self,
        month: int,
        installment: float,
        interest: float,
        principal: float,
        remaining_principal: float,
        cumulative_principal: float = 0.0,
        cumulative_interest: float = 0.0,
    ):
        self.month = month
        self.installment = installment
        self.interest = interest
        self.principal = principal
        self.remaining_principal = remaining_principal
        self.cumulative_principal = cumulative_principal
        self.cumulative_interest = cumulative_interest

    def __repr__(self):
        return (
            f"<EmiScheduleEntry(month={self.month}, installment={self.installment:.2f}, "
            f"interest={self.interest:.2f}, principal={self.principal:.2f}, "
            f"remaining={self.remaining_principal:.2f})>"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "installment": self.installment,
            "interest": self.interest,
            "principal": self.principal,
            "remaining_principal": self.remaining_principal,
            "cumulative_principal": self.cumulative_principal,
            "cumulative_interest": self.cumulative_interest,
        }


class EmiSchedule:
    """
    Complete amortization schedule.

    Attributes:
        installment: Regular monthly installment (the final entry may differ)
        entries: Ordered schedule entries, month 1 first
    """

    def __init__(self, installment: float, entries: List[EmiScheduleEntry]):
        self.installment = installment
        self.entries = entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[EmiScheduleEntry]:
        return iter(self.entries)

    def __getitem__(self, index) -> EmiScheduleEntry:
        return self.entries[index]

    @property
    def tenure_months(self) -> int:
        return len(self.entries)

    @property
    def total_interest(self) -> float:
        return sum(entry.interest for entry in self.entries)

    @property
    def total_principal(self) -> float:
        return sum(entry.principal for entry in self.entries)

    @property
    def total_payment(self) -> float:
        return sum(entry.installment for entry in self.entries)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Schedule as a DataFrame.

        Returns:
            DataFrame with columns: month, installment, interest, principal,
            remaining_principal, cumulative_principal, cumulative_interest
        """
        return pd.DataFrame([entry.to_dict() for entry in self.entries])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "installment": self.installment,
            "total_interest": self.total_interest,
            "total_payment": self.total_payment,
            "entries": [entry.to_dict() for entry in self.entries],
        }


class PrepaymentResult:
    """
    Outcome of simulating a lump-sum prepayment against the remaining schedule.

    Attributes:
        mode: PrepaymentMode applied
        original_total_interest: Interest left to pay without the prepayment
        new_total_interest: Interest left to pay after the prepayment
        interest_savings: original_total_interest - new_total_interest
        original_tenure: Remaining months before the prepayment
        new_tenure: Remaining months after the prepayment
        original_installment: Installment before the prepayment
        new_installment: Reduced installment (REDUCE_PAYMENT only)
        updated_schedule: Schedule of the reduced principal
    """

    def __init__(
        self,
        mode: PrepaymentMode,
        original_total_interest: float,
        new_total_interest: float,
        original_tenure: int,
        new_tenure: int,
        original_installment: float,
        new_installment: Optional[float],
        updated_schedule: EmiSchedule,
    ):
        self.mode = mode
        self.original_total_interest = original_total_interest
        self.new_total_interest = new_total_interest
        self.original_tenure = original_tenure
        self.new_tenure = new_tenure
        self.original_installment = original_installment
        self.new_installment = new_installment
        self.updated_schedule = updated_schedule

    @property
    def interest_savings(self) -> float:
        return self.original_total_interest - self.new_total_interest

    @property
    def tenure_reduction(self) -> int:
        return self.original_tenure - self.new_tenure

    def __repr__(self):
        return (
            f"<PrepaymentResult(mode={self.mode.value}, savings={self.interest_savings:.2f}, "
            f"tenure={self.original_tenure}->{self.new_tenure})>"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "original_total_interest": self.original_total_interest,
            "new_total_interest": self.new_total_interest,
            "interest_savings": self.interest_savings,
            "original_tenure": self.original_tenure,
            "new_tenure": self.new_tenure,
            "tenure_reduction": self.tenure_reduction,
            "original_installment": self.original_installment,
            "new_installment": self.new_installment,
            "updated_schedule": [entry.to_dict() for entry in self.updated_schedule],
        }


class ScheduledEmi:
    """A schedule entry with a due date and a payment status."""

    def __init__(
        self,
        entry: EmiScheduleEntry,
        due_date: date,
        status: EmiStatus = EmiStatus.PENDING,
        paid_date: Optional[date] = None,
        amount_paid: Optional[float] = None,
    ):
        self.entry = entry
        self.due_date = due_date
        self.status = status
        self.paid_date = paid_date
        self.amount_paid = amount_paid

    @property
    def emi_number(self) -> int:
        return self.entry.month

    @property
    def is_paid(self) -> bool:
        return self.status == EmiStatus.PAID

    def __repr__(self):
        return f"<ScheduledEmi(emi_number={self.emi_number}, due={self.due_date}, status={self.status.value})>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emi_number": self.emi_number,
            "due_date": self.due_date.isoformat(),
            "installment": self.entry.installment,
            "principal": self.entry.principal,
            "interest": self.entry.interest,
            "remaining_principal": self.entry.remaining_principal,
            "status": self.status.value,
            "paid_date": self.paid_date.isoformat() if self.paid_date else None,
            "amount_paid": self.amount_paid,
        }
