"""
Loan amortization engine for FinTrack.

Builds fixed-installment (EMI) schedules, derives the outstanding principal
at any point of a loan, and simulates lump-sum prepayments. All rate math is
plain floating point and every figure is returned unrounded; rounding for
display happens at the caller.

Functions:
    calculate_emi: Fixed monthly installment for a loan
    generate_emi_schedule: Month-by-month principal/interest split
    calculate_outstanding_principal: Remaining principal after N installments
    calculate_tenure_for_emi: Months needed to repay a principal at a given installment
    simulate_prepayment: Effect of a lump-sum prepayment under a PrepaymentMode
    calculate_total_outstanding: Principal plus interest still to be paid
    calculate_pending_amounts: Pending principal / interest breakdown
    calculate_principal_for_emi: Largest principal an installment can service
    calculate_loan_affordability: Installment and loan headroom for an income
    prepayment_recommendation: Advice text for a simulated prepayment
"""

import math
from typing import Dict, Any, Union

import numpy_financial as npf

from fintrack.core.constants import (
    PrepaymentMode,
    DEFAULT_DEBT_TO_INCOME_RATIO,
    AFFORDABILITY_REFERENCE_RATE_PCT,
    AFFORDABILITY_REFERENCE_TENURE_MONTHS,
    AFFORDABILITY_COMFORT_EMI,
)
from fintrack.core.models.loan import (
    LoanTerms,
    EmiScheduleEntry,
    EmiSchedule,
    PrepaymentResult,
    validate_positive_amount,
    validate_tenure,
)
from fintrack.utils.error_utils import error_handler, InvalidInputError
from fintrack.utils.rate_utils import annual_pct_to_monthly_decimal, normalize_rate_input

# Slack when rounding a fractional month count up, so that an exact
# integer tenure computed as 23.0000000001 stays 23.
_TENURE_EPSILON = 1e-9


def _require_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidInputError(f"{what} is not a finite number for these loan terms")
    return value


def _installment(principal: float, monthly_rate: float, months: int) -> float:
    if monthly_rate == 0:
        return principal / months
    # P * r / (1 - (1+r)^-n); tends to P * r for long tenures instead of overflowing
    return _require_finite(principal * monthly_rate / (1 - (1 + monthly_rate) ** -months), "installment")


def _amortize(principal: float, monthly_rate: float, months: int, installment: float) -> EmiSchedule:
    """Split `months` installments into interest and principal; the last one clears the balance."""
    entries = []
    remaining = principal
    cumulative_principal = 0.0
    cumulative_interest = 0.0

    for month in range(1, months + 1):
        interest = remaining * monthly_rate
        if month == months:
            principal_part = remaining
        else:
            principal_part = max(0.0, min(installment - interest, remaining))

        remaining = 0.0 if month == months else max(0.0, remaining - principal_part)
        cumulative_principal += principal_part
        cumulative_interest += interest

        entries.append(
            EmiScheduleEntry(
                month=month,
                installment=principal_part + interest,
                interest=interest,
                principal=principal_part,
                remaining_principal=remaining,
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
            )
        )

    return EmiSchedule(installment=installment, entries=entries)


def _tenure_for_installment(principal: float, monthly_rate: float, installment: float) -> int:
    if monthly_rate == 0:
        return max(1, math.ceil(principal / installment - _TENURE_EPSILON))

    if installment <= principal * monthly_rate:
        raise InvalidInputError(
            f"Installment {installment:.2f} does not cover the monthly interest "
            f"{principal * monthly_rate:.2f}; the loan would never be repaid"
        )

    # n = log(E / (E - P*r)) / log(1 + r)
    months = _require_finite(float(npf.nper(monthly_rate, -installment, principal)), "tenure")
    return max(1, math.ceil(months - _TENURE_EPSILON))


@error_handler
def calculate_emi(principal: float, annual_rate_pct: float, tenure_months: int) -> float:
    """
    Calculate the fixed monthly installment.

    Uses the annuity formula emi = P * r * (1+r)^n / ((1+r)^n - 1) with
    r = annual_rate_pct / 12 / 100; a 0% loan pays principal / n.

    Examples:
        >>> round(calculate_emi(100000, 10, 12), 2)
        8791.59
        >>> calculate_emi(12000, 0, 12)
        1000.0
    """
    terms = LoanTerms(principal, annual_rate_pct, tenure_months)
    return _installment(terms.principal, terms.monthly_rate, terms.tenure_months)


@error_handler
def generate_emi_schedule(principal: float, annual_rate_pct: float, tenure_months: int) -> EmiSchedule:
    """
    Generate the complete amortization schedule.

    Produces exactly `tenure_months` entries. Each entry's interest is the
    balance at the start of the month times the monthly rate and its
    principal portion is the installment minus that interest. The final
    entry clears whatever balance is left, so the remaining principal ends
    at exactly zero instead of a floating-point residue.

    Args:
        principal: Amount borrowed
        annual_rate_pct: Nominal annual interest rate as percentage
        tenure_months: Number of monthly installments

    Returns:
        EmiSchedule with unrounded figures

    Raises:
        InvalidInputError: Non-positive principal, negative rate or tenure
        ArithmeticDegenerateError: Zero tenure
    """
    terms = LoanTerms(principal, annual_rate_pct, tenure_months)
    installment = _installment(terms.principal, terms.monthly_rate, terms.tenure_months)
    return _amortize(terms.principal, terms.monthly_rate, terms.tenure_months, installment)


@error_handler
def calculate_outstanding_principal(
    principal: float, annual_rate_pct: float, tenure_months: int, elapsed_months: int
) -> float:
    """
    Remaining principal after `elapsed_months` installments.

    Returns the original principal for 0 elapsed months and zero once the
    tenure has run out.

    Raises:
        InvalidInputError: Negative or fractional elapsed_months
    """
    terms = LoanTerms(principal, annual_rate_pct, tenure_months)

    if isinstance(elapsed_months, bool) or elapsed_months is None:
        raise InvalidInputError(f"elapsed_months must be an integer, got {elapsed_months!r}")
    try:
        elapsed = float(elapsed_months)
    except (TypeError, ValueError):
        raise InvalidInputError(f"elapsed_months must be an integer, got {elapsed_months!r}")
    if elapsed < 0:
        raise InvalidInputError(f"elapsed_months must not be negative, got {elapsed_months!r}")
    if elapsed != int(elapsed):
        raise InvalidInputError(f"elapsed_months must be a whole number, got {elapsed_months!r}")

    elapsed = int(elapsed)
    if elapsed == 0:
        return terms.principal
    if elapsed >= terms.tenure_months:
        return 0.0

    installment = _installment(terms.principal, terms.monthly_rate, terms.tenure_months)
    schedule = _amortize(terms.principal, terms.monthly_rate, terms.tenure_months, installment)
    return schedule[elapsed - 1].remaining_principal


@error_handler
def calculate_tenure_for_emi(principal: float, annual_rate_pct: float, installment: float) -> int:
    """
    Number of months needed to repay `principal` with a fixed `installment`.

    Rounds up: the last month may be a smaller payment.

    Raises:
        InvalidInputError: If the installment does not exceed the first
            month's interest
    """
    principal = validate_positive_amount(principal, "principal")
    installment = validate_positive_amount(installment, "installment")
    monthly_rate = annual_pct_to_monthly_decimal(normalize_rate_input(annual_rate_pct, min_pct=0.0))
    return _tenure_for_installment(principal, monthly_rate, installment)


def _reduce_tenure(
    original: EmiSchedule, new_principal: float, monthly_rate: float, remaining_tenure: int
) -> PrepaymentResult:
    new_tenure = min(remaining_tenure, _tenure_for_installment(new_principal, monthly_rate, original.installment))
    updated = _amortize(new_principal, monthly_rate, new_tenure, original.installment)
    return PrepaymentResult(
        mode=PrepaymentMode.REDUCE_TENURE,
        original_total_interest=original.total_interest,
        new_total_interest=updated.total_interest,
        original_tenure=remaining_tenure,
        new_tenure=new_tenure,
        original_installment=original.installment,
        new_installment=None,
        updated_schedule=updated,
    )


def _reduce_payment(
    original: EmiSchedule, new_principal: float, monthly_rate: float, remaining_tenure: int
) -> PrepaymentResult:
    new_installment = _installment(new_principal, monthly_rate, remaining_tenure)
    updated = _amortize(new_principal, monthly_rate, remaining_tenure, new_installment)
    return PrepaymentResult(
        mode=PrepaymentMode.REDUCE_PAYMENT,
        original_total_interest=original.total_interest,
        new_total_interest=updated.total_interest,
        original_tenure=remaining_tenure,
        new_tenure=remaining_tenure,
        original_installment=original.installment,
        new_installment=new_installment,
        updated_schedule=updated,
    )


_PREPAYMENT_STRATEGIES = {
    PrepaymentMode.REDUCE_TENURE: _reduce_tenure,
    PrepaymentMode.REDUCE_PAYMENT: _reduce_payment,
}


@error_handler
def simulate_prepayment(
    current_principal: float,
    annual_rate_pct: float,
    remaining_tenure_months: int,
    prepayment_amount: float,
    mode: Union[PrepaymentMode, str] = PrepaymentMode.REDUCE_TENURE,
) -> PrepaymentResult:
    """
    Simulate a lump-sum prepayment against the remaining schedule.

    REDUCE_TENURE keeps the original installment and shortens the loan to
    the months needed for the reduced principal. REDUCE_PAYMENT keeps the
    remaining tenure and recomputes a smaller installment.

    Args:
        current_principal: Principal outstanding before the prepayment
        annual_rate_pct: Nominal annual interest rate as percentage
        remaining_tenure_months: Installments left before the prepayment
        prepayment_amount: Lump sum paid now
        mode: PrepaymentMode or its string value

    Returns:
        PrepaymentResult comparing the remaining schedule with and without
        the prepayment

    Raises:
        InvalidInputError: Prepayment not positive or not smaller than the
            current principal, or unknown mode
    """
    try:
        mode = PrepaymentMode.from_value(mode)
    except ValueError:
        valid = ", ".join(m.value for m in PrepaymentMode)
        raise InvalidInputError(f"Unknown prepayment mode {mode!r}; expected one of: {valid}")

    terms = LoanTerms(current_principal, annual_rate_pct, remaining_tenure_months)
    prepayment_amount = validate_positive_amount(prepayment_amount, "prepayment_amount")

    if prepayment_amount >= terms.principal:
        raise InvalidInputError(
            f"Prepayment amount {prepayment_amount} must be less than the current principal {terms.principal}"
        )

    installment = _installment(terms.principal, terms.monthly_rate, terms.tenure_months)
    original = _amortize(terms.principal, terms.monthly_rate, terms.tenure_months, installment)
    new_principal = terms.principal - prepayment_amount

    strategy = _PREPAYMENT_STRATEGIES[mode]
    return strategy(original, new_principal, terms.monthly_rate, terms.tenure_months)


@error_handler
def calculate_total_outstanding(current_principal: float, annual_rate_pct: float, remaining_months: int) -> float:
    """Principal plus all interest still to be paid over the remaining months."""
    if remaining_months <= 0:
        return 0.0
    return generate_emi_schedule(current_principal, annual_rate_pct, remaining_months).total_payment


@error_handler
def calculate_pending_amounts(
    principal: float, annual_rate_pct: float, tenure_months: int, months_elapsed: float
) -> Dict[str, float]:
    """
    Break down what is still owed after `months_elapsed` (fractions ignored).

    Returns:
        Dict with pending_principal, pending_interest, total_pending
    """
    terms = LoanTerms(principal, annual_rate_pct, tenure_months)
    if months_elapsed is None or float(months_elapsed) < 0:
        raise InvalidInputError(f"months_elapsed must not be negative, got {months_elapsed!r}")

    months_paid = int(math.floor(float(months_elapsed)))
    remaining_months = terms.tenure_months - months_paid
    if remaining_months <= 0:
        return {"pending_principal": 0.0, "pending_interest": 0.0, "total_pending": 0.0}

    pending_principal = calculate_outstanding_principal(
        terms.principal, terms.interest_rate_annual_pct, terms.tenure_months, months_paid
    )
    remaining = generate_emi_schedule(pending_principal, terms.interest_rate_annual_pct, remaining_months)

    return {
        "pending_principal": pending_principal,
        "pending_interest": remaining.total_interest,
        "total_pending": remaining.total_payment,
    }


@error_handler
def calculate_principal_for_emi(installment: float, annual_rate_pct: float, tenure_months: int) -> float:
    """
    Largest principal a fixed installment can repay over `tenure_months`.

    Examples:
        >>> calculate_principal_for_emi(1000, 0, 12)
        12000.0
    """
    installment = validate_positive_amount(installment, "installment")
    tenure_months = validate_tenure(tenure_months)
    monthly_rate = annual_pct_to_monthly_decimal(normalize_rate_input(annual_rate_pct, min_pct=0.0))

    if monthly_rate == 0:
        return installment * tenure_months
    # E * (1 - (1+r)^-n) / r
    return _require_finite(installment * (1 - (1 + monthly_rate) ** -tenure_months) / monthly_rate, "principal")


@error_handler
def calculate_loan_affordability(
    monthly_income: float,
    existing_emis: float = 0.0,
    debt_to_income_ratio: float = DEFAULT_DEBT_TO_INCOME_RATIO,
) -> Dict[str, Any]:
    """
    Installment headroom for an income under a debt-to-income ceiling.

    The maximum loan amount assumes a reference loan of 10% over 20 years.

    Returns:
        Dict with max_emi, max_loan_amount, recommendation
    """
    monthly_income = float(monthly_income)
    existing_emis = float(existing_emis)
    debt_to_income_ratio = float(debt_to_income_ratio)
    if monthly_income < 0 or existing_emis < 0:
        raise InvalidInputError("monthly_income and existing_emis must not be negative")
    if not 0 < debt_to_income_ratio <= 1:
        raise InvalidInputError(f"debt_to_income_ratio must be in (0, 1], got {debt_to_income_ratio}")

    max_emi = monthly_income * debt_to_income_ratio - existing_emis

    if max_emi <= 0:
        recommendation = "Current EMI commitments exceed recommended debt-to-income ratio"
        max_loan_amount = 0.0
    else:
        if max_emi < AFFORDABILITY_COMFORT_EMI:
            recommendation = "Consider increasing income or reducing existing EMIs before taking new loan"
        else:
            recommendation = "Loan is affordable within recommended limits"
        max_loan_amount = calculate_principal_for_emi(
            max_emi, AFFORDABILITY_REFERENCE_RATE_PCT, AFFORDABILITY_REFERENCE_TENURE_MONTHS
        )

    return {
        "max_emi": max(0.0, max_emi),
        "max_loan_amount": max_loan_amount,
        "recommendation": recommendation,
    }


def prepayment_recommendation(result: PrepaymentResult, prepayment_amount: float) -> str:
    """Advice text graded by how much interest or tenure the prepayment saves."""
    if result.interest_savings > prepayment_amount * 0.3:
        return "Excellent prepayment opportunity! High interest savings expected."
    if result.interest_savings > prepayment_amount * 0.15:
        return "Good prepayment option with moderate interest savings."
    if result.tenure_reduction > 12:
        return "Prepayment will significantly reduce loan tenure."
    return "Consider if prepayment is the best use of funds compared to other investments."
