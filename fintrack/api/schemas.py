"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Input validation for API requests
- Response serialization
- OpenAPI documentation generation

Every currency amount and percentage in a response is rounded to 2 decimal
places; the engines themselves return unrounded figures.
"""

from datetime import date
from typing import Optional, List
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from fintrack.core.constants import MAX_TENURE_MONTHS


# ======================
# Enums
# ======================


class PrepaymentType(str, Enum):
    """Prepayment mode as accepted on the wire."""

    REDUCE_TENURE = "reduce_tenure"
    REDUCE_PAYMENT = "reduce_payment"
    REDUCE_EMI = "reduce_emi"  # legacy alias of reduce_payment


class EmiStatusType(str, Enum):
    """Payment status enumeration."""

    PENDING = "pending"
    PAID = "paid"


# ======================
# Base Schemas
# ======================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        use_enum_values=True,
    )


# ======================
# Loan Schemas
# ======================


class LoanTermsRequest(BaseSchema):
    """Principal, rate and tenure of a loan."""

    principal: float = Field(..., gt=0, description="Amount borrowed")
    interest_rate_annual_pct: float = Field(..., ge=0, le=100, description="Nominal annual rate (%)")
    tenure_months: int = Field(..., gt=0, le=MAX_TENURE_MONTHS, description="Number of monthly installments")


class EmiResponse(BaseSchema):
    """Fixed installment for a loan."""

    installment: float
    total_interest: float
    total_payment: float


class EmiScheduleEntryResponse(BaseSchema):
    """One month of an amortization schedule."""

    month: int
    installment: float
    interest: float
    principal: float
    remaining_principal: float
    cumulative_principal: float
    cumulative_interest: float


class EmiScheduleResponse(EmiResponse):
    """Complete amortization schedule."""

    tenure_months: int
    entries: List[EmiScheduleEntryResponse]


class OutstandingPrincipalRequest(LoanTermsRequest):
    """Loan terms plus the number of installments already paid."""

    elapsed_months: int = Field(..., ge=0)


class OutstandingPrincipalResponse(BaseSchema):
    """Balance still owed on a loan."""

    elapsed_months: int
    remaining_months: int
    outstanding_principal: float
    pending_interest: float
    total_pending: float
    completion_percentage: float


class PrepaymentRequest(LoanTermsRequest):
    """Prepayment simulation against a loan that has run for elapsed_months."""

    elapsed_months: int = Field(default=0, ge=0)
    prepayment_amount: float = Field(..., gt=0)
    prepayment_type: PrepaymentType = Field(default=PrepaymentType.REDUCE_TENURE)


class PrepaymentInsights(BaseSchema):
    """Derived ratios describing a simulated prepayment."""

    current_outstanding: float
    outstanding_after_prepayment: float
    current_completion_percentage: float
    prepayment_percentage: float
    interest_savings_percentage: float
    months_reduced: int
    principal_reduction_percentage: float
    new_completion_after_prepayment: float
    recommendation: str


class PrepaymentResponse(BaseSchema):
    """Outcome of a prepayment simulation."""

    prepayment_type: str
    current_principal: float
    remaining_tenure: int
    elapsed_months: int
    original_installment: float
    new_installment: Optional[float] = None
    original_total_interest: float
    new_total_interest: float
    interest_savings: float
    original_tenure: int
    new_tenure: int
    tenure_reduction: int
    updated_schedule: List[EmiScheduleEntryResponse]
    insights: PrepaymentInsights


class EmiCalendarRequest(LoanTermsRequest):
    """Loan terms plus dates needed to place installments on the calendar."""

    start_date: date
    as_of_date: date = Field(..., description="Installments due before this date are treated as paid")


class ScheduledEmiResponse(BaseSchema):
    """Installment with due date and payment status."""

    emi_number: int
    due_date: date
    installment: float
    principal: float
    interest: float
    remaining_principal: float
    status: EmiStatusType
    paid_date: Optional[date] = None
    amount_paid: Optional[float] = None


class EmiCalendarResponse(BaseSchema):
    """EMI calendar with reconciled statuses."""

    start_date: date
    end_date: date
    as_of_date: date
    paid_count: int
    pending_count: int
    next_due_date: Optional[date] = None
    completion_percentage: float
    emis: List[ScheduledEmiResponse]


class AffordabilityRequest(BaseSchema):
    """Income and existing commitments for an affordability check."""

    monthly_income: float = Field(..., ge=0)
    existing_emis: float = Field(default=0, ge=0)
    debt_to_income_ratio: float = Field(default=0.4, gt=0, le=1)


class AffordabilityResponse(BaseSchema):
    """Installment and loan headroom."""

    max_emi: float
    max_loan_amount: float
    recommendation: str


# ======================
# FIRE Simulator Schemas
# ======================


class AccountHolding(BaseSchema):
    balance: float = 0


class FixedDepositHolding(BaseSchema):
    amount: float = 0


class MutualFundHolding(BaseSchema):
    total_invested: float = 0
    current_nav: Optional[float] = None
    units: Optional[float] = None


class GoldHolding(BaseSchema):
    grams: float = Field(0, ge=0)


class TransactionRecord(BaseSchema):
    date: date
    amount: float
    type: str = Field(..., description="'income' or 'expense'")


class FireSimulationRequest(BaseSchema):
    """
    FIRE simulator inputs.

    current_portfolio, monthly_income and monthly_expenses may be given
    directly; when omitted they are derived from the holdings and the last
    twelve months of transactions before as_of_date.
    """

    current_age: int = Field(default=32, ge=0, le=120)
    retirement_age: int = Field(default=50, ge=0, le=120)
    annual_return_pct: Optional[float] = Field(None, ge=-100, le=100)
    annual_inflation_pct: Optional[float] = Field(None, ge=-100, le=100)
    fire_multiple: Optional[float] = Field(None, gt=0)
    current_portfolio: Optional[float] = Field(None, ge=0)
    monthly_income: Optional[float] = Field(None, ge=0)
    monthly_expenses: Optional[float] = None
    as_of_date: Optional[date] = None
    accounts: List[AccountHolding] = Field(default_factory=list)
    fixed_deposits: List[FixedDepositHolding] = Field(default_factory=list)
    mutual_funds: List[MutualFundHolding] = Field(default_factory=list)
    gold: List[GoldHolding] = Field(default_factory=list)
    transactions: List[TransactionRecord] = Field(default_factory=list)


class ProjectionPointResponse(BaseSchema):
    age: int
    portfolio_value: float
    fire_target: float


class FireSimulationResponse(BaseSchema):
    """FIRE simulator results."""

    current_age: int
    retirement_age: int
    current_portfolio: float
    monthly_income: float
    monthly_expenses: float
    annual_expenses: float
    monthly_savings: float
    fire_number: float
    years_to_fi: Optional[int] = None
    fi_age: Optional[int] = None
    can_retire_at_target_age: bool
    projected_portfolio_at_retirement: float
    target_at_retirement: float
    fi_percentage: float
    projection: List[ProjectionPointResponse]


# ======================
# Error Response Schema
# ======================


class ErrorResponse(BaseSchema):
    """Standard error response schema."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    type: Optional[str] = Field(None, description="Error type/class")
