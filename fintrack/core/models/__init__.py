"""
FinTrack Core Models Package.

Value objects exchanged with the calculation engines.

Modules:
    loan: LoanTerms, EmiScheduleEntry, EmiSchedule, PrepaymentResult, ScheduledEmi
    retirement: RetirementParams, ProjectionPoint, ProjectionResult
"""

from fintrack.core.models.loan import (
    LoanTerms,
    EmiScheduleEntry,
    EmiSchedule,
    PrepaymentResult,
    ScheduledEmi,
)

from fintrack.core.models.retirement import (
    RetirementParams,
    ProjectionPoint,
    ProjectionResult,
)

__all__ = [
    # Loan models
    "LoanTerms",
    "EmiScheduleEntry",
    "EmiSchedule",
    "PrepaymentResult",
    "ScheduledEmi",
    # Retirement models
    "RetirementParams",
    "ProjectionPoint",
    "ProjectionResult",
]
