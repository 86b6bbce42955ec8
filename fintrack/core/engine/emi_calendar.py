"""
EMI calendar for FinTrack.

Places an amortization schedule on the calendar and, as a separate step,
reconciles payment status against a caller-supplied date. Schedule
generation itself never looks at dates or statuses.
"""

from datetime import date
from typing import List, Optional, Dict, Any

from fintrack.core.constants import EmiStatus
from fintrack.core.models.loan import EmiSchedule, ScheduledEmi, validate_tenure
from fintrack.utils.date_utils import add_months, fractional_months_between, DateLike, parse_date
from fintrack.utils.error_utils import error_handler, InvalidInputError


def emi_due_date(start_date: date, emi_number: int) -> date:
    """Installment `emi_number` (1-based) falls due `emi_number` months after the loan start."""
    return add_months(start_date, emi_number)


@error_handler
def calculate_emi_end_date(start_date: DateLike, tenure_months: int) -> date:
    """Due date of the final installment."""
    return add_months(parse_date(start_date), validate_tenure(tenure_months))


@error_handler
def build_emi_calendar(schedule: EmiSchedule, start_date: DateLike) -> List[ScheduledEmi]:
    """Attach a due date to every schedule entry; all entries start out pending."""
    start = parse_date(start_date)
    return [ScheduledEmi(entry=entry, due_date=emi_due_date(start, entry.month)) for entry in schedule]


@error_handler
def reconcile_emi_status(calendar: List[ScheduledEmi], as_of: DateLike) -> List[ScheduledEmi]:
    """
    Mark installments due strictly before `as_of` as paid.

    Paid entries record the due date as paid date and the installment as the
    amount paid. Entries already marked paid keep their recorded payment.
    Returns new ScheduledEmi objects; the input list is left untouched.
    """
    as_of = parse_date(as_of)
    reconciled = []
    for scheduled in calendar:
        if scheduled.is_paid:
            reconciled.append(
                ScheduledEmi(
                    entry=scheduled.entry,
                    due_date=scheduled.due_date,
                    status=EmiStatus.PAID,
                    paid_date=scheduled.paid_date,
                    amount_paid=scheduled.amount_paid,
                )
            )
        elif scheduled.due_date < as_of:
            reconciled.append(
                ScheduledEmi(
                    entry=scheduled.entry,
                    due_date=scheduled.due_date,
                    status=EmiStatus.PAID,
                    paid_date=scheduled.due_date,
                    amount_paid=scheduled.entry.installment,
                )
            )
        else:
            reconciled.append(ScheduledEmi(entry=scheduled.entry, due_date=scheduled.due_date))
    return reconciled


@error_handler
def calculate_time_based_completion(start_date: DateLike, tenure_months: int, as_of: DateLike) -> Dict[str, Any]:
    """
    Loan completion measured purely by time elapsed since the start date.

    Returns:
        Dict with months_elapsed (fractional, never negative),
        completion_percentage (capped at 100) and is_complete
    """
    tenure_months = validate_tenure(tenure_months)
    months_elapsed = max(0.0, fractional_months_between(parse_date(start_date), parse_date(as_of)))

    return {
        "months_elapsed": months_elapsed,
        "completion_percentage": min(months_elapsed / tenure_months * 100, 100.0),
        "is_complete": months_elapsed >= tenure_months,
    }


@error_handler
def calculate_next_emi_due(start_date: DateLike, months_elapsed: float, tenure_months: int) -> Optional[date]:
    """Due date of the next unpaid installment, or None once every installment is due."""
    tenure_months = validate_tenure(tenure_months)
    if months_elapsed < 0:
        raise InvalidInputError(f"months_elapsed must not be negative, got {months_elapsed}")

    months_paid = int(months_elapsed)
    if months_paid >= tenure_months:
        return None
    return emi_due_date(parse_date(start_date), months_paid + 1)
