"""
Loan calculator API endpoints.

Stateless wrappers around the amortization engine: EMI, schedule,
outstanding principal, prepayment simulation, EMI calendar and
affordability. Engine errors surface as InvalidInputError and are turned
into 400 responses by the application's exception handlers.
"""

from fastapi import APIRouter, HTTPException, status

from fintrack.api.schemas import (
    LoanTermsRequest,
    EmiResponse,
    EmiScheduleEntryResponse,
    EmiScheduleResponse,
    OutstandingPrincipalRequest,
    OutstandingPrincipalResponse,
    PrepaymentRequest,
    PrepaymentResponse,
    PrepaymentInsights,
    EmiCalendarRequest,
    EmiCalendarResponse,
    ScheduledEmiResponse,
    AffordabilityRequest,
    AffordabilityResponse,
)
from fintrack.core.engine.amortization import (
    generate_emi_schedule,
    calculate_outstanding_principal,
    calculate_pending_amounts,
    simulate_prepayment,
    calculate_loan_affordability,
    prepayment_recommendation,
)
from fintrack.core.engine.emi_calendar import (
    build_emi_calendar,
    reconcile_emi_status,
    calculate_emi_end_date,
    calculate_time_based_completion,
)
from fintrack.core.models.loan import EmiScheduleEntry, EmiSchedule, ScheduledEmi
from fintrack.utils.rate_utils import round_currency, round_percentage


router = APIRouter()


def _entry_response(entry: EmiScheduleEntry) -> EmiScheduleEntryResponse:
    return EmiScheduleEntryResponse(
        month=entry.month,
        installment=round_currency(entry.installment),
        interest=round_currency(entry.interest),
        principal=round_currency(entry.principal),
        remaining_principal=round_currency(entry.remaining_principal),
        cumulative_principal=round_currency(entry.cumulative_principal),
        cumulative_interest=round_currency(entry.cumulative_interest),
    )


def _scheduled_response(scheduled: ScheduledEmi) -> ScheduledEmiResponse:
    return ScheduledEmiResponse(
        emi_number=scheduled.emi_number,
        due_date=scheduled.due_date,
        installment=round_currency(scheduled.entry.installment),
        principal=round_currency(scheduled.entry.principal),
        interest=round_currency(scheduled.entry.interest),
        remaining_principal=round_currency(scheduled.entry.remaining_principal),
        status=scheduled.status.value,
        paid_date=scheduled.paid_date,
        amount_paid=round_currency(scheduled.amount_paid) if scheduled.amount_paid is not None else None,
    )


def _schedule_totals(schedule: EmiSchedule) -> dict:
    return {
        "installment": round_currency(schedule.installment),
        "total_interest": round_currency(schedule.total_interest),
        "total_payment": round_currency(schedule.total_payment),
    }


@router.post("/emi", response_model=EmiResponse)
def calculate_emi_endpoint(terms: LoanTermsRequest):
    schedule = generate_emi_schedule(terms.principal, terms.interest_rate_annual_pct, terms.tenure_months)
    return EmiResponse(**_schedule_totals(schedule))


@router.post("/emi-schedule", response_model=EmiScheduleResponse)
def emi_schedule(terms: LoanTermsRequest):
    schedule = generate_emi_schedule(terms.principal, terms.interest_rate_annual_pct, terms.tenure_months)
    return EmiScheduleResponse(
        **_schedule_totals(schedule),
        tenure_months=schedule.tenure_months,
        entries=[_entry_response(entry) for entry in schedule],
    )


@router.post("/outstanding-principal", response_model=OutstandingPrincipalResponse)
def outstanding_principal(request: OutstandingPrincipalRequest):
    outstanding = calculate_outstanding_principal(
        request.principal, request.interest_rate_annual_pct, request.tenure_months, request.elapsed_months
    )
    pending = calculate_pending_amounts(
        request.principal, request.interest_rate_annual_pct, request.tenure_months, request.elapsed_months
    )
    completion = min(request.elapsed_months / request.tenure_months * 100, 100.0)

    return OutstandingPrincipalResponse(
        elapsed_months=request.elapsed_months,
        remaining_months=max(0, request.tenure_months - request.elapsed_months),
        outstanding_principal=round_currency(outstanding),
        pending_interest=round_currency(pending["pending_interest"]),
        total_pending=round_currency(pending["total_pending"]),
        completion_percentage=round_percentage(completion),
    )


@router.post("/prepayment-simulator", response_model=PrepaymentResponse)
def prepayment_simulator(request: PrepaymentRequest):
    remaining_tenure = request.tenure_months - request.elapsed_months
    if remaining_tenure <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Loan is already fully repaid; nothing left to prepay",
        )

    current_principal = calculate_outstanding_principal(
        request.principal, request.interest_rate_annual_pct, request.tenure_months, request.elapsed_months
    )
    result = simulate_prepayment(
        current_principal,
        request.interest_rate_annual_pct,
        remaining_tenure,
        request.prepayment_amount,
        request.prepayment_type,
    )

    completion = request.elapsed_months / request.tenure_months * 100
    savings_pct = (
        result.interest_savings / result.original_total_interest * 100 if result.original_total_interest > 0 else 0.0
    )
    new_total_tenure = request.elapsed_months + result.new_tenure

    insights = PrepaymentInsights(
        current_outstanding=round_currency(current_principal),
        outstanding_after_prepayment=round_currency(current_principal - request.prepayment_amount),
        current_completion_percentage=round_percentage(completion),
        prepayment_percentage=round_percentage(request.prepayment_amount / current_principal * 100),
        interest_savings_percentage=round_percentage(savings_pct),
        months_reduced=result.tenure_reduction,
        principal_reduction_percentage=round_percentage(request.prepayment_amount / request.principal * 100),
        new_completion_after_prepayment=round_percentage(request.elapsed_months / new_total_tenure * 100),
        recommendation=prepayment_recommendation(result, request.prepayment_amount),
    )

    return PrepaymentResponse(
        prepayment_type=result.mode.value,
        current_principal=round_currency(current_principal),
        remaining_tenure=remaining_tenure,
        elapsed_months=request.elapsed_months,
        original_installment=round_currency(result.original_installment),
        new_installment=round_currency(result.new_installment) if result.new_installment is not None else None,
        original_total_interest=round_currency(result.original_total_interest),
        new_total_interest=round_currency(result.new_total_interest),
        interest_savings=round_currency(result.interest_savings),
        original_tenure=result.original_tenure,
        new_tenure=result.new_tenure,
        tenure_reduction=result.tenure_reduction,
        updated_schedule=[_entry_response(entry) for entry in result.updated_schedule],
        insights=insights,
    )


@router.post("/emi-calendar", response_model=EmiCalendarResponse)
def emi_calendar(request: EmiCalendarRequest):
    schedule = generate_emi_schedule(request.principal, request.interest_rate_annual_pct, request.tenure_months)
    calendar = reconcile_emi_status(build_emi_calendar(schedule, request.start_date), request.as_of_date)
    completion = calculate_time_based_completion(request.start_date, request.tenure_months, request.as_of_date)

    paid = [emi for emi in calendar if emi.is_paid]
    pending = [emi for emi in calendar if not emi.is_paid]

    return EmiCalendarResponse(
        start_date=request.start_date,
        end_date=calculate_emi_end_date(request.start_date, request.tenure_months),
        as_of_date=request.as_of_date,
        paid_count=len(paid),
        pending_count=len(pending),
        next_due_date=pending[0].due_date if pending else None,
        completion_percentage=round_percentage(completion["completion_percentage"]),
        emis=[_scheduled_response(emi) for emi in calendar],
    )


@router.post("/affordability", response_model=AffordabilityResponse)
def affordability(request: AffordabilityRequest):
    result = calculate_loan_affordability(
        request.monthly_income, request.existing_emis, request.debt_to_income_ratio
    )
    return AffordabilityResponse(
        max_emi=round_currency(result["max_emi"]),
        max_loan_amount=round_currency(result["max_loan_amount"]),
        recommendation=result["recommendation"],
    )
