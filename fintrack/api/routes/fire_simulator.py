"""
FIRE simulator API endpoints.

Runs the retirement projection engine from explicit inputs, or derives the
current portfolio and monthly cash flow from holdings and transactions sent
with the request.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from fintrack.api.schemas import (
    FireSimulationRequest,
    FireSimulationResponse,
    ProjectionPointResponse,
)
from fintrack.config import get_config
from fintrack.core.engine.portfolio import current_portfolio_value, monthly_cash_flow
from fintrack.core.engine.retirement import project
from fintrack.core.models.retirement import RetirementParams
from fintrack.utils.rate_utils import round_currency, round_percentage


router = APIRouter()


def _resolve_cash_flow(request: FireSimulationRequest) -> tuple:
    if request.monthly_income is not None and request.monthly_expenses is not None:
        return request.monthly_income, request.monthly_expenses

    if request.transactions and request.as_of_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="as_of_date is required to derive monthly income and expenses from transactions",
        )

    derived = {"monthly_income": 0.0, "monthly_expenses": 0.0}
    if request.transactions:
        derived = monthly_cash_flow(
            [t.model_dump() for t in request.transactions],
            as_of=request.as_of_date,
        )

    income = request.monthly_income if request.monthly_income is not None else derived["monthly_income"]
    expenses = request.monthly_expenses if request.monthly_expenses is not None else derived["monthly_expenses"]
    return income, expenses


def _resolve_portfolio(request: FireSimulationRequest) -> float:
    if request.current_portfolio is not None:
        return request.current_portfolio
    return current_portfolio_value(
        accounts=[a.model_dump() for a in request.accounts],
        fixed_deposits=[f.model_dump() for f in request.fixed_deposits],
        mutual_funds=[m.model_dump() for m in request.mutual_funds],
        gold=[g.model_dump() for g in request.gold],
        gold_rate_per_gram=get_config().gold_rate_per_gram,
    )


def _run_simulation(request: FireSimulationRequest) -> FireSimulationResponse:
    config = get_config()
    monthly_income, monthly_expenses = _resolve_cash_flow(request)

    params = RetirementParams(
        current_age=request.current_age,
        retirement_age=request.retirement_age,
        annual_return_pct=(
            request.annual_return_pct if request.annual_return_pct is not None else config.fire_default_return_pct
        ),
        annual_inflation_pct=(
            request.annual_inflation_pct
            if request.annual_inflation_pct is not None
            else config.fire_default_inflation_pct
        ),
        current_portfolio=_resolve_portfolio(request),
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        fire_multiple=request.fire_multiple if request.fire_multiple is not None else config.fire_multiple,
    )
    result = project(params)

    return FireSimulationResponse(
        current_age=params.current_age,
        retirement_age=params.retirement_age,
        current_portfolio=round_currency(params.current_portfolio),
        monthly_income=round_currency(params.monthly_income),
        monthly_expenses=round_currency(params.monthly_expenses),
        annual_expenses=round_currency(params.annual_expenses),
        monthly_savings=round_currency(params.monthly_savings),
        fire_number=round_currency(result.fire_number),
        years_to_fi=result.years_to_fi,
        fi_age=result.fi_age,
        can_retire_at_target_age=result.can_retire_at_target_age,
        projected_portfolio_at_retirement=round_currency(result.projected_portfolio_at_retirement),
        target_at_retirement=round_currency(result.target_at_retirement),
        fi_percentage=round_percentage(result.fi_percentage),
        projection=[
            ProjectionPointResponse(
                age=point.age,
                portfolio_value=round_currency(point.portfolio_value),
                fire_target=round_currency(point.fire_target),
            )
            for point in result
        ],
    )


@router.post("", response_model=FireSimulationResponse)
def run_fire_simulation(request: FireSimulationRequest):
    return _run_simulation(request)


@router.get("", response_model=FireSimulationResponse)
def get_fire_simulation(
    current_age: int = 32,
    retirement_age: int = 50,
    current_portfolio: float = 0,
    monthly_income: float = 0,
    monthly_expenses: float = 0,
    annual_return_pct: Optional[float] = None,
    annual_inflation_pct: Optional[float] = None,
    fire_multiple: Optional[float] = None,
):
    """Query-parameter variant of the simulator; holdings and transactions are not accepted here."""
    request = FireSimulationRequest(
        current_age=current_age,
        retirement_age=retirement_age,
        current_portfolio=current_portfolio,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        annual_return_pct=annual_return_pct,
        annual_inflation_pct=annual_inflation_pct,
        fire_multiple=fire_multiple,
    )
    return _run_simulation(request)
