"""
Retirement (FIRE) projection engine for FinTrack.

Projects a portfolio forward with monthly compounding and monthly net
savings, against a FIRE number that grows with inflation each year.
"""

from typing import Iterator, Optional

from fintrack.core.models.retirement import RetirementParams, ProjectionPoint, ProjectionResult
from fintrack.utils.error_utils import error_handler, InvalidInputError
from fintrack.utils.rate_utils import (
    annual_pct_to_decimal,
    annual_pct_to_effective_monthly_decimal,
    MONTHS_PER_YEAR,
)


class PortfolioSeries:
    """
    Yearly projection points from current_age to retirement_age inclusive.

    Points are computed on demand; every iteration starts over from the
    current portfolio and yields the same values.
    """

    def __init__(self, params: RetirementParams, fire_number: float):
        self.params = params
        self.fire_number = fire_number

    def __len__(self) -> int:
        return self.params.years + 1

    def __iter__(self) -> Iterator[ProjectionPoint]:
        params = self.params
        monthly_return = annual_pct_to_effective_monthly_decimal(params.annual_return_pct)
        inflation = annual_pct_to_decimal(params.annual_inflation_pct)
        savings = params.monthly_savings

        portfolio = params.current_portfolio
        for year in range(params.years + 1):
            yield ProjectionPoint(
                age=params.current_age + year,
                portfolio_value=portfolio,
                fire_target=self.fire_number * (1 + inflation) ** year,
            )
            for _ in range(MONTHS_PER_YEAR):
                portfolio = portfolio * (1 + monthly_return) + savings

    def __repr__(self):
        return f"<PortfolioSeries(ages={self.params.current_age}-{self.params.retirement_age})>"


@error_handler
def project(params: RetirementParams) -> ProjectionResult:
    """
    Project the portfolio up to the target retirement age.

    The FIRE number is annual expenses times the FIRE multiple in today's
    money; the target at year k is that number inflated by k years.
    Years-to-FI is the first year offset at which the projected portfolio
    meets the inflated target, or None if it never does before retirement.

    Raises:
        InvalidInputError: If monthly_expenses is not positive, since the
            FIRE number would be zero and years-to-FI meaningless
    """
    if not isinstance(params, RetirementParams):
        raise InvalidInputError(f"Expected RetirementParams, got {type(params).__name__}")
    if params.monthly_expenses <= 0:
        raise InvalidInputError(
            f"monthly_expenses must be positive to define a FIRE number, got {params.monthly_expenses}"
        )

    fire_number = params.annual_expenses * params.fire_multiple
    series = PortfolioSeries(params, fire_number)

    years_to_fi: Optional[int] = None
    last_point = None
    for point in series:
        if years_to_fi is None and point.is_financially_independent:
            years_to_fi = point.age - params.current_age
        last_point = point

    return ProjectionResult(
        params=params,
        points=series,
        fire_number=fire_number,
        years_to_fi=years_to_fi,
        projected_portfolio_at_retirement=last_point.portfolio_value,
        target_at_retirement=last_point.fire_target,
    )
