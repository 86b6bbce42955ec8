"""
Retirement projection value objects for FinTrack.

Classes:
    RetirementParams: Validated inputs of the FIRE simulator
    ProjectionPoint: Portfolio value and FIRE target at one age
    ProjectionResult: Projection points plus derived FIRE scalars
"""

import math
from typing import Dict, Any, Optional, Iterable, Iterator

import pandas as pd

from fintrack.core.constants import FIRE_MULTIPLE
from fintrack.utils.error_utils import InvalidInputError
from fintrack.utils.rate_utils import normalize_rate_input


def _finite(value, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidInputError(f"{field} must be finite, got {value!r}")
    return number


class RetirementParams:
    """
    Inputs of a retirement projection, all supplied by the caller.

    Attributes:
        current_age: Age at the start of the projection (years)
        retirement_age: Target retirement age (years)
        annual_return_pct: Expected nominal annual portfolio return (%)
        annual_inflation_pct: Expected annual inflation (%)
        current_portfolio: Portfolio value today
        monthly_income: Monthly income
        monthly_expenses: Monthly expenses
        fire_multiple: Multiple of annual expenses that defines the FIRE number
    """

    def __init__(
        self,
        current_age: int,
        retirement_age: int,
        annual_return_pct: float,
        annual_inflation_pct: float,
        current_portfolio: float,
        monthly_income: float,
        monthly_expenses: float,
        fire_multiple: float = FIRE_MULTIPLE,
    ):
        current_age = _finite(current_age, "current_age")
        retirement_age = _finite(retirement_age, "retirement_age")
        if current_age < 0 or current_age != int(current_age):
            raise InvalidInputError(f"current_age must be a non-negative whole number, got {current_age}")
        if retirement_age != int(retirement_age):
            raise InvalidInputError(f"retirement_age must be a whole number, got {retirement_age}")
        if retirement_age < current_age:
            raise InvalidInputError(
                f"retirement_age ({retirement_age:g}) must not be before current_age ({current_age:g})"
            )

        self.current_age = int(current_age)
        self.retirement_age = int(retirement_age)
        self.annual_return_pct = normalize_rate_input(annual_return_pct, min_pct=-100.0, max_pct=100.0)
        self.annual_inflation_pct = normalize_rate_input(annual_inflation_pct, min_pct=-100.0, max_pct=100.0)
        self.current_portfolio = _finite(current_portfolio, "current_portfolio")
        self.monthly_income = _finite(monthly_income, "monthly_income")
        self.monthly_expenses = _finite(monthly_expenses, "monthly_expenses")
        self.fire_multiple = _finite(fire_multiple, "fire_multiple")

        if self.current_portfolio < 0:
            raise InvalidInputError(f"current_portfolio must not be negative, got {self.current_portfolio}")
        if self.monthly_income < 0:
            raise InvalidInputError(f"monthly_income must not be negative, got {self.monthly_income}")
        if self.fire_multiple <= 0:
            raise InvalidInputError(f"fire_multiple must be positive, got {self.fire_multiple}")

    @property
    def years(self) -> int:
        return self.retirement_age - self.current_age

    @property
    def monthly_savings(self) -> float:
        return self.monthly_income - self.monthly_expenses

    @property
    def annual_expenses(self) -> float:
        return self.monthly_expenses * 12

    def __repr__(self):
        return (
            f"<RetirementParams(age={self.current_age}->{self.retirement_age}, "
            f"portfolio={self.current_portfolio}, savings={self.monthly_savings})>"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_age": self.current_age,
            "retirement_age": self.retirement_age,
            "annual_return_pct": self.annual_return_pct,
            "annual_inflation_pct": self.annual_inflation_pct,
            "current_portfolio": self.current_portfolio,
            "monthly_income": self.monthly_income,
            "monthly_expenses": self.monthly_expenses,
            "fire_multiple": self.fire_multiple,
        }


class ProjectionPoint:
    """Portfolio value and inflation-adjusted FIRE target at a given age."""

    __slots__ = ("age", "portfolio_value", "fire_target")

    def __init__(self, age: int, portfolio_value: float, fire_target: float):
        self.age = age
        self.portfolio_value = portfolio_value
        self.fire_target = fire_target

    @property
    def is_financially_independent(self) -> bool:
        return self.portfolio_value >= self.fire_target

    def __eq__(self, other):
        if not isinstance(other, ProjectionPoint):
            return NotImplemented
        return (self.age, self.portfolio_value, self.fire_target) == (
            other.age,
            other.portfolio_value,
            other.fire_target,
        )

    def __repr__(self):
        return f"<ProjectionPoint(age={self.age}, portfolio={self.portfolio_value:.2f}, target={self.fire_target:.2f})>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age": self.age,
            "portfolio_value": self.portfolio_value,
            "fire_target": self.fire_target,
        }


class ProjectionResult:
    """
    Retirement projection.

    Attributes:
        params: Inputs the projection was computed from
        points: Re-iterable sequence of ProjectionPoint, one per year from
            current_age to retirement_age inclusive
        fire_number: FIRE number in today's money
        years_to_fi: Years until the portfolio first meets the inflated FIRE
            number, or None if that never happens within the horizon
        projected_portfolio_at_retirement: Portfolio value at retirement_age
        target_at_retirement: Inflated FIRE number at retirement_age
    """

    def __init__(
        self,
        params: RetirementParams,
        points: Iterable[ProjectionPoint],
        fire_number: float,
        years_to_fi: Optional[int],
        projected_portfolio_at_retirement: float,
        target_at_retirement: float,
    ):
        self.params = params
        self.points = points
        self.fire_number = fire_number
        self.years_to_fi = years_to_fi
        self.projected_portfolio_at_retirement = projected_portfolio_at_retirement
        self.target_at_retirement = target_at_retirement

    def __iter__(self) -> Iterator[ProjectionPoint]:
        return iter(self.points)

    @property
    def fi_age(self) -> Optional[int]:
        if self.years_to_fi is None:
            return None
        return self.params.current_age + self.years_to_fi

    @property
    def can_retire_at_target_age(self) -> bool:
        return self.projected_portfolio_at_retirement >= self.target_at_retirement

    @property
    def fi_percentage(self) -> float:
        """Share of the FIRE number already covered by today's portfolio, capped at 100."""
        return min(100.0, self.params.current_portfolio / self.fire_number * 100)

    def to_dataframe(self) -> pd.DataFrame:
        """Projection points as a DataFrame indexed by age."""
        df = pd.DataFrame([point.to_dict() for point in self.points])
        return df.set_index("age")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fire_number": self.fire_number,
            "monthly_savings": self.params.monthly_savings,
            "years_to_fi": self.years_to_fi,
            "fi_age": self.fi_age,
            "projected_portfolio_at_retirement": self.projected_portfolio_at_retirement,
            "target_at_retirement": self.target_at_retirement,
            "can_retire_at_target_age": self.can_retire_at_target_age,
            "fi_percentage": self.fi_percentage,
            "projection": [point.to_dict() for point in self.points],
        }
