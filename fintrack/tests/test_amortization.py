"""
Test suite for the loan amortization engine.
"""

import math

import pytest

from fintrack.core.constants import PrepaymentMode
from fintrack.core.engine.amortization import (
    calculate_emi,
    generate_emi_schedule,
    calculate_outstanding_principal,
    calculate_tenure_for_emi,
    simulate_prepayment,
    calculate_total_outstanding,
    calculate_pending_amounts,
    calculate_principal_for_emi,
    calculate_loan_affordability,
    prepayment_recommendation,
)
from fintrack.utils.error_utils import InvalidInputError, ArithmeticDegenerateError

TOLERANCE = 0.01

LOANS = [
    (100000, 10, 12),
    (500000, 9, 120),
    (2500000, 8.5, 240),
    (12000, 0, 12),
    (75000, 13.25, 37),
    (1000, 24, 1),
]


class TestEmiSchedule:
    """Schedule generation and its invariants."""

    def test_reference_example(self):
        """100000 at 10% over 12 months."""
        schedule = generate_emi_schedule(100000, 10, 12)
        first = schedule[0]

        assert round(schedule.installment, 2) == 8791.59
        assert round(first.interest, 2) == 833.33
        assert round(first.principal, 2) == 7958.26
        assert first.month == 1

    def test_zero_rate_loan(self):
        """A 0% loan pays principal / n with no interest."""
        schedule = generate_emi_schedule(12000, 0, 12)

        assert schedule.installment == 1000
        for entry in schedule:
            assert entry.interest == 0
            assert entry.installment == pytest.approx(1000)
        assert schedule.total_interest == 0

    @pytest.mark.parametrize("principal,rate,tenure", LOANS)
    def test_entry_count_matches_tenure(self, principal, rate, tenure):
        schedule = generate_emi_schedule(principal, rate, tenure)
        assert len(schedule) == tenure
        assert [entry.month for entry in schedule] == list(range(1, tenure + 1))

    @pytest.mark.parametrize("principal,rate,tenure", LOANS)
    def test_principal_portions_sum_to_principal(self, principal, rate, tenure):
        schedule = generate_emi_schedule(principal, rate, tenure)
        assert abs(schedule.total_principal - principal) <= TOLERANCE

    @pytest.mark.parametrize("principal,rate,tenure", LOANS)
    def test_interest_plus_principal_is_installment(self, principal, rate, tenure):
        schedule = generate_emi_schedule(principal, rate, tenure)
        for entry in schedule.entries[:-1]:
            assert abs(entry.interest + entry.principal - schedule.installment) <= TOLERANCE
        last = schedule[-1]
        assert abs(last.interest + last.principal - last.installment) <= TOLERANCE
        assert abs(last.installment - schedule.installment) <= TOLERANCE

    @pytest.mark.parametrize("principal,rate,tenure", LOANS)
    def test_remaining_principal_decreases_to_zero(self, principal, rate, tenure):
        schedule = generate_emi_schedule(principal, rate, tenure)
        balances = [entry.remaining_principal for entry in schedule]

        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
        assert balances[-1] == 0.0

    def test_cumulative_columns(self):
        schedule = generate_emi_schedule(100000, 10, 12)
        last = schedule[-1]
        assert last.cumulative_principal == pytest.approx(100000)
        assert last.cumulative_interest == pytest.approx(schedule.total_interest)
        assert schedule.total_payment == pytest.approx(100000 + schedule.total_interest)

    def test_schedule_dataframe(self):
        df = generate_emi_schedule(100000, 10, 12).to_dataframe()
        assert len(df) == 12
        assert list(df.columns) == [
            "month",
            "installment",
            "interest",
            "principal",
            "remaining_principal",
            "cumulative_principal",
            "cumulative_interest",
        ]

    def test_calculate_emi_matches_schedule(self):
        assert calculate_emi(500000, 9, 120) == generate_emi_schedule(500000, 9, 120).installment

    def test_invalid_principal(self):
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(0, 10, 12)
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(-5000, 10, 12)

    def test_invalid_rate(self):
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(100000, -1, 12)
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(100000, "abc", 12)

    def test_zero_tenure_is_degenerate(self):
        with pytest.raises(ArithmeticDegenerateError):
            generate_emi_schedule(100000, 10, 0)

    def test_negative_or_fractional_tenure(self):
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(100000, 10, -12)
        with pytest.raises(InvalidInputError):
            generate_emi_schedule(100000, 10, 12.5)

    def test_degenerate_error_is_invalid_input(self):
        """Callers catching InvalidInputError also see zero-tenure failures."""
        with pytest.raises(InvalidInputError):
            calculate_emi(100000, 10, 0)


class TestLongTenures:
    """Very long or very expensive loans stay finite."""

    def test_installment_tends_to_interest_only(self):
        schedule = generate_emi_schedule(100000, 100, 20000)

        assert math.isfinite(schedule.installment)
        assert schedule.installment == pytest.approx(100000 * 100 / 12 / 100)
        assert abs(schedule.total_principal - 100000) <= TOLERANCE
        assert schedule[-1].remaining_principal == 0.0
        assert all(math.isfinite(entry.interest) for entry in schedule)

    def test_prepayment_on_long_loan(self):
        result = simulate_prepayment(100000, 100, 20000, 10, PrepaymentMode.REDUCE_TENURE)

        assert result.new_tenure < 20000
        assert math.isfinite(result.interest_savings)
        assert result.updated_schedule[-1].remaining_principal == 0.0

    def test_principal_for_emi_long_tenure(self):
        assert calculate_principal_for_emi(1000, 100, 20000) == pytest.approx(1000 / (100 / 12 / 100))

    def test_principal_portions_never_negative(self):
        schedule = generate_emi_schedule(1e9, 99.99, 600)
        balances = [entry.remaining_principal for entry in schedule]

        assert all(entry.principal >= 0 for entry in schedule)
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
        assert balances[-1] == 0.0


class TestOutstandingPrincipal:
    """Remaining principal at an arbitrary elapsed point."""

    @pytest.mark.parametrize("principal,rate,tenure", LOANS)
    def test_boundaries(self, principal, rate, tenure):
        assert calculate_outstanding_principal(principal, rate, tenure, 0) == principal
        assert abs(calculate_outstanding_principal(principal, rate, tenure, tenure)) <= TOLERANCE

    def test_past_tenure_is_zero(self):
        assert calculate_outstanding_principal(100000, 10, 12, 30) == 0.0

    def test_matches_schedule(self):
        schedule = generate_emi_schedule(500000, 9, 120)
        assert calculate_outstanding_principal(500000, 9, 120, 37) == pytest.approx(
            schedule[36].remaining_principal
        )

    def test_negative_elapsed_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_outstanding_principal(100000, 10, 12, -1)

    def test_fractional_elapsed_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_outstanding_principal(100000, 10, 12, 2.5)


class TestTenureForEmi:
    def test_round_trip_with_calculate_emi(self):
        installment = calculate_emi(100000, 10, 12)
        assert calculate_tenure_for_emi(100000, 10, installment) == 12

    def test_rounds_up(self):
        installment = calculate_emi(100000, 10, 12)
        assert calculate_tenure_for_emi(100000, 10, installment - 50) == 13

    def test_zero_rate(self):
        assert calculate_tenure_for_emi(12000, 0, 1000) == 12
        assert calculate_tenure_for_emi(12500, 0, 1000) == 13

    def test_installment_below_interest(self):
        with pytest.raises(InvalidInputError):
            calculate_tenure_for_emi(100000, 12, 1000)


class TestPrepayment:
    """Prepayment simulation in both modes."""

    def test_reduce_tenure(self):
        result = simulate_prepayment(500000, 9, 120, 100000, PrepaymentMode.REDUCE_TENURE)

        assert result.mode == PrepaymentMode.REDUCE_TENURE
        assert result.original_tenure == 120
        assert result.new_tenure == 86
        assert result.tenure_reduction == 34
        assert result.new_installment is None
        assert result.interest_savings > 0
        assert len(result.updated_schedule) == result.new_tenure

    def test_reduce_tenure_keeps_installment(self):
        result = simulate_prepayment(500000, 9, 120, 100000, "reduce_tenure")
        schedule = result.updated_schedule

        for entry in schedule.entries[:-1]:
            assert entry.installment == pytest.approx(result.original_installment)
        assert schedule[-1].installment <= result.original_installment + TOLERANCE
        assert schedule[-1].remaining_principal == 0.0
        assert schedule.total_principal == pytest.approx(400000)

    def test_reduce_payment(self):
        result = simulate_prepayment(500000, 9, 120, 100000, PrepaymentMode.REDUCE_PAYMENT)

        assert result.mode == PrepaymentMode.REDUCE_PAYMENT
        assert result.new_tenure == 120
        assert result.tenure_reduction == 0
        assert result.new_installment < result.original_installment
        assert result.new_installment == pytest.approx(calculate_emi(400000, 9, 120))
        assert result.interest_savings > 0

    def test_reduce_tenure_saves_more_interest(self):
        tenure = simulate_prepayment(500000, 9, 120, 100000, PrepaymentMode.REDUCE_TENURE)
        payment = simulate_prepayment(500000, 9, 120, 100000, PrepaymentMode.REDUCE_PAYMENT)
        assert tenure.interest_savings > payment.interest_savings

    def test_savings_is_interest_difference(self):
        result = simulate_prepayment(250000, 11, 60, 40000, PrepaymentMode.REDUCE_PAYMENT)
        original = generate_emi_schedule(250000, 11, 60)
        assert result.original_total_interest == pytest.approx(original.total_interest)
        assert result.interest_savings == pytest.approx(result.original_total_interest - result.new_total_interest)

    @pytest.mark.parametrize("amount", [100000, 150000])
    def test_rejects_full_or_over_payment(self, amount):
        with pytest.raises(InvalidInputError):
            simulate_prepayment(100000, 10, 12, amount, PrepaymentMode.REDUCE_TENURE)

    def test_rejects_non_positive_prepayment(self):
        with pytest.raises(InvalidInputError):
            simulate_prepayment(100000, 10, 12, 0, PrepaymentMode.REDUCE_TENURE)

    def test_legacy_mode_alias(self):
        result = simulate_prepayment(100000, 10, 12, 20000, "reduce_emi")
        assert result.mode == PrepaymentMode.REDUCE_PAYMENT

    def test_unknown_mode(self):
        with pytest.raises(InvalidInputError):
            simulate_prepayment(100000, 10, 12, 20000, "both")

    def test_zero_rate_loan(self):
        result = simulate_prepayment(12000, 0, 12, 3000, PrepaymentMode.REDUCE_TENURE)
        assert result.new_tenure == 9
        assert result.interest_savings == 0

    @pytest.mark.parametrize("principal,rate,tenure", [(500000, 9, 120), (75000, 13.25, 37), (12000, 0, 12)])
    def test_modes_never_worsen_terms(self, principal, rate, tenure):
        tenure_result = simulate_prepayment(principal, rate, tenure, principal * 0.3, PrepaymentMode.REDUCE_TENURE)
        payment_result = simulate_prepayment(principal, rate, tenure, principal * 0.3, PrepaymentMode.REDUCE_PAYMENT)

        assert tenure_result.new_tenure <= tenure
        assert payment_result.new_installment <= payment_result.original_installment

    def test_to_dict(self):
        data = simulate_prepayment(100000, 10, 12, 20000, PrepaymentMode.REDUCE_TENURE).to_dict()
        assert data["mode"] == "reduce_tenure"
        assert data["tenure_reduction"] == data["original_tenure"] - data["new_tenure"]
        assert len(data["updated_schedule"]) == data["new_tenure"]


class TestOutstandingAmounts:
    def test_pending_amounts(self):
        pending = calculate_pending_amounts(500000, 9, 120, 24)

        assert pending["pending_principal"] == pytest.approx(calculate_outstanding_principal(500000, 9, 120, 24))
        assert pending["total_pending"] == pytest.approx(pending["pending_principal"] + pending["pending_interest"])

    def test_pending_amounts_ignore_partial_month(self):
        assert calculate_pending_amounts(500000, 9, 120, 24.7) == calculate_pending_amounts(500000, 9, 120, 24)

    def test_pending_amounts_after_tenure(self):
        assert calculate_pending_amounts(100000, 10, 12, 12) == {
            "pending_principal": 0.0,
            "pending_interest": 0.0,
            "total_pending": 0.0,
        }

    def test_total_outstanding(self):
        schedule = generate_emi_schedule(100000, 10, 12)
        assert calculate_total_outstanding(100000, 10, 12) == pytest.approx(schedule.total_payment)
        assert calculate_total_outstanding(100000, 10, 0) == 0.0


class TestAffordability:
    def test_principal_for_emi_inverts_emi(self):
        installment = calculate_emi(100000, 10, 12)
        assert calculate_principal_for_emi(installment, 10, 12) == pytest.approx(100000)

    def test_affordable(self):
        result = calculate_loan_affordability(100000)
        assert result["max_emi"] == pytest.approx(40000)
        assert result["max_loan_amount"] == pytest.approx(calculate_principal_for_emi(40000, 10, 240))
        assert result["recommendation"] == "Loan is affordable within recommended limits"

    def test_tight_budget(self):
        result = calculate_loan_affordability(10000, existing_emis=1000)
        assert result["max_emi"] == pytest.approx(3000)
        assert "Consider increasing income" in result["recommendation"]

    def test_over_committed(self):
        result = calculate_loan_affordability(10000, existing_emis=5000)
        assert result["max_emi"] == 0
        assert result["max_loan_amount"] == 0
        assert "exceed" in result["recommendation"]

    def test_invalid_ratio(self):
        with pytest.raises(InvalidInputError):
            calculate_loan_affordability(10000, debt_to_income_ratio=1.5)


def test_prepayment_recommendation():
    long_loan = simulate_prepayment(2500000, 8.5, 240, 500000, PrepaymentMode.REDUCE_TENURE)
    assert prepayment_recommendation(long_loan, 500000).startswith("Excellent")

    short_loan = simulate_prepayment(100000, 10, 6, 10000, PrepaymentMode.REDUCE_PAYMENT)
    assert prepayment_recommendation(short_loan, 10000).startswith("Consider")
