"""
Test suite for constants in FinTrack.
"""

import sys
import os
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from fintrack.core.constants import (
    PrepaymentMode,
    EmiStatus,
    ETransactionType,
    FIRE_MULTIPLE,
    DEFAULT_ANNUAL_RETURN_PCT,
    DEFAULT_ANNUAL_INFLATION_PCT,
)


def test_prepayment_mode_enum():
    """Test PrepaymentMode enum values."""
    assert PrepaymentMode.REDUCE_TENURE.value == "reduce_tenure"
    assert PrepaymentMode.REDUCE_PAYMENT.value == "reduce_payment"
    assert len(PrepaymentMode) == 2


def test_prepayment_mode_from_value():
    """Test resolving members, values and legacy aliases."""
    assert PrepaymentMode.from_value(PrepaymentMode.REDUCE_TENURE) == PrepaymentMode.REDUCE_TENURE
    assert PrepaymentMode.from_value("reduce_payment") == PrepaymentMode.REDUCE_PAYMENT
    assert PrepaymentMode.from_value("reduce_emi") == PrepaymentMode.REDUCE_PAYMENT
    assert PrepaymentMode.from_value("emi_reduction") == PrepaymentMode.REDUCE_PAYMENT
    assert PrepaymentMode.from_value("tenure_reduction") == PrepaymentMode.REDUCE_TENURE


def test_prepayment_mode_invalid():
    with pytest.raises(ValueError):
        PrepaymentMode.from_value("both")


def test_emi_status_enum():
    assert EmiStatus.PENDING.value == "pending"
    assert EmiStatus.PAID.value == "paid"


def test_transaction_types():
    assert ETransactionType.INCOME == "income"
    assert ETransactionType.EXPENSE == "expense"


def test_projection_defaults():
    assert FIRE_MULTIPLE == 25
    assert DEFAULT_ANNUAL_RETURN_PCT == 10.0
    assert DEFAULT_ANNUAL_INFLATION_PCT == 6.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
