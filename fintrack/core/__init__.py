"""
Core modules for FinTrack.

This package contains the domain value objects, constants, and financial
calculation engines.
"""

from fintrack.core.constants import (
    PrepaymentMode,
    EmiStatus,
    ETransactionType,
    FIRE_MULTIPLE,
    DEFAULT_ANNUAL_RETURN_PCT,
    DEFAULT_ANNUAL_INFLATION_PCT,
)

__all__ = [
    "PrepaymentMode",
    "EmiStatus",
    "ETransactionType",
    "FIRE_MULTIPLE",
    "DEFAULT_ANNUAL_RETURN_PCT",
    "DEFAULT_ANNUAL_INFLATION_PCT",
]
