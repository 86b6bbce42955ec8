"""
Application configuration for FinTrack.

Values come from environment variables, optionally loaded from a .env file.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

from fintrack.core.constants import (
    DEFAULT_ANNUAL_RETURN_PCT,
    DEFAULT_ANNUAL_INFLATION_PCT,
    FIRE_MULTIPLE,
    GOLD_RATE_PER_GRAM,
)

# Load environment variables from .env file
load_dotenv()


_DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001,http://localhost:5173"


class AppConfig:
    """Configuration from environment variables."""

    def __init__(self):
        self.cors_origins: List[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS).split(",") if o.strip()
        ]
        self.is_serverless = bool(os.getenv("VERCEL"))

        # FIRE simulator defaults (annual percentages)
        self.fire_default_return_pct = float(os.getenv("FIRE_DEFAULT_RETURN_PCT", DEFAULT_ANNUAL_RETURN_PCT))
        self.fire_default_inflation_pct = float(os.getenv("FIRE_DEFAULT_INFLATION_PCT", DEFAULT_ANNUAL_INFLATION_PCT))
        self.fire_multiple = float(os.getenv("FIRE_MULTIPLE", FIRE_MULTIPLE))

        # Valuation of gold holdings when deriving the current portfolio
        self.gold_rate_per_gram = float(os.getenv("GOLD_RATE_PER_GRAM", GOLD_RATE_PER_GRAM))

    def __repr__(self):
        return (
            f"<AppConfig(return={self.fire_default_return_pct}%, inflation={self.fire_default_inflation_pct}%, "
            f"multiple={self.fire_multiple}, serverless={self.is_serverless})>"
        )


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create cached configuration."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
