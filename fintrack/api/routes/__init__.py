"""
API route modules.

Contains FastAPI routers for the calculator endpoints.
"""

from fintrack.api.routes import loans, fire_simulator

__all__ = ["loans", "fire_simulator"]
