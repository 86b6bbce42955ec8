"""
FastAPI application for FinTrack.

Provides REST API endpoints for:
- Loan calculators (EMI, schedule, outstanding principal, prepayment, calendar)
- FIRE retirement simulation
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from fintrack import __version__
from fintrack.config import get_config
from fintrack.utils.error_utils import InvalidInputError
from fintrack.api.routes import loans, fire_simulator

logger = logging.getLogger("fintrack")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Logs the effective configuration on startup.
    """
    config = get_config()
    if not config.is_serverless:
        logger.info(f"Starting FinTrack API {__version__} with {config}")
    yield
    if not config.is_serverless:
        logger.info("Shutting down...")


app = FastAPI(
    title="FinTrack API",
    description="Personal finance calculators - loan amortization, prepayment and FIRE projections",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, detail: Any, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail, "type": type(exc).__name__},
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Precondition failures reported by the engines."""
    logger.info(f"Invalid input on {request.method} {request.url.path}: {exc.message}")
    return _error_response(400, "Invalid input", exc.message, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are bad input, not unprocessable entities."""
    logger.info(f"Rejected request on {request.method} {request.url.path}: {exc.errors()}")
    return _error_response(400, "Invalid input", str(exc), exc)


@app.exception_handler(ValidationError)
async def model_validation_handler(request: Request, exc: ValidationError):
    logger.info(f"Rejected parameters on {request.method} {request.url.path}: {exc.errors()}")
    return _error_response(400, "Invalid input", str(exc), exc)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    logger.error(traceback.format_exc())
    return _error_response(500, "Internal server error", str(exc), exc)


# Health check endpoint
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """API health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "fintrack-api",
    }


# Include routers
app.include_router(loans.router, prefix="/api/loans", tags=["Loans"])
app.include_router(fire_simulator.router, prefix="/api/fire-simulator", tags=["FIRE Simulator"])


# Root endpoint
@app.get("/")
async def root() -> Dict[str, Any]:
    """API root endpoint with service information."""
    return {
        "service": "FinTrack API",
        "version": __version__,
        "docs": "/api/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fintrack.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
