"""
Error handling utilities for FinTrack.

This module provides centralized error handling and logging for the finance
tracking engines. It includes the exception taxonomy used by the calculators
and a decorator for consistent error reporting across the codebase.
"""

import os
import traceback
import logging
from functools import wraps
import sys
from datetime import datetime

# Configure logging; no file handler on serverless (read-only filesystem)
_handlers = [logging.StreamHandler(sys.stdout)]
_log_file = os.getenv("LOG_FILE")
if _log_file and not os.getenv("VERCEL"):
    _handlers.append(logging.FileHandler(_log_file))

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


class FinanceTrackerError(Exception):
    """Base exception class for FinTrack errors"""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        self.timestamp = datetime.now()
        super().__init__(self.message)


class InvalidInputError(FinanceTrackerError):
    """Raised when a calculation precondition is violated by caller input."""


class ArithmeticDegenerateError(InvalidInputError):
    """Raised when inputs make the formula itself undefined (e.g. zero tenure)."""


def error_handler(func):
    """
    Decorator for handling errors and providing detailed information.

    FinanceTrackerError subclasses are re-raised untouched so callers can map
    them to a response; anything else is wrapped into FinanceTrackerError.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FinanceTrackerError as e:
            logger.info(f"{func.__name__} rejected input: {e.message}")
            raise
        except Exception as e:
            exc_type, exc_value, exc_tb = sys.exc_info()
            tb = traceback.extract_tb(exc_tb)

            # Get the most relevant parts of the traceback
            error_location = f"{tb[-1].filename}:{tb[-1].lineno}"
            error_function = tb[-1].name

            error_details = {
                "error_type": exc_type.__name__,
                "location": error_location,
                "function": error_function,
                "arguments": {"args": str(args), "kwargs": str(kwargs)},
                "traceback": traceback.format_exc(),
            }

            logger.error(f"Error in {error_location} - {error_function}: {str(e)}")
            logger.debug(f"Detailed error information: {error_details}")

            raise FinanceTrackerError(
                f"Error in {error_function} at {error_location}: {str(e)}",
                error_details,
            ) from e

    return wrapper
