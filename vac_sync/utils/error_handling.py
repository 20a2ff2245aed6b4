"""
Error handling utilities for standardized error logging and handling.

CLI commands funnel every failure through these helpers so that the same
error always produces the same message and exit code.
"""

import logging
import sys
import traceback
from functools import wraps
from typing import Any, Callable, TypeVar, Union

from ..exceptions import ApiError, NetworkError
from .constants import EXIT_GENERAL_ERROR

F = TypeVar("F", bound=Callable[..., Any])


def handle_api_error(error: Union[ApiError, NetworkError], operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle remote API errors with standardized logging.

    Args:
        error: The API or network error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    if isinstance(error, NetworkError):
        logging.error("Network error during %s: %s", operation, error)
    elif error.status in (401, 403):
        logging.error(
            "Authentication failed during %s: the API rejected the credentials. "
            "Please check the [auth] section of your configuration file.",
            operation,
        )
    elif error.status == 404:
        logging.error("Resource not found during %s: %s", operation, error)
    elif error.status >= 500:
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("API error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    logging.error("Error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def with_error_handling(
    operation: str, *, exit_on_error: bool = False, exit_code: int = EXIT_GENERAL_ERROR, reraise: bool = True
) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error handling.

    Args:
        operation: Description of the operation for logging
        exit_on_error: If True, call sys.exit on error
        exit_code: Exit code to use if exit_on_error is True
        reraise: If True, reraise the exception after logging (unless exiting)

    Returns:
        Decorator function

    Example:
        @with_error_handling("chart sync", exit_on_error=True)
        def run_sync():
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (ApiError, NetworkError) as e:
                handle_api_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            return None

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = [
    "handle_api_error",
    "handle_generic_error",
    "with_error_handling",
]
