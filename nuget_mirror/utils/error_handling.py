"""
Error handling utilities for standardized error logging and exit codes.

This module turns terminal errors into operator-facing log messages and
decides which exit code a failed run ends with.
"""

import logging
import sys
import traceback
from typing import TYPE_CHECKING

import httpx

from .constants import EXIT_GENERAL_ERROR, EXIT_RETRYABLE_ERROR, EXIT_SUCCESS, EXIT_USER_INTERRUPT
from ..exceptions import ErrorKind

if TYPE_CHECKING:
    from ..models.results import Err

# Operator hints shown after the error message for kinds that need intervention
ERROR_HINTS = {
    ErrorKind.CONFIGURATION: "Check the feed names and the feeds configuration file.",
    ErrorKind.AUTHENTICATION: "Check the API key and its push permissions on the destination feed.",
    ErrorKind.FEED_PROTOCOL: "Check that the feed URL points at a NuGet V3 service index.",
    ErrorKind.SCRATCH_IO: "Check free space and permissions of the scratch directory.",
}


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    status_code = None
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code

    if status_code in (401, 403):
        logging.error("Authentication failed during %s: %s", operation, error)
    elif status_code == 404:
        logging.error("Resource not found during %s: %s", operation, error)
    elif status_code is not None and status_code >= 500:
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

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
    logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.error("Traceback: %s", traceback.format_exc())


def handle_mirror_error(err: "Err", operation: str) -> None:
    """
    Log a terminal mirror error in operator-facing terms.

    Args:
        err: Terminal error result of the run
        operation: Description of the operation that failed
    """
    if err.kind is ErrorKind.CANCELLED:
        logging.warning("%s cancelled: %s", operation.capitalize(), err.detail)
        return

    where = f" (version {err.version})" if err.version else ""
    logging.error("%s failed%s: [%s] %s", operation.capitalize(), where, err.kind.value, err.detail)

    if err.retryable:
        logging.error("This failure is likely transient; rerunning the mirror is safe.")
    elif err.kind in ERROR_HINTS:
        logging.error(ERROR_HINTS[err.kind])


def exit_code_for(err: "Err") -> int:
    """
    Map a terminal error onto a process exit code.

    Returns:
        EXIT_USER_INTERRUPT for cancellation, EXIT_RETRYABLE_ERROR when a
        rerun is safe, EXIT_GENERAL_ERROR otherwise
    """
    if err.kind is ErrorKind.CANCELLED:
        return EXIT_USER_INTERRUPT
    if err.retryable:
        return EXIT_RETRYABLE_ERROR
    return EXIT_GENERAL_ERROR


def log_and_exit(message: str, exit_code: int = EXIT_GENERAL_ERROR) -> None:
    """
    Log an error message and exit the program.

    Args:
        message: Error message to log
        exit_code: Exit code (default: 1)
    """
    if exit_code == EXIT_SUCCESS:
        logging.info(message)
    else:
        logging.error(message)
    sys.exit(exit_code)


__all__ = [
    "handle_http_error",
    "handle_generic_error",
    "handle_mirror_error",
    "exit_code_for",
    "log_and_exit",
]
