"""
Utility modules for NuGet Mirror operations.
"""

from .logger import setup_logging
from .session import create_session_with_retry
from .cancellation import CancellationToken
from .versions import normalize_version

from . import constants
from . import error_handling
from . import path_utils

__all__ = [
    "setup_logging",
    "create_session_with_retry",
    "CancellationToken",
    "normalize_version",
    "constants",
    "error_handling",
    "path_utils",
]
