"""
Logging configuration for NuGet Mirror.

The CLI calls setup_logging once; every other module logs through the
standard logging functions.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbosity: int = 0) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)

    Verbosity Levels:
        0 (default): WARNING - Per-version progress lines, summary and errors
        1 (-d):      INFO - Feed resolution, listing counts and transfer details
        2 (-dd):     DEBUG - Scratch paths, retries and tracebacks
        3+ (-ddd):   DEBUG - Everything above plus HTTP request logs
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(level=level, format=LOG_FORMAT)

    # httpx logs every request at INFO, which drowns out per-version progress
    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)


__all__ = ["setup_logging"]
