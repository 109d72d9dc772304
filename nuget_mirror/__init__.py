"""
NuGet Mirror - copy missing package versions between NuGet feeds.

This package lists every version of a package on a source feed, works out
which of them the destination feed lacks, and downloads and republishes
each missing version with an API key.
"""

from ._version import __version__

__author__ = "NuGet Mirror Maintainers"

# Import main classes and functions for easy access
from .api import ApiKeyAuth, FeedClient, FeedResolver
from .mirror import TransferDriver, compute_missing, list_versions
from .services import MirrorService
from .utils import create_session_with_retry, setup_logging
from .cli import main as cli_main, mirror as cli_command

__all__ = [
    "__version__",
    "ApiKeyAuth",
    "FeedClient",
    "FeedResolver",
    "TransferDriver",
    "compute_missing",
    "list_versions",
    "MirrorService",
    "setup_logging",
    "create_session_with_retry",
    "cli_main",
    "cli_command",
]
