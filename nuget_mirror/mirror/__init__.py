"""
Mirror pipeline.

This package holds the core of the tool:

Modules:
    - listing: Version listing with bounded retry for both feeds
    - diff: Missing-version computation
    - driver: Per-version download and publish with scratch-file cleanup
    - reporting: Run summary logging
"""

from .listing import list_versions, list_source_and_destination
from .diff import compute_missing
from .driver import TransferDriver, scratch_artifact
from .reporting import format_summary, log_mirror_summary

__all__ = [
    "list_versions",
    "list_source_and_destination",
    "compute_missing",
    "TransferDriver",
    "scratch_artifact",
    "format_summary",
    "log_mirror_summary",
]
