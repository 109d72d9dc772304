"""
Reporting utilities for mirror runs.

The one-line summary is logged at WARNING so it is visible at default
verbosity; per-version detail goes to INFO and DEBUG.
"""

import logging
from typing import List

from ..models.results import MirrorReport
from ..utils.constants import SEPARATOR_WIDTH


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def format_summary(report: MirrorReport) -> str:
    """
    Build the one-line summary of a run.

    Example:
        >>> format_summary(report)
        "Foo: 3 versions missing on 'internal' of 10 on 'nuget': 2 mirrored, 1 failed"
    """
    head = (
        f"{report.package}: {_plural(len(report.missing), 'version')} missing on "
        f"'{report.destination}' of {report.source_count} on '{report.source}'"
    )
    if report.dry_run:
        return f"{head} (dry run, nothing transferred)"
    if not report.missing:
        return f"{head}; destination is up to date"

    parts: List[str] = [f"{len(report.mirrored)} mirrored"]
    if report.already_present:
        parts.append(f"{len(report.already_present)} already present")
    if report.failed:
        parts.append(f"{len(report.failed)} failed")
    if report.not_attempted:
        parts.append(f"{len(report.not_attempted)} not attempted")
    return f"{head}: {', '.join(parts)}"


def log_mirror_summary(report: MirrorReport) -> None:
    """Log the run summary followed by per-version details."""
    logging.info("=" * SEPARATOR_WIDTH)
    logging.warning(format_summary(report))

    if report.dry_run and report.missing:
        logging.warning("Missing versions: %s", ", ".join(report.missing))

    for transfer in report.transfers:
        if transfer.error is not None:
            logging.info("  %s: %s (%s)", transfer.version, transfer.state.value, transfer.error.detail)
        else:
            suffix = " (already present)" if transfer.already_existed else ""
            logging.info("  %s: %s%s", transfer.version, transfer.state.value, suffix)
        if transfer.scratch_path:
            logging.debug("  %s scratch file: %s", transfer.version, transfer.scratch_path)

    logging.debug(
        "Source '%s': %d version(s); destination '%s': %d version(s) before the run",
        report.source,
        report.source_count,
        report.destination,
        report.destination_count,
    )
    logging.info("=" * SEPARATOR_WIDTH)


__all__ = ["format_summary", "log_mirror_summary"]
