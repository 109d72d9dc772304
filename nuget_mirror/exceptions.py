"""
Error taxonomy for mirror runs.

Every failure a run can hit maps onto one ErrorKind. Each exception class
also records whether the failure is safe to fix by rerunning the tool
(transient network trouble, a version that already exists) or needs an
operator to step in (bad credential, misconfigured feed name).
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failure that can terminate a mirror run."""

    CONFIGURATION = "configuration"
    FEED_UNREACHABLE = "feed_unreachable"
    FEED_PROTOCOL = "feed_protocol"
    DOWNLOAD_FAILURE = "download_failure"
    PUBLISH_FAILURE = "publish_failure"
    AUTHENTICATION = "authentication"
    DUPLICATE_VERSION = "duplicate_version"
    SCRATCH_IO = "scratch_io"
    CANCELLED = "cancelled"


class MirrorError(Exception):
    """Base class for all errors raised while mirroring a package."""

    kind: ErrorKind = ErrorKind.CONFIGURATION
    retryable: bool = False

    def __init__(self, message: str, *, retryable: Optional[bool] = None, version: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.version = version
        if retryable is not None:
            self.retryable = retryable


class ConfigurationError(MirrorError):
    """Feed configuration is missing, unreadable or incomplete."""

    kind = ErrorKind.CONFIGURATION


class FeedNotFound(ConfigurationError):
    """No configured feed matches the requested name exactly."""

    def __init__(self, name: str, available: Optional[list] = None) -> None:
        configured = ", ".join(sorted(available)) if available else "none"
        super().__init__(f"No feed named '{name}' is configured (configured feeds: {configured})")
        self.name = name


class FeedUnreachable(MirrorError):
    """Network or transport failure while talking to a feed."""

    kind = ErrorKind.FEED_UNREACHABLE
    retryable = True


class FeedProtocolError(MirrorError):
    """A feed answered with something that is not a valid NuGet V3 response."""

    kind = ErrorKind.FEED_PROTOCOL


class DownloadFailure(MirrorError):
    """Fetching a package artifact from the source feed failed."""

    kind = ErrorKind.DOWNLOAD_FAILURE
    retryable = True


class PublishFailure(MirrorError):
    """The destination feed rejected a package or could not be reached."""

    kind = ErrorKind.PUBLISH_FAILURE


class PublishAuthenticationError(PublishFailure):
    """The destination feed refused the API key."""

    kind = ErrorKind.AUTHENTICATION
    retryable = False


class DuplicateVersionError(PublishFailure):
    """The destination feed already holds this package version."""

    kind = ErrorKind.DUPLICATE_VERSION
    retryable = True


class ScratchIOError(MirrorError):
    """Reading or writing the local scratch artifact failed."""

    kind = ErrorKind.SCRATCH_IO


class MirrorCancelled(MirrorError):
    """The operator cancelled the run."""

    kind = ErrorKind.CANCELLED


__all__ = [
    "ErrorKind",
    "MirrorError",
    "ConfigurationError",
    "FeedNotFound",
    "FeedUnreachable",
    "FeedProtocolError",
    "DownloadFailure",
    "PublishFailure",
    "PublishAuthenticationError",
    "DuplicateVersionError",
    "ScratchIOError",
    "MirrorCancelled",
]
