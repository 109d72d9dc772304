"""
Feed client protocol for type safety.

This module defines the capability set the mirror pipeline needs from a
feed client. FeedClient implements it over NuGet V3; tests implement it
with in-memory fakes.
"""

from pathlib import Path
from typing import List, Optional, Protocol, runtime_checkable

from ..models.feeds import FeedEndpoint
from ..models.package import PackageIdentity
from ..utils.cancellation import CancellationToken


@runtime_checkable
class FeedClientProtocol(Protocol):
    """
    Protocol defining the operations the mirror performs against a feed.

    Implementations raise the exceptions from ``nuget_mirror.exceptions``:
    FeedUnreachable/FeedProtocolError from listing, DownloadFailure or
    ScratchIOError from download, and PublishFailure (or one of its
    subclasses) from publish.
    """

    endpoint: FeedEndpoint

    def list_versions(self, package_name: str) -> List[str]:
        """
        List every version the feed reports for a package.

        Args:
            package_name: Package id

        Returns:
            Version strings in feed order; empty if the package is unknown
        """
        ...

    def download_artifact(
        self, identity: PackageIdentity, destination: Path, cancel_token: Optional[CancellationToken] = None
    ) -> Path:
        """
        Download a package artifact to a local file.

        Args:
            identity: Package name and version to fetch
            destination: File to write the artifact bytes to
            cancel_token: Optional run-scoped cancellation token

        Returns:
            Path of the written file
        """
        ...

    def publish_artifact(self, file_path: Path, api_key: str, timeout: float) -> None:
        """
        Publish a package artifact to the feed.

        Args:
            file_path: Local .nupkg file
            api_key: Credential presented to the feed
            timeout: Seconds allowed for the publish call
        """
        ...


__all__ = ["FeedClientProtocol"]
