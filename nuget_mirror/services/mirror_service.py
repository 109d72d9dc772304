"""
Mirror service for high-level mirror operations.

This module provides a service layer that composes the pipeline:
feed resolution, listing on both feeds, the missing-version diff and the
transfer driver. Every stage hands back a tagged result; the first Err
ends the run.
"""

import logging
from typing import Callable, List, Optional, Tuple

from ..api import FeedClient, FeedResolver
from ..exceptions import MirrorError
from ..mirror import TransferDriver, compute_missing, list_source_and_destination, log_mirror_summary
from ..models.context import MirrorContext
from ..models.feeds import FeedEndpoint
from ..models.package import VersionSet
from ..models.results import Err, MirrorReport, Ok, Result, VersionTransfer
from ..protocols import FeedClientProtocol
from ..utils.cancellation import CancellationToken
from ..utils.constants import LIST_INITIAL_BACKOFF
from ..utils.versions import normalize_version

ClientFactory = Callable[[FeedEndpoint], FeedClientProtocol]


class MirrorService:
    """
    High-level service for mirroring one package between two feeds.

    This service provides a clean interface over the pipeline so the CLI
    (and tests) only deal with a MirrorContext going in and a
    Result[MirrorReport] coming out.
    """

    def __init__(
        self,
        resolver: FeedResolver,
        client_factory: ClientFactory = FeedClient,
        cancel_token: Optional[CancellationToken] = None,
        list_backoff: float = LIST_INITIAL_BACKOFF,
    ) -> None:
        """
        Initialize the mirror service.

        Args:
            resolver: Resolves feed names to endpoints
            client_factory: Builds a feed client for an endpoint
            cancel_token: Run-scoped cancellation token shared by every stage
            list_backoff: Initial delay between listing retries
        """
        self.resolver = resolver
        self.client_factory = client_factory
        self.cancel_token = cancel_token or CancellationToken()
        self.list_backoff = list_backoff

    def resolve_feeds(self, context: MirrorContext) -> Result[Tuple[FeedEndpoint, FeedEndpoint]]:
        """
        Resolve source and destination feeds.

        Returns:
            Ok((source, destination)) or Err(CONFIGURATION)
        """
        try:
            source, destination = self.resolver.resolve_pair(context.source, context.destination)
        except MirrorError as e:
            return Err.from_exception(e)
        logging.info("Source feed '%s': %s", source.name, source.url)
        logging.info("Destination feed '%s': %s", destination.name, destination.url)
        return Ok(value=(source, destination))

    def list_feeds(
        self, context: MirrorContext, source: FeedClientProtocol, destination: FeedClientProtocol
    ) -> Result[Tuple[VersionSet, VersionSet]]:
        """List the package on both feeds."""
        logging.info("Listing versions of %s on both feeds", context.package)
        return list_source_and_destination(
            source,
            destination,
            context.package,
            max_attempts=context.list_attempts,
            backoff=self.list_backoff,
            cancel_token=self.cancel_token,
        )

    def find_missing(self, context: MirrorContext, source_set: VersionSet, destination_set: VersionSet) -> List[str]:
        """Compute the versions to mirror, in source order."""
        key = normalize_version if context.normalize_versions else None
        missing = compute_missing(source_set, destination_set, key=key)
        logging.info("%d version(s) of %s missing on '%s'", len(missing), context.package, context.destination)
        return missing

    def transfer(
        self,
        context: MirrorContext,
        source: FeedClientProtocol,
        destination: FeedClientProtocol,
        transfers: List[VersionTransfer],
    ) -> Result[List[VersionTransfer]]:
        """Download and publish every planned version."""
        driver = TransferDriver(
            source,
            destination,
            context.api_key,
            scratch_dir=context.scratch_dir,
            publish_timeout=context.publish_timeout,
            max_workers=context.max_workers,
            continue_on_error=context.continue_on_error,
            skip_duplicates=context.skip_duplicates,
            cancel_token=self.cancel_token,
        )
        return driver.execute(transfers)

    def run(self, context: MirrorContext) -> Result[MirrorReport]:
        """
        Mirror the context's package from source to destination.

        Args:
            context: Run settings

        Returns:
            Ok(report) when every missing version reached the destination (or
            on a dry run); otherwise the first Err, carrying the partial
            report when the failure happened during transfer
        """
        resolved = self.resolve_feeds(context)
        if isinstance(resolved, Err):
            return resolved
        source_endpoint, destination_endpoint = resolved.value

        source = self.client_factory(source_endpoint)
        destination = self.client_factory(destination_endpoint)
        try:
            listed = self.list_feeds(context, source, destination)
            if isinstance(listed, Err):
                return listed
            source_set, destination_set = listed.value

            missing = self.find_missing(context, source_set, destination_set)
            transfers = [] if context.dry_run else TransferDriver.plan(context.package, missing)
            outcome = self.transfer(context, source, destination, transfers)

            report = MirrorReport(
                package=context.package,
                source=source_endpoint.name,
                destination=destination_endpoint.name,
                source_count=len(source_set),
                destination_count=len(destination_set),
                missing=missing,
                transfers=transfers,
                dry_run=context.dry_run,
            )
            log_mirror_summary(report)

            if isinstance(outcome, Err):
                return outcome.with_report(report)
            return Ok(value=report)
        finally:
            for client in (source, destination):
                close = getattr(client, "close", None)
                if close is not None:
                    close()


__all__ = ["MirrorService"]
