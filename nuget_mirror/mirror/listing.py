"""
Version listing for source and destination feeds.

Listing is read-only and idempotent, so transient feed failures are retried
with exponential backoff. Protocol errors are never retried.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

from ..exceptions import FeedUnreachable, MirrorError
from ..models.package import VersionSet
from ..models.results import Err, Ok, Result
from ..protocols import FeedClientProtocol
from ..utils.cancellation import CancellationToken
from ..utils.constants import LIST_BACKOFF_MULTIPLIER, LIST_INITIAL_BACKOFF, LIST_MAX_ATTEMPTS


def list_versions(
    client: FeedClientProtocol,
    package_name: str,
    *,
    max_attempts: int = LIST_MAX_ATTEMPTS,
    backoff: float = LIST_INITIAL_BACKOFF,
    cancel_token: Optional[CancellationToken] = None,
) -> VersionSet:
    """
    List all versions a feed reports for a package.

    Args:
        client: Feed to query
        package_name: Package id, must not be empty
        max_attempts: Total attempts when the feed is unreachable
        backoff: Delay before the first retry, multiplied after each retry
        cancel_token: Optional token that interrupts retries and backoff waits

    Returns:
        VersionSet in feed order (empty when the feed does not know the package)

    Raises:
        ValueError: If package_name is empty
        FeedUnreachable: If every attempt failed to reach the feed
        FeedProtocolError: If the feed answered with an invalid response
        MirrorCancelled: If cancellation was requested
    """
    if not package_name or not package_name.strip():
        raise ValueError("package_name must not be empty")

    feed_name = client.endpoint.name
    wait_time = backoff
    attempt = 1
    while True:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        try:
            versions = client.list_versions(package_name)
            break
        except FeedUnreachable as e:
            if attempt >= max_attempts:
                logging.error("Giving up listing %s on feed '%s' after %d attempt(s)", package_name, feed_name, attempt)
                raise
            logging.warning(
                "Listing %s on feed '%s' failed (attempt %d/%d): %s; retrying in %.1fs",
                package_name,
                feed_name,
                attempt,
                max_attempts,
                e,
                wait_time,
            )
            if cancel_token is not None:
                cancel_token.sleep(wait_time)
            else:
                time.sleep(wait_time)
            wait_time *= LIST_BACKOFF_MULTIPLIER
            attempt += 1

    version_set = VersionSet(feed_name=feed_name, package_name=package_name, versions=versions)
    logging.info("Feed '%s' has %d version(s) of %s", feed_name, len(version_set), package_name)
    return version_set


def list_source_and_destination(
    source: FeedClientProtocol,
    destination: FeedClientProtocol,
    package_name: str,
    *,
    max_attempts: int = LIST_MAX_ATTEMPTS,
    backoff: float = LIST_INITIAL_BACKOFF,
    cancel_token: Optional[CancellationToken] = None,
) -> Result[Tuple[VersionSet, VersionSet]]:
    """
    List a package on both feeds concurrently.

    Both listings always run to completion before this returns, so the diff
    works on one consistent snapshot taken at the start of the run.

    Returns:
        Ok((source_versions, destination_versions)), or Err for the first
        failing feed (source first)
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="list_versions") as executor:
        futures = [
            executor.submit(
                list_versions,
                client,
                package_name,
                max_attempts=max_attempts,
                backoff=backoff,
                cancel_token=cancel_token,
            )
            for client in (source, destination)
        ]
        outcomes = []
        for future in futures:
            try:
                outcomes.append(future.result())
            except MirrorError as e:
                outcomes.append(Err.from_exception(e))

    for outcome in outcomes:
        if isinstance(outcome, Err):
            return outcome
    return Ok(value=(outcomes[0], outcomes[1]))


__all__ = ["list_versions", "list_source_and_destination"]
