"""
Feed resolution by configured name.

The resolver is built from an explicit FeedsConfig so callers (and tests)
decide where feed definitions come from.
"""

import logging
from typing import Tuple

from ..exceptions import FeedNotFound
from ..models.feeds import FeedEndpoint, FeedsConfig


class FeedResolver:
    """Looks up configured feeds by exact name."""

    def __init__(self, config: FeedsConfig) -> None:
        """
        Initialize the resolver.

        Args:
            config: Every feed the resolver may hand out
        """
        self.config = config

    def resolve(self, name: str) -> FeedEndpoint:
        """
        Resolve a feed name to its endpoint.

        Args:
            name: Feed name, matched exactly (case-sensitive)

        Returns:
            The configured FeedEndpoint

        Raises:
            FeedNotFound: If no feed has exactly this name
        """
        endpoint = self.config.feeds.get(name)
        if endpoint is None:
            raise FeedNotFound(name, self.config.names)
        logging.debug("Resolved feed '%s' to %s", name, endpoint.url)
        return endpoint

    def resolve_pair(self, source: str, destination: str) -> Tuple[FeedEndpoint, FeedEndpoint]:
        """
        Resolve source and destination feeds together.

        Both names are checked before anything talks to the network.

        Returns:
            Tuple of (source_endpoint, destination_endpoint)
        """
        return self.resolve(source), self.resolve(destination)


__all__ = ["FeedResolver"]
