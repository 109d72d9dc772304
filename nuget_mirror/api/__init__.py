"""
NuGet feed API modules.

This package provides the pieces that talk to feeds:
- Feed resolution by configured name
- NuGet V3 feed client for listing, download and publish
- API key and feed authentication
"""

from .auth import ApiKeyAuth, feed_auth
from .feed_client import FeedClient
from .feed_resolver import FeedResolver

# Import NuGet API models for convenience
from ..models.nuget_api import ServiceIndexResponse, VersionIndexResponse

__all__ = [
    "ApiKeyAuth",
    "feed_auth",
    "FeedClient",
    "FeedResolver",
    # API Models
    "ServiceIndexResponse",
    "VersionIndexResponse",
]
