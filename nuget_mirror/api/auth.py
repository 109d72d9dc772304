"""
Authentication for NuGet feeds.

Feeds are read with optional HTTP basic credentials from the feed
configuration; publishing presents a static API key header.
"""

from typing import Generator, Optional

import httpx

from ..models.feeds import FeedEndpoint
from ..utils.constants import API_KEY_HEADER


class ApiKeyAuth(httpx.Auth):
    """
    NuGet API key authentication.

    Adds the ``X-NuGet-ApiKey`` header to every request the auth is used
    for, optionally on top of the feed's own authentication. The key is
    never included in repr output or logs.
    """

    def __init__(self, api_key: str, header_name: str = API_KEY_HEADER, inner: Optional[httpx.Auth] = None) -> None:
        """
        Initialize API key authentication.

        Args:
            api_key: Key issued by the destination feed
            header_name: Header used to carry the key
            inner: Optional feed authentication (e.g. basic auth) applied as well
        """
        if not api_key:
            raise ValueError("API key must not be empty")
        self._api_key = api_key
        self._header_name = header_name
        self._inner = inner

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        """Attach the API key header, then hand over to the inner auth if any."""
        request.headers[self._header_name] = self._api_key
        if self._inner is None:
            yield request
        else:
            yield from self._inner.auth_flow(request)

    @property
    def header_name(self) -> str:
        return self._header_name

    def __repr__(self) -> str:
        return f"ApiKeyAuth(header_name={self._header_name!r})"


def feed_auth(endpoint: FeedEndpoint) -> Optional[httpx.Auth]:
    """Return read authentication for a feed, or None for anonymous feeds."""
    if endpoint.has_credentials:
        return httpx.BasicAuth(endpoint.username or "", endpoint.password or "")
    return None


__all__ = ["ApiKeyAuth", "feed_auth"]
