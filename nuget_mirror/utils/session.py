"""
Session utilities for feed operations.

This module provides utilities for creating and configuring HTTP clients
with transport retries and connection pooling.
"""

from typing import Optional
import importlib.util
import logging

import httpx
from httpx import HTTPTransport

from .._version import __version__

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport (connect errors only)
MAX_RETRIES = 3

USER_AGENT = f"nuget-mirror/{__version__}"


def create_session_with_retry(
    auth: Optional[httpx.Auth] = None, timeout: float = 100.0, max_connections: int = 10
) -> httpx.Client:
    """
    Create an httpx client with retry strategy and connection pooling.

    Args:
        auth: Optional authentication applied to every request (e.g. feed basic auth)
        timeout: Default timeout in seconds for requests made with this client
        max_connections: Maximum number of connections in the pool

    Returns:
        Configured httpx.Client object with:
        - Transport-level retries for failed connection attempts
        - HTTP/2 when the h2 package is installed
        - Redirect following (flat container downloads are often redirected to blob storage)
        - Timeout configuration

    Example:
        >>> client = create_session_with_retry()
        >>> response = client.get("https://api.nuget.org/v3/index.json")
        >>> # Authenticated private feed with a longer timeout
        >>> client = create_session_with_retry(auth=httpx.BasicAuth("user", "token"), timeout=300.0)
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(5, max_connections // 2),
    )
    timeout_config = httpx.Timeout(timeout, connect=10.0)

    use_http2 = importlib.util.find_spec("h2") is not None
    if not use_http2:
        logging.debug("HTTP/2 support not available (h2 package not installed)")

    transport = HTTPTransport(limits=limits, retries=MAX_RETRIES, http2=use_http2)

    return httpx.Client(
        transport=transport,
        auth=auth,
        timeout=timeout_config,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT, "Accept-Encoding": "gzip, deflate"},
        http2=use_http2,
    )


__all__ = ["create_session_with_retry"]
