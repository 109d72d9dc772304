"""
Protocols and abstract base classes for type safety.

This package provides protocols that define interfaces for
various components, enabling better type checking and abstraction.
"""

from .feed_protocol import FeedClientProtocol

__all__ = ["FeedClientProtocol"]
