"""Feed endpoint and feed configuration models."""

from typing import Dict, Optional

from pydantic import Field, field_validator

from .base import FrozenMirrorModel


class FeedEndpoint(FrozenMirrorModel):
    """
    A configured NuGet feed.

    Attributes:
        name: Name the feed is configured under
        url: NuGet V3 service index URL
        username: Optional user name for HTTP basic authentication
        password: Optional password for HTTP basic authentication
    """

    name: str = Field(min_length=1)
    url: str
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Feed URL must start with http:// or https://: {v}")
        return v

    @property
    def has_credentials(self) -> bool:
        """True when basic authentication credentials are configured."""
        return self.username is not None and self.password is not None


class FeedsConfig(FrozenMirrorModel):
    """
    Every feed available to the resolver, keyed by name.

    Attributes:
        feeds: Mapping of feed name to endpoint
    """

    feeds: Dict[str, FeedEndpoint] = Field(default_factory=dict)

    @property
    def names(self) -> list:
        """Configured feed names."""
        return list(self.feeds)


__all__ = ["FeedEndpoint", "FeedsConfig"]
