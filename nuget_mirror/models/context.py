"""Context and configuration models for mirror runs."""

from typing import Optional

from pydantic import Field, field_validator

from .base import MirrorBaseModel
from ..utils.constants import DEFAULT_PUBLISH_TIMEOUT, DEFAULT_MAX_WORKERS, LIST_MAX_ATTEMPTS


class MirrorContext(MirrorBaseModel):
    """
    Context information for a mirror run.

    Attributes:
        package: Package id to mirror
        source: Name of the configured source feed
        destination: Name of the configured destination feed
        api_key: API key presented to the destination feed on publish
        config: Optional path to the feeds configuration file
        debug: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        max_workers: Number of versions transferred at once (1 keeps push order strict)
        continue_on_error: Keep going after a version fails instead of stopping the run
        skip_duplicates: Treat "already exists" from the destination as success
        normalize_versions: Compare versions after NuGet normalization instead of exact strings
        dry_run: Only report missing versions, transfer nothing
        scratch_dir: Directory for downloaded artifacts (system temp dir if unset)
        publish_timeout: Seconds allowed for each publish call
        list_attempts: Attempts allowed for each version listing
    """

    package: str
    source: str
    destination: str
    api_key: str = Field(repr=False)
    config: Optional[str] = None
    debug: int = 0
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=32)
    continue_on_error: bool = False
    skip_duplicates: bool = True
    normalize_versions: bool = False
    dry_run: bool = False
    scratch_dir: Optional[str] = None
    publish_timeout: float = Field(default=DEFAULT_PUBLISH_TIMEOUT, gt=0)
    list_attempts: int = Field(default=LIST_MAX_ATTEMPTS, ge=1)

    @field_validator("package", "source", "destination")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only names."""
        if not v.strip():
            raise ValueError("Value must not be empty")
        return v.strip()


__all__ = ["MirrorContext"]
