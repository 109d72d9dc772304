"""
Pydantic models for nuget-mirror.

This package contains all Pydantic models used in the application:
- nuget_api: Models for NuGet V3 API responses
- base, package, feeds, context, results: Domain models
"""

# NuGet API Response Models
from .nuget_api import (
    NuGetBaseModel,
    ServiceIndexResource,
    ServiceIndexResponse,
    VersionIndexResponse,
)

# Domain Models
from .base import MirrorBaseModel, FrozenMirrorModel
from .package import PackageIdentity, VersionSet
from .feeds import FeedEndpoint, FeedsConfig
from .results import Ok, Err, Result, TransferState, VersionTransfer, MirrorReport
from .context import MirrorContext

__all__ = [
    # NuGet API Models
    "NuGetBaseModel",
    "ServiceIndexResource",
    "ServiceIndexResponse",
    "VersionIndexResponse",
    # Domain Models
    "MirrorBaseModel",
    "FrozenMirrorModel",
    "PackageIdentity",
    "VersionSet",
    "FeedEndpoint",
    "FeedsConfig",
    "Ok",
    "Err",
    "Result",
    "TransferState",
    "VersionTransfer",
    "MirrorReport",
    "MirrorContext",
]
