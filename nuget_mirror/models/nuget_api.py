"""
Pydantic models for NuGet V3 API responses.

Only the fields the mirror needs are declared; anything else the server
sends is accepted and ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NuGetBaseModel(BaseModel):
    """Base model for all NuGet API responses."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ServiceIndexResource(NuGetBaseModel):
    """One entry of the service index resources list."""

    id: str = Field(alias="@id")
    type: str = Field(alias="@type")
    comment: Optional[str] = None


class ServiceIndexResponse(NuGetBaseModel):
    """Response from a feed's service index (index.json)."""

    version: str
    resources: List[ServiceIndexResource] = Field(default_factory=list)

    def find_resource(self, *resource_types: str) -> Optional[str]:
        """
        Return the URL of the first resource matching one of the given types.

        Types are tried in the order given, so callers list the preferred
        version first.
        """
        for resource_type in resource_types:
            for resource in self.resources:
                if resource.type == resource_type:
                    return resource.id.rstrip("/")
        return None


class VersionIndexResponse(NuGetBaseModel):
    """Response from PackageBaseAddress/{id}/index.json."""

    versions: List[str] = Field(default_factory=list)


__all__ = [
    "NuGetBaseModel",
    "ServiceIndexResource",
    "ServiceIndexResponse",
    "VersionIndexResponse",
]
