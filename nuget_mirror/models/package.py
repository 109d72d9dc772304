"""Package identity and version set models."""

from typing import List

from pydantic import Field, field_validator

from .base import FrozenMirrorModel


class PackageIdentity(FrozenMirrorModel):
    """
    One publishable artifact: a package name at a specific version.

    Attributes:
        name: Package id as given by the operator
        version: Version string exactly as the source feed reports it
    """

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)

    @property
    def lower_id(self) -> str:
        """Package id as used in NuGet V3 flat container URLs."""
        return self.name.lower()

    @property
    def lower_version(self) -> str:
        """Version as used in NuGet V3 flat container URLs."""
        return self.version.lower()

    @property
    def nupkg_file_name(self) -> str:
        """Canonical .nupkg file name for this identity."""
        return f"{self.lower_id}.{self.lower_version}.nupkg"

    def __str__(self) -> str:
        return f"{self.name}.{self.version}"


class VersionSet(FrozenMirrorModel):
    """
    Versions one feed reports for one package, in the feed's order.

    Membership uses exact string equality.

    Attributes:
        feed_name: Name of the feed the versions came from
        package_name: Package the versions belong to
        versions: Version strings in feed enumeration order
    """

    feed_name: str
    package_name: str
    versions: List[str] = Field(default_factory=list)

    @field_validator("versions")
    @classmethod
    def drop_duplicates(cls, v: List[str]) -> List[str]:
        """Keep the first occurrence of each version."""
        return list(dict.fromkeys(v))

    def __contains__(self, version: object) -> bool:
        return version in self.versions

    def __len__(self) -> int:
        return len(self.versions)


__all__ = ["PackageIdentity", "VersionSet"]
