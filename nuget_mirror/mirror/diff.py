"""Missing-version computation."""

from typing import Callable, Iterable, List, Optional, Union

from ..models.package import VersionSet

VersionSource = Union[VersionSet, Iterable[str]]


def _versions(collection: VersionSource) -> Iterable[str]:
    # BaseModel.__iter__ yields fields, so unwrap VersionSet explicitly
    if isinstance(collection, VersionSet):
        return collection.versions
    return collection


def compute_missing(
    source: VersionSource,
    destination: VersionSource,
    *,
    key: Optional[Callable[[str], str]] = None,
) -> List[str]:
    """
    Return the versions present on the source but absent from the destination.

    Args:
        source: Source feed versions, in feed order
        destination: Destination feed versions
        key: Optional function mapping a version to its comparison identity
            (exact string equality when omitted)

    Returns:
        Missing versions in source order, each listed once, spelled as the
        source spells them

    Example:
        >>> compute_missing(["1.0.0", "1.1.0", "2.0.0-beta"], ["1.1.0"])
        ['1.0.0', '2.0.0-beta']
    """
    identity = key or (lambda version: version)
    present = {identity(version) for version in _versions(destination)}

    missing: List[str] = []
    for version in _versions(source):
        version_key = identity(version)
        if version_key in present:
            continue
        present.add(version_key)
        missing.append(version)
    return missing


__all__ = ["compute_missing"]
