"""
NuGet version normalization.

Feeds compare versions by exact string by default. normalize_version gives
the NuGet normalized form so "1.0" and "1.0.0.0" compare equal when the
operator opts in.
"""


def normalize_version(version: str) -> str:
    """
    Normalize a NuGet version string.

    Build metadata is dropped, the numeric part is padded to three segments
    (a fourth is kept only when non-zero), leading zeros are removed and the
    result is lower-cased. Strings that are not NuGet versions are only
    stripped and lower-cased.

    Example:
        >>> normalize_version("1.0")
        '1.0.0'
        >>> normalize_version("01.2.3.0-Beta+sha.abc")
        '1.2.3-beta'
        >>> normalize_version("1.2.3.4")
        '1.2.3.4'
    """
    text = version.strip()
    core = text.split("+", 1)[0]
    numbers, sep, release = core.partition("-")

    parts = numbers.split(".")
    if not 1 <= len(parts) <= 4 or not all(p.isdigit() for p in parts):
        return text.lower()

    values = [int(p) for p in parts] + [0] * (3 - len(parts))
    if len(values) == 4 and values[3] == 0:
        values = values[:3]

    normalized = ".".join(str(v) for v in values)
    if sep and release:
        normalized = f"{normalized}-{release}"
    return normalized.lower()


__all__ = ["normalize_version"]
