"""
Scratch file handling utilities.

Downloaded artifacts live in a scratch directory for the few moments between
download and publish. Names include the package id and version plus a random
part, so sequential versions never share a file and concurrent runs against
the same scratch directory do not clobber each other.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .constants import NUPKG_EXTENSION
from ..exceptions import ScratchIOError


def resolve_scratch_dir(scratch_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Return the scratch directory, creating it if needed.

    Args:
        scratch_dir: Requested directory, or None for the system temp directory

    Raises:
        ScratchIOError: If the directory cannot be created or is not writable
    """
    path = Path(scratch_dir).expanduser() if scratch_dir else Path(tempfile.gettempdir())
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ScratchIOError(f"Cannot create scratch directory {path}: {e}") from e
    if not os.access(path, os.W_OK):
        raise ScratchIOError(f"Scratch directory {path} is not writable")
    return path


def create_scratch_file(scratch_dir: Path, package_id: str, version: str) -> Path:
    """
    Create an empty, uniquely named scratch file for one package version.

    Example:
        >>> create_scratch_file(Path("/tmp"), "Newtonsoft.Json", "13.0.1")
        PosixPath('/tmp/newtonsoft.json.13.0.1.k2j3h4_x.nupkg')
    """
    prefix = f"{package_id.lower()}.{version.lower()}."
    try:
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=NUPKG_EXTENSION, dir=scratch_dir)
        os.close(fd)
    except OSError as e:
        raise ScratchIOError(f"Cannot create scratch file in {scratch_dir}: {e}", version=version) from e
    return Path(name)


__all__ = ["resolve_scratch_dir", "create_scratch_file"]
