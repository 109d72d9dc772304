"""
Result models for mirror runs.

Pipeline stages return a tagged result instead of raising: ``Ok(value)`` on
success, ``Err(kind, detail)`` on failure. The CLI maps a terminal ``Err``
onto an exit code and an operator-facing message.
"""

from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import Field

from .base import FrozenMirrorModel, MirrorBaseModel
from .package import PackageIdentity
from ..exceptions import ErrorKind, MirrorError

T = TypeVar("T")


class Ok(FrozenMirrorModel, Generic[T]):
    """Successful stage result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


class Err(FrozenMirrorModel):
    """
    Failed stage result.

    Attributes:
        kind: Error category
        detail: Human-readable description
        retryable: True when rerunning the tool is a reasonable fix
        version: Package version being transferred when the error happened
        report: Partial run report, when the failure happened mid-transfer
    """

    kind: ErrorKind
    detail: str
    retryable: bool = False
    version: Optional[str] = None
    report: Optional["MirrorReport"] = None

    @property
    def is_ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, error: MirrorError, **kwargs) -> "Err":
        """Build an Err from a MirrorError, keeping its kind and retry hint."""
        kwargs.setdefault("version", error.version)
        return cls(kind=error.kind, detail=error.message, retryable=error.retryable, **kwargs)

    def with_report(self, report: "MirrorReport") -> "Err":
        """Return a copy of this error carrying the given report."""
        return self.model_copy(update={"report": report})


type Result[T] = Union[Ok[T], Err]


class TransferState(str, Enum):
    """Lifecycle of a single version transfer."""

    PENDING = "pending"
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TransferState.DONE, TransferState.FAILED)


class VersionTransfer(MirrorBaseModel):
    """
    Progress of one missing version through download and publish.

    Attributes:
        identity: Package name and version being transferred
        state: Current transfer state
        scratch_path: Local file the artifact was downloaded to
        already_existed: Destination reported the version as already present
        error: Failure details when state is FAILED
    """

    identity: PackageIdentity
    state: TransferState = TransferState.PENDING
    scratch_path: Optional[str] = None
    already_existed: bool = False
    error: Optional[Err] = None

    @property
    def version(self) -> str:
        return self.identity.version


class MirrorReport(MirrorBaseModel):
    """
    Summary of a mirror run.

    Attributes:
        package: Package id that was mirrored
        source: Source feed name
        destination: Destination feed name
        source_count: Number of versions on the source feed
        destination_count: Number of versions on the destination feed before the run
        missing: Versions missing from the destination, in source order
        transfers: Per-version transfer records, in source order
        dry_run: True when no transfer was attempted on purpose
    """

    package: str
    source: str
    destination: str
    source_count: int = Field(default=0, ge=0)
    destination_count: int = Field(default=0, ge=0)
    missing: List[str] = Field(default_factory=list)
    transfers: List[VersionTransfer] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def mirrored(self) -> List[str]:
        """Versions newly published to the destination."""
        return [t.version for t in self.transfers if t.state is TransferState.DONE and not t.already_existed]

    @property
    def already_present(self) -> List[str]:
        """Versions the destination already had when publish was attempted."""
        return [t.version for t in self.transfers if t.state is TransferState.DONE and t.already_existed]

    @property
    def failed(self) -> List[str]:
        """Versions whose transfer failed."""
        return [t.version for t in self.transfers if t.state is TransferState.FAILED]

    @property
    def not_attempted(self) -> List[str]:
        """Versions left untouched because the run stopped early."""
        return [t.version for t in self.transfers if t.state is TransferState.PENDING]


Err.model_rebuild()


__all__ = [
    "Ok",
    "Err",
    "Result",
    "TransferState",
    "VersionTransfer",
    "MirrorReport",
]
