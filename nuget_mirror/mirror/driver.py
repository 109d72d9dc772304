"""
Transfer driver: download each missing version and publish it.

Each version moves through
``pending -> downloading -> downloaded -> publishing -> done``, or ends in
``failed``. By default versions are processed strictly one after another in
source order and the run stops at the first failure. Versions already
published stay published; nothing is rolled back.

The downloaded artifact lives in a scratch file that is removed on every
exit path, including failure and cancellation.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..exceptions import DuplicateVersionError, ErrorKind, MirrorCancelled, MirrorError, ScratchIOError
from ..models.package import PackageIdentity
from ..models.results import Err, Ok, Result, TransferState, VersionTransfer
from ..protocols import FeedClientProtocol
from ..utils.cancellation import CancellationToken
from ..utils.constants import DEFAULT_MAX_WORKERS, DEFAULT_PUBLISH_TIMEOUT
from ..utils.path_utils import create_scratch_file, resolve_scratch_dir


@contextmanager
def scratch_artifact(scratch_dir: Path, identity: PackageIdentity) -> Iterator[Path]:
    """
    Provide a uniquely named scratch file for one version and always delete it.

    Args:
        scratch_dir: Directory to create the file in
        identity: Package version the file will hold

    Yields:
        Path of the (initially empty) scratch file
    """
    path = create_scratch_file(scratch_dir, identity.name, identity.version)
    logging.debug("Created scratch file %s", path)
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
            logging.debug("Removed scratch file %s", path)
        except OSError as e:
            logging.warning("Could not remove scratch file %s: %s", path, e)


class TransferDriver:
    """Moves missing versions from a source feed to a destination feed."""

    def __init__(
        self,
        source: FeedClientProtocol,
        destination: FeedClientProtocol,
        api_key: str,
        *,
        scratch_dir: Optional[str] = None,
        publish_timeout: float = DEFAULT_PUBLISH_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        continue_on_error: bool = False,
        skip_duplicates: bool = True,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Initialize the driver.

        Args:
            source: Feed artifacts are downloaded from
            destination: Feed artifacts are published to
            api_key: Credential presented to the destination on publish
            scratch_dir: Directory for scratch files (system temp dir if None)
            publish_timeout: Seconds allowed for each publish call
            max_workers: Versions in flight at once; 1 keeps push order strict
            continue_on_error: Record failures and carry on instead of stopping
            skip_duplicates: Treat "already exists" on publish as success
            cancel_token: Run-scoped cancellation token
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.source = source
        self.destination = destination
        self.api_key = api_key
        self.scratch_dir = scratch_dir
        self.publish_timeout = publish_timeout
        self.max_workers = max_workers
        self.continue_on_error = continue_on_error
        self.skip_duplicates = skip_duplicates
        self.cancel_token = cancel_token or CancellationToken()
        self._stop = threading.Event()

    @staticmethod
    def plan(package_name: str, versions: Iterable[str]) -> List[VersionTransfer]:
        """Create pending transfer records for the given versions, in order."""
        return [VersionTransfer(identity=PackageIdentity(name=package_name, version=v)) for v in versions]

    def run(self, package_name: str, versions: Iterable[str]) -> Result[List[VersionTransfer]]:
        """Plan and execute transfers for ``versions`` of ``package_name``."""
        return self.execute(self.plan(package_name, versions))

    def execute(self, transfers: List[VersionTransfer]) -> Result[List[VersionTransfer]]:
        """
        Transfer every planned version, updating the records in place.

        Args:
            transfers: Records from plan(); versions are handled in list order

        Returns:
            Ok(transfers) when every version ended up on the destination,
            otherwise Err describing the first failure in list order
        """
        if not transfers:
            return Ok(value=transfers)

        try:
            scratch_dir = resolve_scratch_dir(self.scratch_dir)
        except ScratchIOError as e:
            return Err.from_exception(e)

        self._stop.clear()
        if self.max_workers == 1:
            for transfer in transfers:
                if self._stop.is_set():
                    break
                self._transfer_one(transfer, scratch_dir)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="mirror_transfer") as executor:
                futures = [executor.submit(self._transfer_one, transfer, scratch_dir) for transfer in transfers]
                for future in futures:
                    future.result()

        return self._outcome(transfers)

    def _outcome(self, transfers: List[VersionTransfer]) -> Result[List[VersionTransfer]]:
        failures = [t for t in transfers if t.state is TransferState.FAILED and t.error is not None]
        if failures:
            first = failures[0].error
            if len(failures) > 1:
                first = first.model_copy(update={"detail": f"{first.detail} ({len(failures)} versions failed)"})
            return first

        if self.cancel_token.cancelled and any(t.state is TransferState.PENDING for t in transfers):
            return Err(kind=ErrorKind.CANCELLED, detail=self.cancel_token.reason or "Cancelled")

        return Ok(value=transfers)

    def _transfer_one(self, transfer: VersionTransfer, scratch_dir: Path) -> None:
        """Run one version through download and publish, recording the outcome."""
        if self._stop.is_set():
            return
        if self.cancel_token.cancelled:
            self._stop.set()
            return

        identity = transfer.identity
        logging.warning("Mirroring %s...", identity)

        try:
            with scratch_artifact(scratch_dir, identity) as path:
                transfer.scratch_path = str(path)

                transfer.state = TransferState.DOWNLOADING
                self.source.download_artifact(identity, path, self.cancel_token)
                transfer.state = TransferState.DOWNLOADED

                # Last safe point: once publish starts it runs to completion
                self.cancel_token.raise_if_cancelled(identity.version)

                transfer.state = TransferState.PUBLISHING
                self._publish(transfer, path)
                transfer.state = TransferState.DONE
        except MirrorError as e:
            if e.version is None:
                e.version = identity.version
            transfer.error = Err.from_exception(e)
            transfer.state = TransferState.FAILED

            if isinstance(e, MirrorCancelled):
                logging.warning("Mirroring %s cancelled", identity)
                self._stop.set()
            else:
                logging.error("Mirroring %s failed: %s", identity, e.message)
                if not self.continue_on_error:
                    self._stop.set()
        except BaseException:
            # Unexpected errors end the run; queued versions must not start
            transfer.state = TransferState.FAILED
            self._stop.set()
            raise

    def _publish(self, transfer: VersionTransfer, path: Path) -> None:
        try:
            self.destination.publish_artifact(path, self.api_key, self.publish_timeout)
        except DuplicateVersionError:
            if not self.skip_duplicates:
                raise
            logging.warning(
                "%s already exists on feed '%s'; skipping", transfer.identity, self.destination.endpoint.name
            )
            transfer.already_existed = True


__all__ = ["scratch_artifact", "TransferDriver"]
