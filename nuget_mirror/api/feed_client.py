"""
NuGet V3 feed client.

This module provides FeedClient, which lists, downloads and publishes
package versions on a single feed:

    - Service index: resolved once per client and cached
    - Listing: PackageBaseAddress/3.0.0 ``{id}/index.json``
    - Download: PackageBaseAddress/3.0.0 ``{id}/{version}/{id}.{version}.nupkg``
    - Publish: PackagePublish/2.0.0 multipart PUT with the API key header

Transport and HTTP failures are translated into the mirror error taxonomy
so the pipeline never has to inspect httpx exceptions itself.
"""

# Standard library imports
import logging
import threading
from pathlib import Path
from typing import Any, List, Optional, Tuple, Type, TypeVar

# Third-party imports
import httpx
from pydantic import BaseModel, ValidationError

# Local imports
from ..exceptions import (
    DownloadFailure,
    DuplicateVersionError,
    FeedProtocolError,
    FeedUnreachable,
    PublishAuthenticationError,
    PublishFailure,
    ScratchIOError,
)
from ..models.feeds import FeedEndpoint
from ..models.nuget_api import ServiceIndexResponse, VersionIndexResponse
from ..models.package import PackageIdentity
from ..utils import create_session_with_retry
from ..utils.cancellation import CancellationToken
from ..utils.constants import (
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    PACKAGE_BASE_ADDRESS_TYPES,
    PACKAGE_PUBLISH_TYPES,
    PUBLISH_FORM_FIELD,
)
from .auth import ApiKeyAuth, feed_auth

ModelT = TypeVar("ModelT", bound=BaseModel)

# Maximum characters of a response body quoted in error messages
MAX_ERROR_BODY = 200


def _is_transient_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _describe_response(response: httpx.Response) -> str:
    body = response.text.strip()
    if len(body) > MAX_ERROR_BODY:
        body = body[:MAX_ERROR_BODY] + "..."
    reason = response.reason_phrase or "error"
    return f"{response.status_code} {reason}" + (f": {body}" if body else "")


class FeedClient:
    """Client for one NuGet V3 feed."""

    def __init__(
        self, endpoint: FeedEndpoint, session: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """
        Initialize the feed client.

        Args:
            endpoint: Feed to talk to
            session: Optional pre-built httpx client (tests inject one)
            timeout: Default timeout for listing and download requests
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or create_session_with_retry(auth=feed_auth(endpoint), timeout=timeout)
        self._service_index: Optional[ServiceIndexResponse] = None
        self._index_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Service index
    # ------------------------------------------------------------------

    def _get_json(self, url: str, model: Type[ModelT], operation: str) -> Tuple[Optional[ModelT], int]:
        """
        GET a JSON document and validate it against ``model``.

        Returns:
            Tuple of (parsed model, status code); the model is None for 404

        Raises:
            FeedUnreachable: On transport errors, 429 or 5xx responses
            FeedProtocolError: On other error statuses, redirect loops or malformed bodies
        """
        try:
            response = self.session.get(url)
        except httpx.TransportError as e:
            raise FeedUnreachable(f"Feed '{self.endpoint.name}' unreachable during {operation}: {e}") from e
        except httpx.RequestError as e:
            raise FeedProtocolError(f"Feed '{self.endpoint.name}' failed during {operation}: {e}") from e

        if response.status_code == 404:
            return None, 404
        if _is_transient_status(response.status_code):
            raise FeedUnreachable(
                f"Feed '{self.endpoint.name}' returned {_describe_response(response)} during {operation}"
            )
        if response.status_code in (401, 403):
            raise FeedProtocolError(
                f"Feed '{self.endpoint.name}' denied access during {operation} "
                f"({response.status_code}); check the feed credentials"
            )
        if not response.is_success:
            raise FeedProtocolError(
                f"Feed '{self.endpoint.name}' returned {_describe_response(response)} during {operation}"
            )

        try:
            payload: Any = response.json()
            return model.model_validate(payload), response.status_code
        except ValueError as e:
            # ValidationError is a ValueError, as is json.JSONDecodeError
            detail = e.errors()[0]["msg"] if isinstance(e, ValidationError) else str(e)
            logging.debug("Malformed response from %s: %s", url, response.text[:500])
            raise FeedProtocolError(
                f"Malformed response from feed '{self.endpoint.name}' during {operation}: {detail}"
            ) from e

    def service_index(self) -> ServiceIndexResponse:
        """Fetch (once) and return the feed's service index."""
        with self._index_lock:
            if self._service_index is None:
                logging.debug("Fetching service index for feed '%s': %s", self.endpoint.name, self.endpoint.url)
                index, _ = self._get_json(self.endpoint.url, ServiceIndexResponse, "service index lookup")
                if index is None:
                    raise FeedProtocolError(
                        f"No NuGet service index at {self.endpoint.url} for feed '{self.endpoint.name}'"
                    )
                self._service_index = index
            return self._service_index

    def _resource_url(self, resource_types: Tuple[str, ...]) -> str:
        url = self.service_index().find_resource(*resource_types)
        if url is None:
            raise FeedProtocolError(
                f"Feed '{self.endpoint.name}' does not advertise any of: {', '.join(resource_types)}"
            )
        return url

    # ------------------------------------------------------------------
    # Feed operations
    # ------------------------------------------------------------------

    def list_versions(self, package_name: str) -> List[str]:
        """
        List every version the feed reports for a package.

        Args:
            package_name: Package id (case-insensitive on the feed)

        Returns:
            Version strings in feed order; empty if the feed does not know the package
        """
        base = self._resource_url(PACKAGE_BASE_ADDRESS_TYPES)
        url = f"{base}/{package_name.lower()}/index.json"
        index, status = self._get_json(url, VersionIndexResponse, f"version listing of {package_name}")
        if index is None:
            logging.info("Package %s not found on feed '%s' (HTTP %d)", package_name, self.endpoint.name, status)
            return []
        return index.versions

    def download_artifact(
        self, identity: PackageIdentity, destination: Path, cancel_token: Optional[CancellationToken] = None
    ) -> Path:
        """
        Stream a package artifact into ``destination``.

        Args:
            identity: Package name and version to fetch
            destination: File to write; overwritten if it exists
            cancel_token: Optional token checked between chunks

        Returns:
            The destination path

        Raises:
            DownloadFailure: On transport errors or error responses
            ScratchIOError: If the local file cannot be written
            MirrorCancelled: If cancellation is requested mid-download
        """
        base = self._resource_url(PACKAGE_BASE_ADDRESS_TYPES)
        url = f"{base}/{identity.lower_id}/{identity.lower_version}/{identity.nupkg_file_name}"
        logging.info("Downloading %s from %s", identity, url)

        try:
            with self.session.stream("GET", url) as response:
                if response.status_code == 404:
                    raise DownloadFailure(
                        f"{identity} is no longer available on feed '{self.endpoint.name}'",
                        retryable=False,
                        version=identity.version,
                    )
                if not response.is_success:
                    response.read()
                    raise DownloadFailure(
                        f"Downloading {identity} from feed '{self.endpoint.name}' failed: "
                        f"{_describe_response(response)}",
                        retryable=_is_transient_status(response.status_code),
                        version=identity.version,
                    )
                self._write_stream(response, destination, identity, cancel_token)
        except httpx.RequestError as e:
            raise DownloadFailure(
                f"Error downloading {identity} from feed '{self.endpoint.name}': {e}",
                retryable=isinstance(e, httpx.TransportError),
                version=identity.version,
            ) from e

        if destination.stat().st_size == 0:
            raise DownloadFailure(
                f"Feed '{self.endpoint.name}' returned an empty artifact for {identity}",
                retryable=False,
                version=identity.version,
            )
        return destination

    @staticmethod
    def _write_stream(
        response: httpx.Response,
        destination: Path,
        identity: PackageIdentity,
        cancel_token: Optional[CancellationToken],
    ) -> None:
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled(identity.version)
                    f.write(chunk)
        except OSError as e:
            raise ScratchIOError(f"Cannot write {destination}: {e}", version=identity.version) from e

    def publish_artifact(self, file_path: Path, api_key: str, timeout: float = DEFAULT_PUBLISH_TIMEOUT) -> None:
        """
        Push a .nupkg file to the feed.

        Args:
            file_path: Local package file
            api_key: Key sent in the X-NuGet-ApiKey header
            timeout: Read, write and pool timeout in seconds, applied to each
                operation of the request separately (connect is capped at 10s)

        Raises:
            PublishAuthenticationError: 401/403 from the feed
            DuplicateVersionError: 409, the version already exists
            PublishFailure: Any other failure (retryable for 429, 5xx and transport errors)
            ScratchIOError: If the local file cannot be read
        """
        url = self._resource_url(PACKAGE_PUBLISH_TYPES)
        auth = ApiKeyAuth(api_key, inner=self.session.auth)
        logging.info("Publishing %s to feed '%s'", file_path.name, self.endpoint.name)

        try:
            package_file = open(file_path, "rb")
        except OSError as e:
            raise ScratchIOError(f"Cannot read {file_path}: {e}") from e

        with package_file:
            files = {PUBLISH_FORM_FIELD: (file_path.name, package_file, "application/octet-stream")}
            try:
                response = self.session.put(
                    url, files=files, auth=auth, timeout=httpx.Timeout(timeout, connect=10.0)
                )
            except httpx.RequestError as e:
                raise PublishFailure(
                    f"Error publishing to feed '{self.endpoint.name}': {e}",
                    retryable=isinstance(e, httpx.TransportError),
                ) from e

        if response.is_success:
            logging.debug("Feed '%s' accepted %s (%d)", self.endpoint.name, file_path.name, response.status_code)
            return

        description = _describe_response(response)
        if response.status_code in (401, 403):
            raise PublishAuthenticationError(f"Feed '{self.endpoint.name}' rejected the API key: {description}")
        if response.status_code == 409:
            raise DuplicateVersionError(f"Feed '{self.endpoint.name}' already has this version: {description}")
        raise PublishFailure(
            f"Feed '{self.endpoint.name}' rejected the package: {description}",
            retryable=_is_transient_status(response.status_code),
        )

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the session and release all connections."""
        self.session.close()
        logging.debug("FeedClient session for '%s' closed", self.endpoint.name)

    def __enter__(self) -> "FeedClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        self.close()


__all__ = ["FeedClient"]
