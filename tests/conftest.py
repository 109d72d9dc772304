"""
Test fixtures for nuget-mirror tests.

This module provides common fixtures and an in-memory feed used across the
test suite. FakeFeed implements FeedClientProtocol and records every call,
so pipeline tests can assert on what was downloaded and published without
any HTTP traffic. FeedClient tests use respx through the httpx_mock fixture.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
import respx

from nuget_mirror.api import FeedResolver
from nuget_mirror.models import FeedEndpoint, FeedsConfig, MirrorContext, PackageIdentity

SOURCE_URL = "https://source.example.com/v3/index.json"
DESTINATION_URL = "https://destination.example.com/v3/index.json"

SOURCE_BASE = "https://source.example.com/v3-flatcontainer"
DESTINATION_PUBLISH = "https://destination.example.com/api/v2/package"


class FakeFeed:
    """
    In-memory NuGet feed.

    Published packages are appended to ``versions``, so a second run against
    the same destination sees the first run's results.
    """

    def __init__(self, name: str, versions: Optional[List[str]] = None) -> None:
        self.endpoint = FeedEndpoint(name=name, url=f"https://{name}.example.com/v3/index.json")
        self.versions = list(versions or [])
        self.list_calls = 0
        self.list_errors: List[Exception] = []
        self.download_errors: Dict[str, Exception] = {}
        self.publish_errors: Dict[str, Exception] = {}
        self.downloads: List[Tuple[str, Path]] = []
        self.published: List[str] = []
        self.publish_calls: List[Tuple[Path, str, float]] = []
        self.scratch_seen_at_publish: List[bool] = []
        self.on_download = None
        self.closed = False

    def list_versions(self, package_name: str) -> List[str]:
        self.list_calls += 1
        if self.list_errors:
            raise self.list_errors.pop(0)
        return list(self.versions)

    def download_artifact(self, identity: PackageIdentity, destination: Path, cancel_token=None) -> Path:
        self.downloads.append((identity.version, destination))
        if identity.version in self.download_errors:
            raise self.download_errors[identity.version]
        destination.write_text(f"{identity.name}:{identity.version}")
        if self.on_download is not None:
            self.on_download(identity)
        return destination

    def publish_artifact(self, file_path: Path, api_key: str, timeout: float) -> None:
        self.publish_calls.append((file_path, api_key, timeout))
        self.scratch_seen_at_publish.append(file_path.exists())
        _, version = file_path.read_text().split(":", 1)
        if version in self.publish_errors:
            raise self.publish_errors[version]
        self.published.append(version)
        self.versions.append(version)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock:
        yield respx


@pytest.fixture
def source_endpoint():
    """Source feed endpoint."""
    return FeedEndpoint(name="public", url=SOURCE_URL)


@pytest.fixture
def destination_endpoint():
    """Destination feed endpoint with basic credentials."""
    return FeedEndpoint(name="internal", url=DESTINATION_URL, username="mirror", password="s3cret")


@pytest.fixture
def feeds_config(source_endpoint, destination_endpoint):
    """FeedsConfig holding the source and destination endpoints."""
    return FeedsConfig(feeds={"public": source_endpoint, "internal": destination_endpoint})


@pytest.fixture
def resolver(feeds_config):
    """FeedResolver over the test feeds."""
    return FeedResolver(feeds_config)


@pytest.fixture
def source_feed():
    """In-memory source feed with three versions."""
    return FakeFeed("public", ["1.0.0", "1.1.0", "2.0.0-beta"])


@pytest.fixture
def destination_feed():
    """Empty in-memory destination feed."""
    return FakeFeed("internal")


@pytest.fixture
def fake_feeds(source_feed, destination_feed):
    """Client factory resolving endpoints to the in-memory feeds by name."""
    feeds = {source_feed.endpoint.name: source_feed, destination_feed.endpoint.name: destination_feed}

    def factory(endpoint: FeedEndpoint) -> FakeFeed:
        return feeds[endpoint.name]

    return factory


@pytest.fixture
def mirror_context(tmp_path):
    """MirrorContext for mirroring Contoso.Lib from public to internal."""
    return MirrorContext(
        package="Contoso.Lib",
        source="public",
        destination="internal",
        api_key="test-api-key",
        scratch_dir=str(tmp_path / "scratch"),
    )


@pytest.fixture
def service_index():
    """Service index advertising flat container and publish resources."""
    return {
        "version": "3.0.0",
        "resources": [
            {"@id": SOURCE_BASE + "/", "@type": "PackageBaseAddress/3.0.0", "comment": "Base URL of packages"},
            {"@id": DESTINATION_PUBLISH, "@type": "PackagePublish/2.0.0"},
            {"@id": "https://source.example.com/query", "@type": "SearchQueryService"},
        ],
    }


@pytest.fixture
def create_config_file(tmp_path):
    """
    Factory fixture for writing feed configuration files.

    Usage:
        def test_something(create_config_file):
            path = create_config_file("feeds.toml", '[feeds.a]\\nurl = "https://a/v3/index.json"')
    """

    def _create(filename: str, content: str) -> Path:
        file_path = tmp_path / filename
        file_path.write_text(content)
        return file_path

    return _create


@pytest.fixture
def toml_config_file(create_config_file):
    """TOML configuration defining the public and internal feeds."""
    return create_config_file(
        "feeds.toml",
        f"""
[feeds.public]
url = "{SOURCE_URL}"

[feeds.internal]
url = "{DESTINATION_URL}"
username = "mirror"
password = "s3cret"
""",
    )


@pytest.fixture
def make_feed():
    """Factory for additional in-memory feeds."""
    return FakeFeed
