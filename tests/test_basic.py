"""Basic package tests."""

import nuget_mirror
from nuget_mirror import FeedClient, FeedResolver, MirrorService, TransferDriver, compute_missing
from nuget_mirror.exceptions import ErrorKind
from nuget_mirror.models import Err, Ok, Result
from nuget_mirror.protocols import FeedClientProtocol


def test_version():
    """Test the package exposes its version."""
    assert nuget_mirror.__version__ == "1.0.0"


def test_public_api():
    """Test the main classes are importable from the package root."""
    for name in ["FeedClient", "FeedResolver", "MirrorService", "TransferDriver", "compute_missing", "cli_main"]:
        assert name in nuget_mirror.__all__
        assert getattr(nuget_mirror, name) is not None
    assert "get_logger" not in nuget_mirror.__all__


def test_result_alias_is_generic():
    """Test Result can be parameterized and covers both outcomes."""
    int_result = Result[int]

    assert int_result.__origin__ is Result
    assert int_result.__args__ == (int,)

    def parse(text: str) -> Result[int]:
        return Ok(value=int(text)) if text.isdigit() else Err(kind=ErrorKind.CONFIGURATION, detail=text)

    assert parse("3").value == 3
    assert isinstance(parse("x"), Err)


def test_feed_client_implements_protocol(source_endpoint):
    """Test FeedClient satisfies FeedClientProtocol."""
    client = FeedClient(source_endpoint)
    try:
        assert isinstance(client, FeedClientProtocol)
    finally:
        client.close()


def test_fake_feed_implements_protocol(source_feed):
    """Test the in-memory feed used by the tests satisfies FeedClientProtocol."""
    assert isinstance(source_feed, FeedClientProtocol)


def test_pipeline_objects_compose(feeds_config, fake_feeds, mirror_context):
    """Test the root exports compose into a working run."""
    service = MirrorService(FeedResolver(feeds_config), client_factory=fake_feeds, list_backoff=0)

    result = service.run(mirror_context)

    assert result.is_ok
    assert compute_missing(result.value.missing, []) == result.value.missing
    assert TransferDriver.plan("Contoso.Lib", []) == []
