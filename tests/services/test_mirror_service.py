"""Tests for MirrorService."""

import pytest

from nuget_mirror.exceptions import ErrorKind, FeedUnreachable, PublishAuthenticationError, PublishFailure
from nuget_mirror.models import Err, MirrorContext, Ok
from nuget_mirror.services import MirrorService
from nuget_mirror.utils import CancellationToken


@pytest.fixture
def service(resolver, fake_feeds):
    """MirrorService wired to the in-memory feeds."""
    return MirrorService(resolver, client_factory=fake_feeds, list_backoff=0)


class TestMirrorServiceRun:
    """Test complete mirror runs."""

    def test_mirrors_missing_versions(self, service, mirror_context, destination_feed):
        """Test an empty destination receives every source version in order."""
        result = service.run(mirror_context)

        assert isinstance(result, Ok)
        report = result.value
        assert report.missing == ["1.0.0", "1.1.0", "2.0.0-beta"]
        assert report.mirrored == ["1.0.0", "1.1.0", "2.0.0-beta"]
        assert report.source_count == 3
        assert report.destination_count == 0
        assert destination_feed.published == ["1.0.0", "1.1.0", "2.0.0-beta"]

    def test_only_missing_versions_transferred(self, service, mirror_context, source_feed, destination_feed):
        """Test versions already on the destination are left alone."""
        destination_feed.versions = ["1.1.0"]

        result = service.run(mirror_context)

        assert result.value.missing == ["1.0.0", "2.0.0-beta"]
        assert [v for v, _ in source_feed.downloads] == ["1.0.0", "2.0.0-beta"]
        assert destination_feed.published == ["1.0.0", "2.0.0-beta"]

    def test_second_run_is_noop(self, service, mirror_context, source_feed, destination_feed):
        """Test rerunning after success transfers nothing."""
        service.run(mirror_context)
        downloads = len(source_feed.downloads)

        result = service.run(mirror_context)

        assert isinstance(result, Ok)
        assert result.value.missing == []
        assert len(source_feed.downloads) == downloads
        assert destination_feed.published == ["1.0.0", "1.1.0", "2.0.0-beta"]

    def test_identical_feeds(self, service, mirror_context, source_feed, destination_feed):
        """Test feeds with the same versions need no transfers and still succeed."""
        destination_feed.versions = list(source_feed.versions)

        result = service.run(mirror_context)

        assert isinstance(result, Ok)
        assert result.value.missing == []
        assert result.value.transfers == []
        assert source_feed.downloads == []
        assert destination_feed.publish_calls == []

    def test_empty_source(self, service, mirror_context, source_feed, destination_feed):
        """Test a package unknown to the source is a successful no-op."""
        source_feed.versions = []

        result = service.run(mirror_context)

        assert isinstance(result, Ok)
        assert result.value.missing == []
        assert destination_feed.publish_calls == []

    def test_rerun_after_partial_failure(self, service, mirror_context, source_feed, destination_feed):
        """Test a rerun picks up exactly where the failed run stopped."""
        destination_feed.publish_errors["1.1.0"] = PublishFailure("temporarily rejected", retryable=True)

        first = service.run(mirror_context)
        assert isinstance(first, Err)
        assert destination_feed.published == ["1.0.0"]

        del destination_feed.publish_errors["1.1.0"]
        second = service.run(mirror_context)

        assert isinstance(second, Ok)
        assert second.value.missing == ["1.1.0", "2.0.0-beta"]
        assert destination_feed.published == ["1.0.0", "1.1.0", "2.0.0-beta"]

    def test_error_carries_report(self, service, mirror_context, destination_feed):
        """Test a transfer failure returns the partial report."""
        destination_feed.publish_errors["1.1.0"] = PublishAuthenticationError("bad key")

        result = service.run(mirror_context)

        assert result.kind is ErrorKind.AUTHENTICATION
        assert result.version == "1.1.0"
        assert result.report.mirrored == ["1.0.0"]
        assert result.report.failed == ["1.1.0"]
        assert result.report.not_attempted == ["2.0.0-beta"]

    def test_dry_run(self, service, mirror_context, source_feed, destination_feed):
        """Test dry runs report missing versions without transferring."""
        mirror_context.dry_run = True

        result = service.run(mirror_context)

        assert isinstance(result, Ok)
        assert result.value.dry_run
        assert result.value.missing == ["1.0.0", "1.1.0", "2.0.0-beta"]
        assert result.value.transfers == []
        assert source_feed.downloads == []

    def test_normalized_versions(self, service, mirror_context, source_feed, destination_feed):
        """Test normalization treats equivalent spellings as present."""
        source_feed.versions = ["1.0", "2.0.0"]
        destination_feed.versions = ["1.0.0"]

        exact = service.run(mirror_context.model_copy(update={"dry_run": True}))
        normalized = service.run(mirror_context.model_copy(update={"dry_run": True, "normalize_versions": True}))

        assert exact.value.missing == ["1.0", "2.0.0"]
        assert normalized.value.missing == ["2.0.0"]

    def test_clients_closed(self, service, mirror_context, source_feed, destination_feed):
        """Test both clients are closed after the run."""
        service.run(mirror_context)

        assert source_feed.closed
        assert destination_feed.closed


class TestMirrorServiceFailures:
    """Test runs that fail before transferring."""

    def test_unknown_source_feed(self, resolver, mirror_context):
        """Test an unknown feed fails before any client is created."""
        created = []
        service = MirrorService(resolver, client_factory=created.append)

        result = service.run(mirror_context.model_copy(update={"source": "nowhere"}))

        assert result.kind is ErrorKind.CONFIGURATION
        assert "'nowhere'" in result.detail
        assert created == []

    def test_unknown_destination_feed(self, service, mirror_context, source_feed):
        """Test an unknown destination is rejected before listing."""
        result = service.run(mirror_context.model_copy(update={"destination": "nowhere"}))

        assert result.kind is ErrorKind.CONFIGURATION
        assert source_feed.list_calls == 0

    def test_listing_failure(self, service, mirror_context, source_feed):
        """Test an unreachable source ends the run as retryable."""
        source_feed.list_errors = [FeedUnreachable("down")] * 3

        result = service.run(mirror_context)

        assert result.kind is ErrorKind.FEED_UNREACHABLE
        assert result.retryable
        assert result.report is None

    def test_cancelled(self, resolver, fake_feeds, mirror_context, source_feed):
        """Test a cancelled token ends the run as cancelled."""
        token = CancellationToken()
        token.cancel("stop")
        service = MirrorService(resolver, client_factory=fake_feeds, cancel_token=token, list_backoff=0)

        result = service.run(mirror_context)

        assert result.kind is ErrorKind.CANCELLED
        assert source_feed.downloads == []
