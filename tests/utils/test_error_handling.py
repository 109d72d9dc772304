"""Tests for error handling utilities."""

import logging
from unittest.mock import Mock, patch

import httpx
import pytest

from nuget_mirror.exceptions import ErrorKind
from nuget_mirror.models import Err
from nuget_mirror.utils.error_handling import (
    exit_code_for,
    handle_generic_error,
    handle_http_error,
    handle_mirror_error,
    log_and_exit,
)


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://feed.example.com/v3/index.json")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


class TestHandleHttpError:
    """Test handle_http_error function."""

    @pytest.mark.parametrize(
        "status_code,expected",
        [
            (401, "Authentication failed"),
            (403, "Authentication failed"),
            (404, "Resource not found"),
            (503, "Server error"),
            (418, "HTTP error"),
        ],
    )
    def test_status_codes(self, status_code, expected):
        """Test the message depends on the status code."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            handle_http_error(_status_error(status_code), "listing", log_traceback=False)

        message = mock_logging.error.call_args[0][0]
        assert message.startswith(expected)
        mock_logging.debug.assert_not_called()

    def test_transport_error(self):
        """Test errors without a response are generic HTTP errors."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            handle_http_error(httpx.ConnectError("refused"), "listing")

        assert mock_logging.error.call_args[0][0].startswith("HTTP error during")
        mock_logging.debug.assert_called_once()


class TestHandleGenericError:
    """Test handle_generic_error function."""

    def test_logs_error_and_traceback(self):
        """Test the error and traceback are logged."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            handle_generic_error(RuntimeError("boom"), "mirror operation")

        assert mock_logging.error.call_count == 2
        first_call = mock_logging.error.call_args_list[0][0]
        assert first_call[0] == "Unexpected error during %s: %s"
        assert first_call[1] == "mirror operation"
        assert str(first_call[2]) == "boom"

    def test_without_traceback(self):
        """Test the traceback can be skipped."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            handle_generic_error(RuntimeError("boom"), "mirror operation", log_traceback=False)

        mock_logging.error.assert_called_once()


class TestHandleMirrorError:
    """Test handle_mirror_error function."""

    def test_retryable_error(self, caplog):
        """Test retryable errors say a rerun is safe."""
        err = Err(kind=ErrorKind.FEED_UNREACHABLE, detail="Feed 'public' unreachable", retryable=True)

        with caplog.at_level(logging.ERROR):
            handle_mirror_error(err, "mirror")

        assert "Mirror failed: [feed_unreachable] Feed 'public' unreachable" in caplog.text
        assert "rerunning the mirror is safe" in caplog.text

    def test_error_with_hint(self, caplog):
        """Test errors needing an operator include a hint."""
        err = Err(kind=ErrorKind.AUTHENTICATION, detail="rejected the API key", version="1.1.0")

        with caplog.at_level(logging.ERROR):
            handle_mirror_error(err, "mirror")

        assert "Mirror failed (version 1.1.0)" in caplog.text
        assert "Check the API key" in caplog.text

    def test_cancelled_is_warning(self, caplog):
        """Test cancellation is logged as a warning, not an error."""
        err = Err(kind=ErrorKind.CANCELLED, detail="Cancelled by operator")

        with caplog.at_level(logging.WARNING):
            handle_mirror_error(err, "mirror")

        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "Mirror cancelled: Cancelled by operator" in caplog.text


class TestExitCodeFor:
    """Test exit_code_for function."""

    def test_cancelled(self):
        """Test cancellation exits with 130."""
        assert exit_code_for(Err(kind=ErrorKind.CANCELLED, detail="x")) == 130

    def test_retryable(self):
        """Test retryable errors exit with 75."""
        assert exit_code_for(Err(kind=ErrorKind.DOWNLOAD_FAILURE, detail="x", retryable=True)) == 75

    def test_needs_operator(self):
        """Test other errors exit with 1."""
        assert exit_code_for(Err(kind=ErrorKind.CONFIGURATION, detail="x")) == 1


class TestLogAndExit:
    """Test log_and_exit function."""

    def test_exits_with_code(self):
        """Test the given exit code is used."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            with pytest.raises(SystemExit) as exc_info:
                log_and_exit("bad things", 75)

        assert exc_info.value.code == 75
        mock_logging.error.assert_called_once_with("bad things")

    def test_success_logs_info(self):
        """Test exit code 0 logs at info level."""
        with patch("nuget_mirror.utils.error_handling.logging") as mock_logging:
            with pytest.raises(SystemExit):
                log_and_exit("done", 0)

        mock_logging.info.assert_called_once_with("done")
