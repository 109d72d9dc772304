"""
Mirror command for NuGet Mirror CLI.

Usage:
    nuget-mirror -package {package} -source {sourceName} -destination {destinationName} -apikey {apikey}
"""

import logging
import signal
import sys
import threading
from typing import Any, Optional

import click
import httpx
from pydantic import ValidationError

from .._version import __version__
from ..api import FeedResolver
from ..exceptions import ConfigurationError
from ..models.context import MirrorContext
from ..models.results import Err, MirrorReport, Result
from ..services import MirrorService
from ..utils import setup_logging
from ..utils.cancellation import CancellationToken
from ..utils.config_manager import load_feeds_config
from ..utils.constants import (
    API_KEY_ENV_VAR,
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PUBLISH_TIMEOUT,
    EXIT_GENERAL_ERROR,
)
from ..utils.error_handling import exit_code_for, handle_generic_error, handle_http_error, handle_mirror_error


def _install_interrupt_handler(token: CancellationToken) -> Optional[Any]:
    """
    Route the first Ctrl+C to the cancellation token.

    A second Ctrl+C falls back to KeyboardInterrupt. Returns the previous
    handler, or None when not running on the main thread.
    """
    if threading.current_thread() is not threading.main_thread():
        return None

    def handler(signum: int, frame: Any) -> None:
        if token.cancelled:
            raise KeyboardInterrupt
        click.echo("\nCancellation requested; finishing the current step (Ctrl+C again to abort)", err=True)
        token.cancel("Cancelled by operator")

    return signal.signal(signal.SIGINT, handler)


def _fail(err: Err) -> None:
    handle_mirror_error(err, "mirror")
    click.echo(f"Error: {err.detail}", err=True)
    sys.exit(exit_code_for(err))


def _finish(result: Result[MirrorReport]) -> None:
    if isinstance(result, Err):
        _fail(result)
        return

    report = result.value
    if report.dry_run:
        for version in report.missing:
            click.echo(version)
    click.echo("Complete.")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="nuget-mirror")
@click.option("-package", "--package", "package", required=True, help="Package id to mirror")
@click.option("-source", "--source", "source", required=True, help="Name of the configured source feed")
@click.option(
    "-destination", "--destination", "destination", required=True, help="Name of the configured destination feed"
)
@click.option(
    "-apikey",
    "--apikey",
    "api_key",
    required=True,
    envvar=API_KEY_ENV_VAR,
    help=f"API key presented to the destination feed on publish (or set {API_KEY_ENV_VAR})",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    envvar=CONFIG_ENV_VAR,
    help=f"Path to feeds config file, TOML or NuGet.Config (default: {DEFAULT_CONFIG_PATH})",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.option(
    "--max-workers",
    type=click.IntRange(min=1, max=32),
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="Versions transferred at once; values above 1 give up strict push order",
)
@click.option("--continue-on-error", is_flag=True, help="Keep mirroring remaining versions after a failure")
@click.option(
    "--fail-on-existing", is_flag=True, help="Treat a version that already exists on the destination as a failure"
)
@click.option(
    "--normalize-versions", is_flag=True, help="Compare NuGet-normalized versions instead of exact strings"
)
@click.option("--dry-run", is_flag=True, help="List missing versions without transferring anything")
@click.option(
    "--scratch-dir",
    type=click.Path(file_okay=False),
    help="Directory for downloaded packages (default: system temp directory)",
)
@click.option(
    "--publish-timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_PUBLISH_TIMEOUT,
    show_default=True,
    help="Seconds allowed for each publish call",
)
def mirror(  # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
    package: str,
    source: str,
    destination: str,
    api_key: str,
    config: Optional[str],
    debug: int,
    max_workers: int,
    continue_on_error: bool,
    fail_on_existing: bool,
    normalize_versions: bool,
    dry_run: bool,
    scratch_dir: Optional[str],
    publish_timeout: float,
) -> None:
    """Mirror missing versions of a package from one NuGet feed to another."""
    setup_logging(debug)

    try:
        context = MirrorContext(
            package=package,
            source=source,
            destination=destination,
            api_key=api_key,
            config=config,
            debug=debug,
            max_workers=max_workers,
            continue_on_error=continue_on_error,
            skip_duplicates=not fail_on_existing,
            normalize_versions=normalize_versions,
            dry_run=dry_run,
            scratch_dir=scratch_dir,
            publish_timeout=publish_timeout,
        )
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors())
        raise click.UsageError(f"Invalid value for: {fields}") from e

    try:
        feeds = load_feeds_config(context.config)
    except ConfigurationError as e:
        _fail(Err.from_exception(e))
        return

    token = CancellationToken()
    service = MirrorService(FeedResolver(feeds), cancel_token=token)
    previous_handler = _install_interrupt_handler(token)
    try:
        result = service.run(context)
    except httpx.HTTPError as e:
        handle_http_error(e, "mirror operation")
        sys.exit(EXIT_GENERAL_ERROR)
    except Exception as e:  # pylint: disable=broad-exception-caught
        handle_generic_error(e, "mirror operation")
        sys.exit(EXIT_GENERAL_ERROR)
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)
            logging.debug("Restored previous SIGINT handler")

    _finish(result)


__all__ = ["mirror"]
