"""
CLI entry point for NuGet Mirror using Click.
"""

import sys

import click

from .mirror_cmd import mirror
from ..utils.constants import EXIT_USER_INTERRUPT


def main() -> None:
    """Main entry point for the CLI."""
    try:
        mirror()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["mirror", "main"]
