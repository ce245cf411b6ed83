"""Basic CLI commands for package metadata and the greeting line.

Contents:
    * :func:`cli_info` - Display package metadata.
    * :func:`cli_greet` - Print the greeting served by the endpoint.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from hola_deploy import __init__conf__
from hola_deploy.domain.behaviors import build_greeting

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()


@click.command("greet", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_greet() -> None:
    """Print the greeting line the HTTP endpoint serves."""
    with lib_log_rich.runtime.bind(job_id="cli-greet", extra={"command": "greet"}):
        click.echo(build_greeting())


__all__ = ["cli_greet", "cli_info"]
