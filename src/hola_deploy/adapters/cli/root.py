"""Root CLI command group and global option handling.

Defines the top-level click group. Handles global flags like
``--traceback``, ``--profile`` and ``--set``.

Contents:
    * :func:`cli` - Root command group with global options.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from hola_deploy import __init__conf__
from hola_deploy.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import CLIContext, apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from hola_deploy.composition import AppServices


def _apply_cli_overrides(config: Config, set_overrides: tuple[str, ...]) -> Config:
    """Apply ``--set`` overrides, turning malformed input into a usage error."""
    try:
        return apply_overrides(config, set_overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Load configuration from a named profile (e.g., 'production', 'staging')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override a configuration setting (repeatable), e.g. deploy.service_name=tomcat9",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load configuration once, start logging and store state for subcommands.

    Example:
        >>> from click.testing import CliRunner
        >>> from hola_deploy.composition import build_production
        >>> result = CliRunner().invoke(cli, ["greet"], obj=build_production)
        >>> "Hola desde Tomcat 10" in result.stdout
        True
    """
    # ctx.obj is always the services factory (production or test)
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click's obj is typed as Any
    config = _apply_cli_overrides(services.get_config(profile=profile), set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        CLIContext(
            traceback=traceback,
            config=config,
            services=services,
            profile=profile,
            set_overrides=set_overrides,
        ),
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Commands import from package ancestors, so registration is deferred until
# the group exists.
def _register_commands() -> None:
    from .commands import (
        cli_check,
        cli_config,
        cli_config_deploy,
        cli_deploy,
        cli_greet,
        cli_healthcheck,
        cli_info,
        cli_serve,
    )

    for cmd in (
        cli_check,
        cli_config,
        cli_config_deploy,
        cli_deploy,
        cli_greet,
        cli_healthcheck,
        cli_info,
        cli_serve,
    ):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
