"""CLI commands for deploying the servlet archive and checking its health.

Provides ``deploy`` (the full ten-stage pipeline), ``healthcheck`` (only the
final bounded poll) and ``check`` (prerequisite report).

Every pipeline failure prints ``[deploy] ERROR: <message>`` plus an optional
hint to stderr and exits with :attr:`ExitCode.GENERAL_ERROR`.

Contents:
    * :func:`cli_deploy` - Build, package, install, restart, verify.
    * :func:`cli_healthcheck` - Poll the health URL only.
    * :func:`cli_check` - Report which required tools are installed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import lib_log_rich.runtime
import rich_click as click

from hola_deploy.application.deploy import run_deployment, run_health_check
from hola_deploy.application.prerequisites import check_prerequisites, format_prerequisites_report
from hola_deploy.domain.errors import ConfigurationError, DeploymentError

from ..constants import CLICK_CONTEXT_SETTINGS, STATUS_PREFIX
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

if TYPE_CHECKING:
    from hola_deploy.adapters.toolchain.settings import DeploySettings

logger = logging.getLogger(__name__)


def _load_settings(cli_ctx: CLIContext) -> DeploySettings:
    """Parse ``[deploy]`` or exit with CONFIG_ERROR."""
    try:
        return cli_ctx.services.load_deploy_settings(cli_ctx.config)
    except ConfigurationError as exc:
        _reject_config(exc)


def _reject_config(exc: ConfigurationError) -> NoReturn:
    """Report invalid deployment settings and exit with CONFIG_ERROR."""
    click.echo(f"Error: {exc}", err=True)
    raise SystemExit(ExitCode.CONFIG_ERROR) from exc


def _abort(exc: DeploymentError) -> NoReturn:
    """Report a fatal pipeline error and exit with GENERAL_ERROR."""
    logger.error("Deployment failed", extra={"stage": exc.stage.value, "error": str(exc)})
    click.echo(f"{STATUS_PREFIX} ERROR: {exc}", err=True)
    if exc.hint:
        click.echo(exc.hint, err=True)
    raise SystemExit(ExitCode.GENERAL_ERROR) from exc


@click.command("deploy", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_deploy(ctx: click.Context) -> None:
    """Build, package and deploy the application, then verify it responds.

    Runs in the current directory: checks required tools, locates the
    servlet API jar, pulls the latest sources, compiles them into
    build/WEB-INF/classes, zips the tree into <app>.war, copies it into the
    container's webapps directory, restarts the container and polls the
    health URL. Every parameter comes from the [deploy] configuration
    section; use --set deploy.KEY=VALUE to override one.

    Example:
        hola-deploy deploy
        hola-deploy --set deploy.service_name=tomcat9 deploy
    """
    cli_ctx = get_cli_context(ctx)
    settings = _load_settings(cli_ctx)
    services = cli_ctx.services

    extra = {"command": "deploy", "app": settings.app_name, "service": settings.service_name}
    with lib_log_rich.runtime.bind(job_id="cli-deploy", extra=extra):
        logger.info("Starting deployment of %s", settings.app_name)
        try:
            report = run_deployment(
                settings,
                project_dir=Path.cwd(),
                find_tool=services.find_tool,
                run_command=services.run_command,
                probe_url=services.probe_url,
                sleep=services.sleep,
            )
        except ConfigurationError as exc:
            _reject_config(exc)
        except DeploymentError as exc:
            _abort(exc)
        click.echo(
            f"{STATUS_PREFIX} OK: {report.archive.name} deployed, the application responds at {report.health_url}"
        )


@click.command("healthcheck", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_healthcheck(ctx: click.Context) -> None:
    """Poll the configured health URL without deploying anything.

    Uses deploy.health_url, deploy.health_attempts and
    deploy.health_interval.
    """
    cli_ctx = get_cli_context(ctx)
    settings = _load_settings(cli_ctx)

    with lib_log_rich.runtime.bind(job_id="cli-healthcheck", extra={"command": "healthcheck"}):
        try:
            attempts = run_health_check(settings, probe_url=cli_ctx.services.probe_url, sleep=cli_ctx.services.sleep)
        except DeploymentError as exc:
            _abort(exc)
        click.echo(f"{STATUS_PREFIX} OK: the application responds at {settings.probe_url} (attempt {attempts})")


@click.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_check(ctx: click.Context) -> None:
    """Report which of the required external tools are installed."""
    cli_ctx = get_cli_context(ctx)
    settings = _load_settings(cli_ctx)

    with lib_log_rich.runtime.bind(job_id="cli-check", extra={"command": "check"}):
        results = check_prerequisites(settings.required_tools, find_tool=cli_ctx.services.find_tool)
        click.echo(format_prerequisites_report(results))
        if not all(result.found for result in results):
            raise SystemExit(ExitCode.GENERAL_ERROR)


__all__ = ["cli_check", "cli_deploy", "cli_healthcheck"]
