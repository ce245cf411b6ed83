"""CLI command running the greeting handler locally.

Contents:
    * :func:`cli_serve` - Serve ``GET /<app_name>/`` with the Flask dev server.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from hola_deploy.domain.behaviors import greeting_route
from hola_deploy.domain.errors import ConfigurationError

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("serve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--host", type=str, default=None, help="Bind address (default: server.host)")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Bind port (default: server.port)")
@click.pass_context
def cli_serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the greeting endpoint until interrupted.

    The default address matches the deploy health URL, so
    ``hola-deploy healthcheck`` succeeds against a running ``serve``.

    Example:
        hola-deploy serve --port 8080
    """
    cli_ctx = get_cli_context(ctx)
    try:
        settings = cli_ctx.services.load_server_settings(cli_ctx.config)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc

    bind_host = host or settings.host
    bind_port = port or settings.port
    extra = {"command": "serve", "host": bind_host, "port": bind_port}
    with lib_log_rich.runtime.bind(job_id="cli-serve", extra=extra):
        click.echo(f"Serving http://{bind_host}:{bind_port}{greeting_route(settings.app_name)}")
        cli_ctx.services.serve_greeting(host=bind_host, port=bind_port, app_name=settings.app_name)


__all__ = ["cli_serve"]
