"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info commands from :mod:`.info`
    * Config commands from :mod:`.config`
    * Deployment commands from :mod:`.deploy_cmd`
    * Greeting server command from :mod:`.serve_cmd`
"""

from __future__ import annotations

from .config import cli_config, cli_config_deploy
from .deploy_cmd import cli_check, cli_deploy, cli_healthcheck
from .info import cli_greet, cli_info
from .serve_cmd import cli_serve

__all__ = [
    "cli_check",
    "cli_config",
    "cli_config_deploy",
    "cli_deploy",
    "cli_greet",
    "cli_healthcheck",
    "cli_info",
    "cli_serve",
]
