"""CLI package providing the command-line interface.

Re-exports the public symbols of its submodules so callers and tests import
from one place.
"""

from __future__ import annotations

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
from .constants import CLICK_CONTEXT_SETTINGS, STATUS_PREFIX
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    # Constants
    "CLICK_CONTEXT_SETTINGS",
    "STATUS_PREFIX",
    "ExitCode",
    # Traceback management
    "TracebackState",
    "apply_traceback_preferences",
    # Context helpers
    "CLIContext",
    "get_cli_context",
    "store_cli_context",
    # Root command
    "cli",
    # Entry point
    "main",
    # Commands
    "cli_check",
    "cli_config",
    "cli_config_deploy",
    "cli_deploy",
    "cli_greet",
    "cli_healthcheck",
    "cli_info",
    "cli_serve",
]
