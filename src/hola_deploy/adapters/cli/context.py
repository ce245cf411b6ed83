"""Per-invocation CLI state and traceback flag handling.

The root group loads configuration and wires services once; subcommands
read the result through :func:`get_cli_context`. ``--traceback`` is
mirrored into ``lib_cli_exit_tools.config`` because that is where the
error renderer looks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from hola_deploy.composition import AppServices


@dataclass(frozen=True, slots=True)
class TracebackState:
    """The two ``lib_cli_exit_tools`` flags that control error rendering.

    Example:
        >>> state = TracebackState(enabled=True, force_color=False)
        >>> state.enabled, state.force_color
        (True, False)
    """

    enabled: bool
    force_color: bool

    @classmethod
    def capture(cls) -> TracebackState:
        """Read the flags currently set on ``lib_cli_exit_tools.config``."""
        config = lib_cli_exit_tools.config
        return cls(
            enabled=bool(getattr(config, "traceback", False)),
            force_color=bool(getattr(config, "traceback_force_color", False)),
        )

    def restore(self) -> None:
        """Write these flags back onto ``lib_cli_exit_tools.config``."""
        lib_cli_exit_tools.config.traceback = self.enabled
        lib_cli_exit_tools.config.traceback_force_color = self.force_color


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn full, colored tracebacks on or off together."""
    TracebackState(enabled=bool(enabled), force_color=bool(enabled)).restore()


@dataclass(slots=True)
class CLIContext:
    """What every subcommand receives from the root group.

    Attributes:
        traceback: Whether ``--traceback`` was given.
        config: Configuration with ``--set`` overrides applied.
        services: Wired adapters for this invocation.
        profile: Profile passed to ``--profile``, if any.
        set_overrides: Raw ``--set`` values, reapplied when a subcommand
            reloads configuration for another profile.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def store_cli_context(ctx: click.Context, cli_ctx: CLIContext) -> None:
    """Swap the services factory in ``ctx.obj`` for the loaded state."""
    ctx.obj = cli_ctx


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the state stored by the root group.

    Raises:
        RuntimeError: If a subcommand runs without the root group.
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized; invoke subcommands through the root group")
    return ctx.obj


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "store_cli_context",
]
