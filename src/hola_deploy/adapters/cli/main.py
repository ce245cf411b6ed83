"""CLI entry point and execution wrapper.

Provides the entry point used by console scripts and ``python -m``
execution, ensuring consistent error handling and traceback restoration.

Contents:
    * :func:`main` - Primary entry point for CLI execution.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import lib_log_rich.runtime

from hola_deploy import __init__conf__

from .context import TracebackState, apply_traceback_preferences

if TYPE_CHECKING:
    from hola_deploy.composition import AppServices

#: Characters of error output shown without --traceback.
_SUMMARY_LIMIT = 500

#: Characters of error output shown with --traceback.
_VERBOSE_LIMIT = 10_000


def _exit_code_of(exc: SystemExit) -> int:
    if exc.code is None:
        return 0
    if isinstance(exc.code, int):
        return exc.code
    return 1


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the click group and translate every outcome into an exit code."""
    import sys

    import click

    from .root import cli

    # lib_cli_exit_tools.run_cli cannot pass ctx.obj, so click is driven
    # directly with standalone_mode disabled.
    args = list(argv) if argv is not None else sys.argv[1:]

    try:
        cli.main(
            args=args,
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
        return 0
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        return _exit_code_of(exc)
    except BaseException as exc:
        # KeyboardInterrupt and unexpected errors are rendered by
        # lib_cli_exit_tools, which also maps signals to 128+N.
        tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        apply_traceback_preferences(tracebacks_enabled)
        length_limit = _VERBOSE_LIMIT if tracebacks_enabled else _SUMMARY_LIMIT
        lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
        return lib_cli_exit_tools.get_system_exit_code(exc)


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Optional CLI arguments; ``None`` uses ``sys.argv``.
        restore_traceback: Restore the prior traceback flags afterwards.
        services_factory: Callable returning :class:`AppServices`. Callers
            outside the adapters layer pass ``build_production``.

    Raises:
        ValueError: If ``services_factory`` is missing.

    Example:
        >>> from hola_deploy.composition import build_production
        >>> main(["--help"], services_factory=build_production)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = TracebackState.capture()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            previous_state.restore()
        # Shutting down from a worker thread would stop logging for the whole process.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
