"""Subprocess-backed adapters for external tools.

Contents:
    * :func:`normalize_returncode` - Convert signal codes to POSIX 128+N.
    * :func:`find_tool` - Resolve an executable on ``PATH``.
    * :func:`run_command` - Run a command with inherited stdio.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_returncode(code: int) -> int:
    """Convert negative signal return codes to POSIX 128+N convention.

    Python's ``subprocess`` reports signal-killed processes as negative values
    (e.g., -2 for SIGINT). POSIX convention is 128+N (e.g., 130 for SIGINT).

    Example:
        >>> normalize_returncode(-2)
        130
        >>> normalize_returncode(1)
        1
    """
    if code < 0:
        return 128 + abs(code)
    return code


def find_tool(name: str) -> str | None:
    """Return the absolute path of ``name`` on ``PATH`` or ``None``."""
    return shutil.which(name)


def run_command(command: Sequence[str], *, cwd: Path | None = None) -> int:
    """Run ``command`` with the caller's stdio and return its exit status.

    Output streams straight to the terminal so compiler diagnostics and
    privilege prompts reach the user unchanged.

    Returns:
        POSIX-conventional exit status; ``127`` when the executable is missing.
    """
    logger.debug("Running command", extra={"command": list(command), "cwd": str(cwd) if cwd else None})
    try:
        result = subprocess.run(list(command), cwd=cwd, check=False)  # noqa: S603
    except FileNotFoundError:
        logger.error("Executable not found", extra={"command": list(command)})
        return 127
    return normalize_returncode(result.returncode)


__all__ = [
    "find_tool",
    "normalize_returncode",
    "run_command",
]
