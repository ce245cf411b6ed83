"""Prerequisite tool checking for the deployment pipeline.

Verifies that required external tools are present on the executing machine
and formats installation instructions for any that are missing.

Contents:
    * :class:`ToolCheck` - Frozen result of a single tool presence check.
    * :func:`check_prerequisites` - Check every configured tool.
    * :func:`format_prerequisites_report` - Format results as human-readable summary.
    * :func:`require_tools` - Fail fast on the first missing tool.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.errors import MissingToolError

if TYPE_CHECKING:
    from .ports import FindTool

_INSTALL_HINTS: dict[str, str] = {
    "git": "sudo apt install git",
    "javac": "sudo apt install default-jdk-headless",
    "jar": "sudo apt install default-jdk-headless",
    "sudo": "apt install sudo (as root)",
    "systemctl": "systemd is required to restart the container service",
    "curl": "sudo apt install curl",
}


@dataclass(frozen=True, slots=True)
class ToolCheck:
    """Result of checking whether a single external tool is available."""

    name: str
    found: bool
    install_hint: str


def install_hint(name: str) -> str:
    """Return the installation hint for a tool.

    Example:
        >>> install_hint("git")
        'sudo apt install git'
        >>> install_hint("zip")
        'sudo apt install zip'
    """
    return _INSTALL_HINTS.get(name, f"sudo apt install {name}")


def check_prerequisites(tools: Iterable[str], *, find_tool: FindTool) -> list[ToolCheck]:
    """Check every tool in order and report which ones resolve on ``PATH``."""
    return [ToolCheck(name=name, found=find_tool(name) is not None, install_hint=install_hint(name)) for name in tools]


def format_prerequisites_report(results: list[ToolCheck]) -> str:
    """Format check results as a human-readable summary."""
    lines = ["Prerequisites:"]
    for tool in results:
        if tool.found:
            lines.append(f"  ✓ {tool.name}")
        else:
            lines.append(f"  ✗ {tool.name} - not found")
            lines.append(f"      Install: {tool.install_hint}")
    return "\n".join(lines)


def require_tools(tools: Iterable[str], *, find_tool: FindTool) -> None:
    """Raise on the first tool that does not resolve.

    Raises:
        MissingToolError: Naming the missing tool, with an install hint.
    """
    for name in tools:
        if find_tool(name) is None:
            raise MissingToolError(f"Missing required command: {name}", hint=f"Install: {install_hint(name)}")


__all__ = [
    "ToolCheck",
    "check_prerequisites",
    "format_prerequisites_report",
    "install_hint",
    "require_tools",
]
