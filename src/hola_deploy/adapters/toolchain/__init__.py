"""Toolchain adapter - settings, external commands and the health probe.

Contents:
    * :mod:`.settings` - Pydantic models for ``[deploy]`` and ``[server]``
    * :mod:`.commands` - ``PATH`` lookup and subprocess execution
    * :mod:`.health` - httpx health probe and sleep
"""

from __future__ import annotations

from .commands import find_tool, normalize_returncode, run_command
from .health import probe_url, sleep
from .settings import DeploySettings, ServerSettings, load_deploy_settings, load_server_settings

__all__ = [
    "DeploySettings",
    "ServerSettings",
    "find_tool",
    "load_deploy_settings",
    "load_server_settings",
    "normalize_returncode",
    "probe_url",
    "run_command",
    "sleep",
]
