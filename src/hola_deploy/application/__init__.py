"""Application layer - use cases and port definitions.

Contains the deployment use cases that orchestrate domain logic through
port protocols implemented by adapters.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
    * :mod:`.prerequisites` - External tool checks
    * :mod:`.deploy` - Ten-stage deployment pipeline and health poll
"""

from __future__ import annotations

from .deploy import DeploymentReport, run_deployment, run_health_check, wait_until_healthy
from .ports import (
    DeployConfiguration,
    DisplayConfig,
    FindTool,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadDeploySettings,
    LoadServerSettings,
    ProbeUrl,
    RunCommand,
    ServeGreeting,
    Sleep,
)
from .prerequisites import ToolCheck, check_prerequisites, format_prerequisites_report, require_tools

__all__ = [
    # Ports
    "DeployConfiguration",
    "DisplayConfig",
    "FindTool",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadDeploySettings",
    "LoadServerSettings",
    "ProbeUrl",
    "RunCommand",
    "ServeGreeting",
    "Sleep",
    # Use cases
    "DeploymentReport",
    "ToolCheck",
    "check_prerequisites",
    "format_prerequisites_report",
    "require_tools",
    "run_deployment",
    "run_health_check",
    "wait_until_healthy",
]
