"""Type-safe domain enums for output formats, config targets and deploy stages."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeployTarget(str, Enum):
    """Configuration deployment target layers.

    Attributes:
        APP: System-wide application configuration (requires privileges).
        HOST: System-wide host-specific configuration (requires privileges).
        USER: User-specific configuration (~/.config on Linux).

    Example:
        >>> DeployTarget.USER.value
        'user'
    """

    APP = "app"
    HOST = "host"
    USER = "user"


class DeployStage(str, Enum):
    """Ordered stages of the deployment pipeline.

    Declaration order is execution order. Every stage is a terminal-failure
    gate: the pipeline never returns to an earlier stage.

    Example:
        >>> [stage.value for stage in DeployStage][:3]
        ['prerequisites', 'locate-library', 'refresh-sources']
        >>> len(DeployStage)
        10
    """

    PREREQUISITES = "prerequisites"
    LOCATE_LIBRARY = "locate-library"
    REFRESH_SOURCES = "refresh-sources"
    PREPARE_BUILD = "prepare-build"
    COLLECT_SOURCES = "collect-sources"
    COMPILE = "compile"
    PACKAGE = "package"
    INSTALL = "install"
    RESTART = "restart"
    HEALTH_CHECK = "health-check"


__all__ = [
    "DeployStage",
    "DeployTarget",
    "OutputFormat",
]
