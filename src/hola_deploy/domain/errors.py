"""Domain-specific exceptions for typed error handling at boundaries.

Every deployment failure is fatal. Each subclass pins the pipeline stage it
belongs to so the CLI can report where the run stopped.
"""

from __future__ import annotations

from .enums import DeployStage


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Example:
        >>> err = ConfigurationError("deploy.health_attempts must be >= 1")
        >>> str(err)
        'deploy.health_attempts must be >= 1'
    """


class DeploymentError(Exception):
    """Base class for every fatal deployment pipeline failure.

    Attributes:
        stage: Pipeline stage that failed.
        hint: Optional follow-up suggestion shown below the message.

    Example:
        >>> err = NoSourcesError("No .java files found in src")
        >>> err.stage
        <DeployStage.COLLECT_SOURCES: 'collect-sources'>
        >>> err.hint is None
        True
    """

    stage: DeployStage = DeployStage.PREREQUISITES

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class MissingToolError(DeploymentError):
    """A required external command is not on ``PATH``."""

    stage = DeployStage.PREREQUISITES


class MissingLibraryError(DeploymentError):
    """The compile-time library was not found in any candidate directory."""

    stage = DeployStage.LOCATE_LIBRARY


class SourceRefreshError(DeploymentError):
    """Pulling the latest sources from version control failed."""

    stage = DeployStage.REFRESH_SOURCES


class BuildPrepareError(DeploymentError):
    """The build directory could not be removed or recreated."""

    stage = DeployStage.PREPARE_BUILD


class NoSourcesError(DeploymentError):
    """The source directory contains nothing to compile."""

    stage = DeployStage.COLLECT_SOURCES


class CompileError(DeploymentError):
    """The compiler reported a failure."""

    stage = DeployStage.COMPILE


class PackageError(DeploymentError):
    """Writing the web archive failed."""

    stage = DeployStage.PACKAGE


class DeployCopyError(DeploymentError):
    """Copying the archive into the container's webapps directory failed."""

    stage = DeployStage.INSTALL


class ServiceRestartError(DeploymentError):
    """Restarting the container service failed."""

    stage = DeployStage.RESTART


class HealthCheckTimeoutError(DeploymentError):
    """The health URL never answered within the polling window.

    Attributes:
        attempts: Number of probes made before giving up.
    """

    stage = DeployStage.HEALTH_CHECK

    def __init__(self, message: str, *, attempts: int, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.attempts = attempts


__all__ = [
    "BuildPrepareError",
    "CompileError",
    "ConfigurationError",
    "DeployCopyError",
    "DeploymentError",
    "HealthCheckTimeoutError",
    "MissingLibraryError",
    "MissingToolError",
    "NoSourcesError",
    "PackageError",
    "ServiceRestartError",
    "SourceRefreshError",
]
