"""Domain layer - pure logic with no I/O or framework dependencies.

Contents:
    * :mod:`.behaviors` - Greeting text and naming rules
    * :mod:`.enums` - Domain enumerations (OutputFormat, DeployTarget, DeployStage)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .behaviors import (
    CANONICAL_GREETING,
    build_greeting,
    default_archive_name,
    default_health_url,
    greeting_route,
)
from .enums import DeployStage, DeployTarget, OutputFormat
from .errors import (
    BuildPrepareError,
    CompileError,
    ConfigurationError,
    DeployCopyError,
    DeploymentError,
    HealthCheckTimeoutError,
    MissingLibraryError,
    MissingToolError,
    NoSourcesError,
    PackageError,
    ServiceRestartError,
    SourceRefreshError,
)

__all__ = [
    # Behaviors
    "CANONICAL_GREETING",
    "build_greeting",
    "default_archive_name",
    "default_health_url",
    "greeting_route",
    # Enums
    "DeployStage",
    "DeployTarget",
    "OutputFormat",
    # Errors
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
