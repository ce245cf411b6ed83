"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Module-level functions satisfy
these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``DeploySettings``) are imported under ``TYPE_CHECKING`` only so that
    layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..domain.enums import DeployTarget, OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.toolchain.settings import DeploySettings, ServerSettings


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DeployConfiguration(Protocol):
    """Deploy default configuration to specified target layers."""

    def __call__(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = ...,
        profile: str | None = ...,
    ) -> list[Path]: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class LoadDeploySettings(Protocol):
    """Parse the ``[deploy]`` section into validated settings."""

    def __call__(self, config: Config) -> DeploySettings: ...


class LoadServerSettings(Protocol):
    """Parse the ``[server]`` section into validated settings."""

    def __call__(self, config: Config) -> ServerSettings: ...


class FindTool(Protocol):
    """Resolve an executable name on ``PATH``; ``None`` when absent."""

    def __call__(self, name: str) -> str | None: ...


class RunCommand(Protocol):
    """Run an external command and return its exit status."""

    def __call__(self, command: Sequence[str], *, cwd: Path | None = ...) -> int: ...


class ProbeUrl(Protocol):
    """Issue one GET against a URL; ``True`` when it answers successfully."""

    def __call__(self, url: str, *, timeout: float = ...) -> bool: ...


class Sleep(Protocol):
    """Block the caller for the given number of seconds."""

    def __call__(self, seconds: float) -> None: ...


class ServeGreeting(Protocol):
    """Serve the greeting handler until interrupted."""

    def __call__(self, *, host: str, port: int, app_name: str) -> None: ...


__all__ = [
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
]
