"""Deployment and server settings models and loaders.

Provides the pydantic models holding every parameter of the deployment
pipeline and of the local greeting server, plus loaders that build them
from the layered configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hola_deploy.domain.behaviors import default_archive_name, default_health_url
from hola_deploy.domain.errors import ConfigurationError


class DeploySettings(BaseModel):
    """Validated, immutable parameters of one deployment run.

    Relative paths are resolved against the project directory by the
    pipeline; absolute paths are used as given.

    Example:
        >>> settings = DeploySettings()
        >>> settings.archive_file
        'hola.war'
        >>> settings.probe_url
        'http://localhost:8080/hola/'
        >>> settings.health_attempts
        20
    """

    model_config = ConfigDict(frozen=True)

    app_name: str = "hola"
    source_dir: Path = Path("src")
    build_dir: Path = Path("build")
    archive_name: str | None = None
    source_suffix: str = ".java"
    classes_subdir: str = "WEB-INF/classes"

    required_tools: list[str] = Field(default_factory=lambda: ["git", "javac", "sudo"])
    library_pattern: str = "jakarta.servlet-api*.jar"
    library_dirs: list[Path] = Field(
        default_factory=lambda: [Path("/usr/share/tomcat10/lib"), Path("/var/lib/tomcat10/lib")]
    )

    refresh_command: list[str] = Field(default_factory=lambda: ["git", "pull", "--rebase"])
    compiler: str = "javac"
    elevate_command: list[str] = Field(default_factory=lambda: ["sudo"])
    restart_command: list[str] = Field(default_factory=lambda: ["systemctl", "restart"])

    webapps_dir: Path = Path("/var/lib/tomcat10/webapps")
    service_name: str = "tomcat10"

    health_url: str | None = None
    health_attempts: int = Field(default=20, ge=1)
    health_interval: float = Field(default=1.0, ge=0)
    probe_timeout: float = Field(default=1.0, gt=0)

    @field_validator("app_name")
    @classmethod
    def _validate_app_name(cls, v: str) -> str:
        """Reject names that cannot form a context path.

        Examples:
            >>> DeploySettings._validate_app_name("hola")
            'hola'
            >>> DeploySettings._validate_app_name("a/b")
            Traceback (most recent call last):
            ...
            ValueError: app_name must be a single path segment, got 'a/b'
        """
        name = v.strip()
        if not name or "/" in name:
            raise ValueError(f"app_name must be a single path segment, got {v!r}")
        return name

    @field_validator("build_dir")
    @classmethod
    def _validate_build_dir(cls, v: Path) -> Path:
        """Require a relative subdirectory; the build tree is deleted on every run.

        Blank values parse as ``.`` and are rejected too.

        Examples:
            >>> DeploySettings._validate_build_dir(Path("out/build")).as_posix()
            'out/build'
            >>> DeploySettings._validate_build_dir(Path(""))
            Traceback (most recent call last):
            ...
            ValueError: build_dir must be a relative subdirectory of the project, got '.'
        """
        if v.is_absolute() or v == Path(".") or ".." in v.parts:
            raise ValueError(f"build_dir must be a relative subdirectory of the project, got {str(v)!r}")
        return v

    @field_validator(
        "required_tools",
        "refresh_command",
        "elevate_command",
        "restart_command",
        "library_dirs",
        mode="before",
    )
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[Any]:
        """Split whitespace-separated strings from env vars and .env files.

        Examples:
            >>> DeploySettings._coerce_string_to_list("git pull --rebase")
            ['git', 'pull', '--rebase']
            >>> DeploySettings._coerce_string_to_list("")
            []
            >>> DeploySettings._coerce_string_to_list(["sudo"])
            ['sudo']
        """
        if isinstance(v, str):
            return v.split()
        if isinstance(v, (list, tuple)):
            return list(cast("list[Any]", v))
        return []

    @field_validator("archive_name", "health_url", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat empty strings from config files as "use the default"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def archive_file(self) -> str:
        """Archive file name, derived from ``app_name`` unless configured."""
        return self.archive_name or default_archive_name(self.app_name)

    @property
    def probe_url(self) -> str:
        """Health-check URL, derived from ``app_name`` unless configured."""
        return self.health_url or default_health_url(self.app_name)

    @property
    def service_log_hint(self) -> str:
        """Command users should run to inspect the container service logs."""
        return " ".join([*self.elevate_command, "journalctl", "-u", self.service_name, "-n", "200", "--no-pager"])


class ServerSettings(BaseModel):
    """Validated settings for the local greeting server.

    Example:
        >>> ServerSettings().port
        8080
    """

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    app_name: str = "hola"


def _section(config: Config | Mapping[str, Any], name: str) -> dict[str, Any]:
    raw: object = config.get(name, {})
    return cast("dict[str, Any]", raw) if raw else {}


def load_deploy_settings(config: Config) -> DeploySettings:
    """Build :class:`DeploySettings` from the ``[deploy]`` configuration section.

    Raises:
        ConfigurationError: If the section holds invalid values.

    Example:
        >>> from lib_layered_config import Config
        >>> load_deploy_settings(Config({"deploy": {"app_name": "demo"}}, {})).archive_file
        'demo.war'
    """
    try:
        return DeploySettings.model_validate(_section(config, "deploy"))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [deploy] configuration: {exc}") from exc


def load_server_settings(config: Config) -> ServerSettings:
    """Build :class:`ServerSettings` from the ``[server]`` configuration section.

    Raises:
        ConfigurationError: If the section holds invalid values.
    """
    try:
        return ServerSettings.model_validate(_section(config, "server"))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [server] configuration: {exc}") from exc


__all__ = [
    "DeploySettings",
    "ServerSettings",
    "load_deploy_settings",
    "load_server_settings",
]
