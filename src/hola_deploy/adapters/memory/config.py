"""In-memory configuration store for tests.

:class:`ConfigStore` answers every configuration port from a plain dict and
records what the CLI asked of it, so tests never touch lib_layered_config's
layer discovery or the filesystem.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lib_layered_config import Config

from ...domain.enums import DeployTarget, OutputFormat


@dataclass
class ConfigStore:
    """Serve ``data`` as configuration and record loads, deploys and displays.

    Example:
        >>> store = ConfigStore({"deploy": {"service_name": "tomcat9"}})
        >>> store.get_config(profile="staging").get("deploy.service_name")
        'tomcat9'
        >>> store.profiles
        ['staging']
    """

    data: dict[str, Any] = field(default_factory=dict)
    profiles: list[str | None] = field(default_factory=list)
    deployed: list[tuple[DeployTarget, ...]] = field(default_factory=list)
    displayed: list[dict[str, Any]] = field(default_factory=list)

    def get_config(self, *, profile: str | None = None, start_dir: str | None = None) -> Config:
        self.profiles.append(profile)
        return Config(self.data, {})

    def get_default_config_path(self) -> Path:
        """A path under ``/nonexistent``; nothing is ever read from it."""
        return Path("/nonexistent/hola-deploy/defaultconfig.toml")

    def deploy_configuration(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = False,
        profile: str | None = None,
    ) -> list[Path]:
        """Record the requested targets; no file is written."""
        self.deployed.append(tuple(targets))
        return []

    def display_config(
        self,
        config: Config,
        *,
        output_format: OutputFormat = OutputFormat.HUMAN,
        section: str | None = None,
        profile: str | None = None,
    ) -> None:
        self.displayed.append({"format": output_format, "section": section, "profile": profile})


__all__ = ["ConfigStore"]
