"""Install the bundled default configuration into app/host/user layers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import deploy_config
from lib_layered_config.examples.deploy import DeployAction

from hola_deploy import __init__conf__
from hola_deploy.adapters.config.loader import get_default_config_path, validate_profile
from hola_deploy.domain.enums import DeployTarget

_WRITTEN = frozenset({DeployAction.CREATED, DeployAction.OVERWRITTEN})


def deploy_configuration(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
) -> list[Path]:
    """Copy ``defaultconfig.toml`` into the requested configuration layers.

    Lets operators pin ``[deploy]`` values (webapps directory, service name,
    library locations) for a host without editing the package.

    Args:
        targets: Layers to write (app and host usually need root).
        force: Overwrite files that already exist.
        profile: Optional profile subdirectory to deploy into.

    Returns:
        Paths that were created or overwritten; empty when everything existed.

    Raises:
        PermissionError: When a system layer is not writable.
        ValueError: For an invalid profile name.
    """
    if profile is not None:
        validate_profile(profile)

    results = deploy_config(
        source=get_default_config_path(),
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        targets=[target.value for target in targets],
        force=force,
    )

    written: list[Path] = []
    for result in results:
        if result.action in _WRITTEN:
            written.append(result.destination)
        written.extend(extra.destination for extra in result.dot_d_results if extra.action in _WRITTEN)
    return written


__all__ = ["deploy_configuration"]
