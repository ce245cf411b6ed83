"""Layered configuration loading with profile validation and caching."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from hola_deploy import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader callable that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that could escape the configuration directories.

    Args:
        profile: Profile name such as ``staging`` or ``production``.
        max_length: Optional length cap; defaults to lib_layered_config's limit.

    Raises:
        ValueError: For empty, overlong, reserved or path-traversing names.

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../etc")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml`` that seeds every lookup.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One entry per (profile, start_dir); the CLI is a short-lived process.
@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration for deploy, server and logging settings.

    Precedence (lowest to highest): bundled defaults → app → host → user →
    ``.env`` → environment variables prefixed with the configuration slug.

    Args:
        profile: Optional profile inserted as ``profile/<name>/`` into every
            configuration path.
        start_dir: Directory where ``.env`` discovery starts; defaults to the
            current working directory.

    Returns:
        Immutable configuration with provenance tracking.

    Example:
        >>> get_config().get("deploy", default={}).get("app_name")
        'hola'
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Forget cached configuration so the next call rereads all layers."""
    _read_layers.cache_clear()


_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
