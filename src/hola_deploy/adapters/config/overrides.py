"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One ``--set`` assignment split into section, key path and value."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split ``SECTION.KEY[.SUBKEY...]=VALUE`` into a :class:`ConfigOverride`.

    The first ``=`` ends the dotted path; the first dot ends the section.

    Raises:
        ValueError: Without ``=``, without a dot in the path, or with an
            empty section or key component.

    Examples:
        >>> override = parse_override("deploy.health_attempts=5")
        >>> override.section, override.key_path, override.value
        ('deploy', ('health_attempts',), 5)

        >>> parse_override("deploy.required_tools=[\\"git\\"]").value
        ['git']
    """
    path_part, sep, value_str = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_parts = path_part.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=tuple(key_parts), value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret ``raw`` as JSON, falling back to the plain string.

    Examples:
        >>> coerce_value("20")
        20
        >>> coerce_value("0.5")
        0.5
        >>> coerce_value("false")
        False
        >>> coerce_value("tomcat9")
        'tomcat9'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Insert ``override`` into ``target``, creating intermediate tables.

    Raises:
        TypeError: If an intermediate key already holds a non-table value.

    Example:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _nest_override(tree, ConfigOverride(section="server", key_path=("port",), value=9090))
        >>> tree
        {'server': {'port': 9090}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` override deep-merged on top.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> from lib_layered_config import Config
        >>> cfg = Config({"deploy": {"service_name": "tomcat10"}}, {})
        >>> apply_overrides(cfg, ("deploy.service_name=tomcat9",))["deploy"]["service_name"]
        'tomcat9'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
