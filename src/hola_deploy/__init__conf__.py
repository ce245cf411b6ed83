"""Static package metadata surfaced to CLI commands and documentation.

Values mirror ``pyproject.toml`` so ``info`` and ``--version`` report the
installed release without importing ``importlib.metadata`` at startup.

Contents:
    * Distribution identifiers (:data:`name`, :data:`version`, ...).
    * ``lib_layered_config`` identifiers used to locate configuration files.
    * :func:`print_info` - Render the metadata block for the ``info`` command.
"""

from __future__ import annotations

from typing import Final

#: Distribution name as published in ``pyproject.toml``.
name: Final[str] = "hola-deploy"
#: One-line description shown in ``--help``.
title: Final[str] = "Build, package and deploy the hola greeting servlet"
#: Release version.
version: Final[str] = "1.0.0"
homepage: Final[str] = "https://github.com/hola-deploy/hola-deploy"
author: Final[str] = "hola-deploy maintainers"
author_email: Final[str] = "maintainers@hola-deploy.invalid"
#: Console script installed by the package.
shell_command: Final[str] = "hola-deploy"

#: Vendor/app/slug used by lib_layered_config to build platform paths.
LAYEREDCONF_VENDOR: Final[str] = "hola-deploy"
LAYEREDCONF_APP: Final[str] = "hola-deploy"
LAYEREDCONF_SLUG: Final[str] = "hola-deploy"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for hola-deploy:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
