"""Values shared by several CLI commands."""

from __future__ import annotations

from typing import Final

#: Accept ``-h`` as well as ``--help`` on every command.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Leading tag of every status and error line the deploy commands print.
STATUS_PREFIX: Final[str] = "[deploy]"

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "STATUS_PREFIX",
]
