"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.config` - Configuration loading, deployment, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.toolchain` - Deploy settings, external commands, health probe
    * :mod:`.web` - Flask greeting handler
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
