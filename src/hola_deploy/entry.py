"""Console script entry point with production wiring.

Lives at package level, outside ``adapters``, so composition can be wired
into the CLI without the adapters layer importing it.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run ``hola-deploy`` with production services and return the exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
