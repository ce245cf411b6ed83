"""In-memory greeting server adapter for testing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ServerSpy:
    """Records ``serve_greeting`` calls instead of binding a socket."""

    served: list[dict[str, Any]] = field(default_factory=list)

    def serve_greeting(self, *, host: str, port: int, app_name: str) -> None:
        """Record the requested bind address and application name."""
        self.served.append({"host": host, "port": port, "app_name": app_name})


__all__ = ["ServerSpy"]
