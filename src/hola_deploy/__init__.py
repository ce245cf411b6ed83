"""Public package surface exposing the greeting, configuration and deploy use case.

Imports are routed through the architectural layers:
- Domain exports: greeting text and error types
- Application exports: the deployment pipeline
- Composition exports: wired configuration loader
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.deploy import DeploymentReport, run_deployment

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain.behaviors import CANONICAL_GREETING, build_greeting
from .domain.errors import DeploymentError

__all__ = [
    "CANONICAL_GREETING",
    "DeploymentError",
    "DeploymentReport",
    "build_greeting",
    "get_config",
    "print_info",
    "run_deployment",
]
