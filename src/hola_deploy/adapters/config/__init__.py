"""Configuration adapter - loading, deployment, display, and overrides.

Contents:
    * :mod:`.loader` - Layered configuration loading with caching
    * :mod:`.deploy` - Default configuration deployment to target layers
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
"""

from __future__ import annotations

from .deploy import deploy_configuration
from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
]
