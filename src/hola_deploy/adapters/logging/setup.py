"""Single place where the lib_log_rich runtime is configured.

Every entry point (console script, ``python -m``, tests using production
wiring) calls :func:`init_logging` once the layered configuration is loaded.
Pipeline modules only use ``logging.getLogger(__name__)``; the standard
logging bridge routes those records into lib_log_rich.

Contents:
    * :class:`LoggingConfigModel` - Boundary model for the ``[lib_log_rich]`` section.
    * :func:`init_logging` - Idempotent runtime initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from hola_deploy import __init__conf__


class LoggingConfigModel(BaseModel):
    """Validated ``[lib_log_rich]`` section; unknown keys pass through.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(service="deployer").service
        'deployer'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    ``service`` falls back to the distribution name so log records from a
    deployment run are attributable without any configuration.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich once per process and bridge std logging.

    Loads ``.env`` files first so ``LOG_*`` variables take effect. Later
    calls return immediately.
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
