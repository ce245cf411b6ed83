"""In-memory adapter implementations for testing.

Lightweight implementations of all application ports that operate entirely
in memory -- no subprocesses, no sockets, no sleeping, no logging framework.

Contents:
    * :mod:`.config` - Configuration store
    * :mod:`.logging` - In-memory logging adapter
    * :mod:`.toolchain` - Command, probe and sleep spies
    * :mod:`.web` - Greeting server spy
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import ConfigStore
from .logging import init_logging_in_memory
from .toolchain import CommandSpy, HealthProbeScript, SleepRecorder
from .web import ServerSpy

if TYPE_CHECKING:
    from hola_deploy.application.ports import (
        DeployConfiguration,
        DisplayConfig,
        FindTool,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        ProbeUrl,
        RunCommand,
        ServeGreeting,
        Sleep,
    )

    _assert_get_config: GetConfig = ConfigStore().get_config
    _assert_get_default_config_path: GetDefaultConfigPath = ConfigStore().get_default_config_path
    _assert_deploy_configuration: DeployConfiguration = ConfigStore().deploy_configuration
    _assert_display_config: DisplayConfig = ConfigStore().display_config
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_find_tool: FindTool = CommandSpy().find_tool
    _assert_run_command: RunCommand = CommandSpy().run_command
    _assert_probe_url: ProbeUrl = HealthProbeScript().probe_url
    _assert_sleep: Sleep = SleepRecorder().sleep
    _assert_serve: ServeGreeting = ServerSpy().serve_greeting

__all__ = [
    "CommandSpy",
    "ConfigStore",
    "HealthProbeScript",
    "ServerSpy",
    "SleepRecorder",
    "init_logging_in_memory",
]
