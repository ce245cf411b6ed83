"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.deploy import deploy_configuration
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# Toolchain services
from ..adapters.toolchain.commands import find_tool, run_command
from ..adapters.toolchain.health import probe_url, sleep
from ..adapters.toolchain.settings import load_deploy_settings, load_server_settings

# Web services
from ..adapters.web.app import serve_greeting

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory import CommandSpy, ConfigStore, HealthProbeScript, ServerSpy, SleepRecorder
    from ..application.ports import (
        DeployConfiguration,
        DisplayConfig,
        FindTool,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadDeploySettings,
        LoadServerSettings,
        ProbeUrl,
        RunCommand,
        ServeGreeting,
        Sleep,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_deploy_configuration: DeployConfiguration = deploy_configuration
    _assert_display_config: DisplayConfig = display_config
    _assert_init_logging: InitLogging = init_logging
    _assert_load_deploy_settings: LoadDeploySettings = load_deploy_settings
    _assert_load_server_settings: LoadServerSettings = load_server_settings
    _assert_find_tool: FindTool = find_tool
    _assert_run_command: RunCommand = run_command
    _assert_probe_url: ProbeUrl = probe_url
    _assert_sleep: Sleep = sleep
    _assert_serve_greeting: ServeGreeting = serve_greeting


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    deploy_configuration: DeployConfiguration
    display_config: DisplayConfig
    init_logging: InitLogging
    load_deploy_settings: LoadDeploySettings
    load_server_settings: LoadServerSettings
    find_tool: FindTool
    run_command: RunCommand
    probe_url: ProbeUrl
    sleep: Sleep
    serve_greeting: ServeGreeting


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        deploy_configuration=deploy_configuration,
        display_config=display_config,
        init_logging=init_logging,
        load_deploy_settings=load_deploy_settings,
        load_server_settings=load_server_settings,
        find_tool=find_tool,
        run_command=run_command,
        probe_url=probe_url,
        sleep=sleep,
        serve_greeting=serve_greeting,
    )


def build_testing(
    *,
    config: ConfigStore | None = None,
    commands: CommandSpy | None = None,
    probe: HealthProbeScript | None = None,
    sleeper: SleepRecorder | None = None,
    server: ServerSpy | None = None,
) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Pass your own spies to assert on configuration loads, commands, probes
    and sleeps; fresh ones are created otherwise. Settings loaders stay
    real so the pydantic validation path is exercised.
    """
    from ..adapters.memory import (
        CommandSpy,
        ConfigStore,
        HealthProbeScript,
        ServerSpy,
        SleepRecorder,
        init_logging_in_memory,
    )

    config_store = config if config is not None else ConfigStore()
    command_spy = commands if commands is not None else CommandSpy()
    probe_script = probe if probe is not None else HealthProbeScript()
    sleep_recorder = sleeper if sleeper is not None else SleepRecorder()
    server_spy = server if server is not None else ServerSpy()

    return AppServices(
        get_config=config_store.get_config,
        get_default_config_path=config_store.get_default_config_path,
        deploy_configuration=config_store.deploy_configuration,
        display_config=config_store.display_config,
        init_logging=init_logging_in_memory,
        load_deploy_settings=load_deploy_settings,
        load_server_settings=load_server_settings,
        find_tool=command_spy.find_tool,
        run_command=command_spy.run_command,
        probe_url=probe_script.probe_url,
        sleep=sleep_recorder.sleep,
        serve_greeting=server_spy.serve_greeting,
    )


__all__ = [
    # Configuration
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    # Logging
    "init_logging",
    # Toolchain
    "find_tool",
    "load_deploy_settings",
    "load_server_settings",
    "probe_url",
    "run_command",
    "sleep",
    # Web
    "serve_greeting",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
