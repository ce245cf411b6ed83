"""Shared pytest fixtures for CLI, pipeline and module-entry tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from hola_deploy.adapters.memory import CommandSpy, HealthProbeScript, SleepRecorder
    from hola_deploy.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

SERVLET_SOURCE = """package hola;

public class HolaServlet {}
"""


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for command output and ``result.stderr`` for
    error lines; log records never reach stdout.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Example:
        def test_info(cli_runner: CliRunner, production_factory: Callable[[], AppServices]) -> None:
            result = cli_runner.invoke(cli, ["info"], obj=production_factory)
            assert result.exit_code == 0
    """
    from hola_deploy.composition import build_production

    return build_production


@pytest.fixture
def testing_factory() -> Callable[[], AppServices]:
    """Provide the in-memory services factory (no processes, sockets or sleeps)."""
    from hola_deploy.composition import build_testing

    return build_testing


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before each test.

    Only clears before, not after, so a monkeypatched loader without
    ``cache_clear`` does not break teardown.
    """
    from hola_deploy.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Example:
        def test_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"deploy": {"service_name": "tomcat9"}})
            assert config.get("deploy.service_name") == "tomcat9"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with injected Config.

    Only replaces the I/O boundary (``get_config``), not the Config object itself.
    """
    from hola_deploy.composition import build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = replace(build_production(), get_config=_fake_get_config)
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records every profile it receives."""
    from hola_deploy.composition import build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        test_services = replace(build_production(), get_config=_capturing_get_config)
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_deploy_configuration() -> Callable[[Callable[..., list[Path]]], Callable[[], AppServices]]:
    """Return a factory with a custom deploy_configuration function.

    Example:
        def test_deploy_called(cli_runner, inject_deploy_configuration) -> None:
            calls = []
            def spy_deploy(**kwargs) -> list[Path]:
                calls.append(kwargs)
                return [Path("/fake/path")]
            factory = inject_deploy_configuration(spy_deploy)
            cli_runner.invoke(cli, ["config-deploy", "--target", "user"], obj=factory)
            assert len(calls) == 1
    """
    from hola_deploy.composition import build_production

    def _inject(deploy_fn: Callable[..., list[Path]]) -> Callable[[], AppServices]:
        test_services = replace(build_production(), deploy_configuration=deploy_fn)
        return lambda: test_services

    return _inject


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a minimal servlet project with one source and a fake servlet API jar.

    Layout::

        tmp_path/
            lib/jakarta.servlet-api-6.0.0.jar
            src/hola/HolaServlet.java
    """
    source = tmp_path / "src" / "hola" / "HolaServlet.java"
    source.parent.mkdir(parents=True)
    source.write_text(SERVLET_SOURCE, encoding="utf-8")

    lib_dir = tmp_path / "lib"
    lib_dir.mkdir()
    (lib_dir / "jakarta.servlet-api-6.0.0.jar").write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return tmp_path


@pytest.fixture
def deploy_section(tmp_path: Path) -> dict[str, Any]:
    """Return a ``[deploy]`` section pointing at the ``project_dir`` layout."""
    return {
        "library_dirs": ["lib"],
        "webapps_dir": str(tmp_path / "webapps"),
    }


@dataclass
class DeployCliContext:
    """Container for deploy CLI test setup.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        commands: Spy recording external commands.
        probe: Scripted health probe.
        sleeper: Recorder of requested sleeps.
    """

    factory: Callable[[], Any]
    commands: CommandSpy
    probe: HealthProbeScript
    sleeper: SleepRecorder


@pytest.fixture
def deploy_cli_context(
    clear_config_cache: None,
) -> Callable[..., DeployCliContext]:
    """Create deploy CLI test context with injected config and toolchain spies.

    Logging uses the production initializer so ``runtime.bind`` behaves as
    it does for real invocations.

    Example:
        def test_deploy(cli_runner, deploy_cli_context, deploy_section) -> None:
            ctx = deploy_cli_context(deploy_section, healthy_from=3)
            result = cli_runner.invoke(cli, ["deploy"], obj=ctx.factory)
            assert len(ctx.probe.calls) == 3
    """
    from hola_deploy.adapters.memory import CommandSpy as CommandSpyImpl
    from hola_deploy.adapters.memory import ConfigStore
    from hola_deploy.adapters.memory import HealthProbeScript as HealthProbeScriptImpl
    from hola_deploy.adapters.memory import SleepRecorder as SleepRecorderImpl
    from hola_deploy.composition import build_production, build_testing

    def _create(
        deploy_data: dict[str, Any],
        *,
        healthy_from: int | None = 1,
        missing_tools: set[str] | None = None,
        exit_codes: dict[str, int] | None = None,
    ) -> DeployCliContext:
        commands = CommandSpyImpl(missing_tools=set(missing_tools or ()), exit_codes=dict(exit_codes or {}))
        probe = HealthProbeScriptImpl(healthy_from=healthy_from)
        sleeper = SleepRecorderImpl()
        config = ConfigStore({"deploy": deploy_data})

        test_services = replace(
            build_testing(config=config, commands=commands, probe=probe, sleeper=sleeper),
            init_logging=build_production().init_logging,
        )
        return DeployCliContext(factory=lambda: test_services, commands=commands, probe=probe, sleeper=sleeper)

    return _create
