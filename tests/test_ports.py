"""Port contract stories for in-memory adapters and composition wiring.

Production adapters are exercised by the CLI integration tests; static
conformance to the Protocols is asserted in the composition module.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from lib_layered_config import Config

from hola_deploy.adapters.memory import (
    CommandSpy,
    ConfigStore,
    HealthProbeScript,
    ServerSpy,
    SleepRecorder,
    init_logging_in_memory,
)
from hola_deploy.adapters.toolchain.settings import DeploySettings, load_deploy_settings
from hola_deploy.composition import AppServices, build_production, build_testing
from hola_deploy.domain.enums import DeployTarget, OutputFormat

# ======================== In-memory configuration ========================


@pytest.mark.os_agnostic
def test_config_store_serves_its_data_and_records_profiles() -> None:
    """Every load returns the stored data and remembers the requested profile."""
    store = ConfigStore({"deploy": {"service_name": "tomcat9"}})

    config = store.get_config(profile="staging")
    store.get_config()

    assert isinstance(config, Config)
    assert config.get("deploy.service_name") == "tomcat9"
    assert store.profiles == ["staging", None]


@pytest.mark.os_agnostic
def test_empty_config_store_yields_default_settings() -> None:
    """Settings models fall back to their defaults."""
    assert load_deploy_settings(ConfigStore().get_config()) == DeploySettings()


@pytest.mark.os_agnostic
def test_config_store_default_path_names_the_bundled_file() -> None:
    """The synthetic path keeps the real file name."""
    assert ConfigStore().get_default_config_path().name == "defaultconfig.toml"


@pytest.mark.os_agnostic
def test_config_store_records_deploy_targets_without_writing() -> None:
    """Simulated configuration deployment reports no written files."""
    store = ConfigStore()

    written = store.deploy_configuration(targets=[DeployTarget.USER, DeployTarget.HOST], force=True)

    assert written == []
    assert store.deployed == [(DeployTarget.USER, DeployTarget.HOST)]


@pytest.mark.os_agnostic
def test_display_and_logging_in_memory_are_silent(capsys: pytest.CaptureFixture[str]) -> None:
    """Displays are recorded, nothing is printed and no runtime starts."""
    store = ConfigStore()

    store.display_config(Config({"deploy": {}}, {}), output_format=OutputFormat.JSON, section="deploy")
    init_logging_in_memory(Config({}, {}))

    assert capsys.readouterr().out == ""
    assert store.displayed == [{"format": OutputFormat.JSON, "section": "deploy", "profile": None}]


# ======================== Toolchain spies ========================


@pytest.mark.os_agnostic
def test_command_spy_records_commands_and_scripted_exit_codes() -> None:
    """Exit codes apply when their key appears as a command token."""
    spy = CommandSpy(exit_codes={"restart": 3})

    assert spy.run_command(["sudo", "cp", "a", "b"]) == 0
    assert spy.run_command(["sudo", "systemctl", "restart", "tomcat10"]) == 3
    assert spy.programs() == ["cp", "systemctl"]


@pytest.mark.os_agnostic
def test_command_spy_emulates_compiler_output(tmp_path: Path) -> None:
    """A successful compile leaves one class file per source."""
    classes = tmp_path / "classes"
    classes.mkdir()
    argfile = tmp_path / "sources.txt"
    argfile.write_text(f"{tmp_path / 'hola' / 'HolaServlet.java'}\n", encoding="utf-8")

    CommandSpy().run_command(["javac", "-cp", "lib.jar", "-d", str(classes), f"@{argfile}"])

    assert (classes / "hola" / "HolaServlet.class").read_bytes() == b"compiled HolaServlet.java\n"


@pytest.mark.os_agnostic
def test_command_spy_reports_missing_tools() -> None:
    """Listed tools do not resolve."""
    spy = CommandSpy(missing_tools={"javac"})

    assert spy.find_tool("javac") is None
    assert spy.find_tool("git") == "/usr/bin/git"


@pytest.mark.os_agnostic
def test_health_probe_script_and_sleep_recorder() -> None:
    """Probes succeed from the scripted attempt; sleeps are only recorded."""
    probe = HealthProbeScript(healthy_from=3)
    sleeper = SleepRecorder()

    outcomes = [probe.probe_url("http://localhost:8080/hola/", timeout=0.5) for _ in range(3)]
    sleeper.sleep(1.0)

    assert outcomes == [False, False, True]
    assert probe.timeouts == [0.5, 0.5, 0.5]
    assert sleeper.naps == [1.0]


@pytest.mark.os_agnostic
def test_server_spy_records_requested_bind() -> None:
    """No socket is opened."""
    spy = ServerSpy()

    spy.serve_greeting(host="127.0.0.1", port=8080, app_name="hola")

    assert spy.served == [{"host": "127.0.0.1", "port": 8080, "app_name": "hola"}]


# ======================== Composition ========================


@pytest.mark.os_agnostic
def test_build_testing_wires_supplied_spies() -> None:
    """Spies handed to build_testing are the ones the services call."""
    commands = CommandSpy()
    probe = HealthProbeScript()
    services = build_testing(commands=commands, probe=probe)

    services.run_command(["git", "status"])
    services.probe_url("http://localhost:8080/hola/")

    assert commands.commands == [["git", "status"]]
    assert probe.calls == ["http://localhost:8080/hola/"]


@pytest.mark.os_agnostic
def test_build_testing_keeps_real_settings_loaders() -> None:
    """Settings validation is identical in tests and production."""
    assert build_testing().load_deploy_settings is build_production().load_deploy_settings


@pytest.mark.os_agnostic
def test_app_services_is_frozen() -> None:
    """Wired services cannot be swapped after construction."""
    services: AppServices = build_production()

    with pytest.raises(AttributeError):
        services.sleep = lambda _seconds: None  # type: ignore[misc]
