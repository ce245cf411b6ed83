"""Deploy CLI stories: deploy, healthcheck and check commands end to end."""

from __future__ import annotations

import os
import sys
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from hola_deploy.adapters import cli as cli_mod
from hola_deploy.adapters.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from conftest import DeployCliContext


@pytest.fixture
def in_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with the servlet project as the working directory."""
    monkeypatch.chdir(project_dir)
    return project_dir


# ======================== deploy ========================


@pytest.mark.os_agnostic
def test_deploy_reports_success_and_installs_archive(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """A clean run prints one OK line and issues copy plus restart."""
    ctx = deploy_cli_context(deploy_section)

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == 0
    assert "[deploy] OK: hola.war deployed, the application responds at http://localhost:8080/hola/" in result.stdout
    assert ctx.commands.programs() == ["git", "javac", "cp", "systemctl"]
    assert zipfile.is_zipfile(in_project / "hola.war")


@pytest.mark.os_agnostic
def test_deploy_without_library_exits_1_before_compiling(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """A missing servlet API jar aborts with a hint and never calls javac."""
    ctx = deploy_cli_context({**deploy_section, "library_dirs": ["nowhere"]})

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "[deploy] ERROR: Cannot find jakarta.servlet-api*.jar" in result.stderr
    assert "Hint: ls" in result.stderr
    assert "javac" not in ctx.commands.programs()


@pytest.mark.os_agnostic
def test_deploy_with_missing_tool_names_it(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """The first missing command is named together with its install hint."""
    ctx = deploy_cli_context(deploy_section, missing_tools={"git"})

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "[deploy] ERROR: Missing required command: git" in result.stderr
    assert "Install: sudo apt install git" in result.stderr
    assert ctx.commands.commands == []
    assert not (in_project / "build").exists()


@pytest.mark.os_agnostic
def test_deploy_with_compile_failure_leaves_no_archive(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """Compiler failures exit 1 and nothing is packaged."""
    ctx = deploy_cli_context(deploy_section, exit_codes={"javac": 1})

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "[deploy] ERROR: Compilation" in result.stderr
    assert not (in_project / "hola.war").exists()


@pytest.mark.os_agnostic
def test_deploy_health_timeout_points_at_service_logs(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """An unresponsive application fails after the configured number of probes."""
    ctx = deploy_cli_context(deploy_section, healthy_from=None)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "deploy.health_attempts=3", "--set", "deploy.health_interval=0.5", "deploy"],
        obj=ctx.factory,
    )

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "did not respond at http://localhost:8080/hola/ after 3 attempts" in result.stderr
    assert "Check the logs: sudo journalctl -u tomcat10 -n 200 --no-pager" in result.stderr
    assert len(ctx.probe.calls) == 3
    assert ctx.sleeper.naps == [0.5, 0.5, 0.5]


@pytest.mark.os_agnostic
def test_deploy_set_override_changes_service_name(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """--set deploy.KEY=VALUE reaches the pipeline."""
    ctx = deploy_cli_context(deploy_section)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "deploy.service_name=tomcat9", "deploy"],
        obj=ctx.factory,
    )

    assert result.exit_code == 0
    assert ctx.commands.commands[-1] == ["sudo", "systemctl", "restart", "tomcat9"]


@pytest.mark.os_agnostic
def test_deploy_with_invalid_settings_exits_with_config_error(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """Invalid [deploy] values stop the run before any stage."""
    ctx = deploy_cli_context({**deploy_section, "health_attempts": 0})

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "Invalid [deploy] configuration" in result.stderr
    assert ctx.commands.commands == []


@pytest.mark.os_agnostic
def test_deploy_with_blank_build_dir_keeps_project_intact(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """An empty build_dir is rejected instead of deleting the working directory."""
    ctx = deploy_cli_context(deploy_section)

    result: Result = cli_runner.invoke(cli_mod.cli, ["--set", "deploy.build_dir=", "deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "build_dir must be a relative subdirectory" in result.stderr
    assert (in_project / "src" / "hola" / "HolaServlet.java").is_file()
    assert ctx.commands.commands == []


@pytest.mark.os_agnostic
def test_deploy_with_build_dir_over_sources_exits_with_config_error(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """A build tree that contains the sources is refused before any stage."""
    ctx = deploy_cli_context({**deploy_section, "build_dir": "src"})

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "would delete the sources" in result.stderr
    assert (in_project / "src" / "hola" / "HolaServlet.java").is_file()
    assert ctx.commands.commands == []


@pytest.mark.posix_only
@pytest.mark.skipif(
    sys.platform == "win32" or os.geteuid() == 0,
    reason="Requires POSIX permissions enforced for a non-root user",
)
def test_deploy_with_root_owned_build_tree_reports_prepare_failure(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """A build tree left behind by an earlier sudo run fails with a hint, not a traceback."""
    locked = in_project / "build" / "WEB-INF"
    (locked / "classes").mkdir(parents=True)
    (locked / "classes" / "Stale.class").write_bytes(b"stale")
    locked.chmod(0o500)
    ctx = deploy_cli_context(deploy_section)

    try:
        result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)
    finally:
        locked.chmod(0o755)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "[deploy] ERROR: Cannot recreate build directory" in result.stderr
    assert "Hint: sudo chown -R $USER" in result.stderr
    assert "javac" not in ctx.commands.programs()


@pytest.mark.os_agnostic
def test_deploy_with_unwritable_archive_reports_package_failure(
    cli_runner: CliRunner,
    in_project: Path,
    deploy_section: dict[str, Any],
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """Archive write errors exit 1 with the [deploy] ERROR line."""
    (in_project / "hola.war").mkdir()
    ctx = deploy_cli_context(deploy_section)

    result: Result = cli_runner.invoke(cli_mod.cli, ["deploy"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "[deploy] ERROR: Cannot write hola.war" in result.stderr
    assert "cp" not in ctx.commands.programs()


# ======================== healthcheck ========================


@pytest.mark.os_agnostic
def test_healthcheck_reports_successful_attempt(
    cli_runner: CliRunner,
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """healthcheck polls without building or restarting anything."""
    ctx = deploy_cli_context({}, healthy_from=2)

    result: Result = cli_runner.invoke(cli_mod.cli, ["healthcheck"], obj=ctx.factory)

    assert result.exit_code == 0
    assert "[deploy] OK: the application responds at http://localhost:8080/hola/ (attempt 2)" in result.stdout
    assert ctx.commands.commands == []
    assert ctx.sleeper.naps == [1.0]


@pytest.mark.os_agnostic
def test_healthcheck_timeout_exits_1(
    cli_runner: CliRunner,
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """An unresponsive URL exits 1 after exactly the configured attempts."""
    ctx = deploy_cli_context({"health_attempts": 2, "health_url": "http://app.internal/hola/"}, healthy_from=None)

    result: Result = cli_runner.invoke(cli_mod.cli, ["healthcheck"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert ctx.probe.calls == ["http://app.internal/hola/"] * 2
    assert "after 2 attempts" in result.stderr


# ======================== check ========================


@pytest.mark.os_agnostic
def test_check_lists_all_tools_when_present(
    cli_runner: CliRunner,
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """Every configured tool is reported as found."""
    ctx = deploy_cli_context({})

    result: Result = cli_runner.invoke(cli_mod.cli, ["check"], obj=ctx.factory)

    assert result.exit_code == 0
    assert "✓ git" in result.stdout
    assert "✓ javac" in result.stdout
    assert "✓ sudo" in result.stdout


@pytest.mark.os_agnostic
def test_check_exits_1_and_shows_install_hint_when_tool_missing(
    cli_runner: CliRunner,
    deploy_cli_context: Callable[..., DeployCliContext],
) -> None:
    """Missing tools are listed with how to install them."""
    ctx = deploy_cli_context({}, missing_tools={"javac"})

    result: Result = cli_runner.invoke(cli_mod.cli, ["check"], obj=ctx.factory)

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "✗ javac - not found" in result.stdout
    assert "Install: sudo apt install default-jdk-headless" in result.stdout
