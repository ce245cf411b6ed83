"""Deployment pipeline: build, package, install and verify the servlet archive.

The pipeline is a linear sequence of ten stages (see
:class:`~hola_deploy.domain.enums.DeployStage`). Each stage either completes
or raises a :class:`~hola_deploy.domain.errors.DeploymentError` subclass; no
stage is retried except the bounded health poll, and nothing is rolled back.

All side effects outside the project directory go through the injected
ports (``find_tool``, ``run_command``, ``probe_url``, ``sleep``) so the
pipeline runs unchanged against in-memory adapters in tests.

Contents:
    * :class:`DeploymentReport` - Summary of a successful run.
    * :func:`locate_library` - First library match across candidate directories.
    * :func:`resolve_build_dir` - Build directory that is safe to delete.
    * :func:`prepare_build_dir` - Recreate the build tree.
    * :func:`collect_sources` - Enumerate sources to compile.
    * :func:`write_sources_list` - Write the compiler argument file.
    * :func:`package_archive` - Zip the build tree reproducibly.
    * :func:`wait_until_healthy` - Bounded health poll.
    * :func:`run_health_check` - Health poll driven by settings.
    * :func:`run_deployment` - Run every stage in order.
"""

from __future__ import annotations

import logging
import shutil
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ..domain.errors import (
    BuildPrepareError,
    CompileError,
    ConfigurationError,
    DeployCopyError,
    HealthCheckTimeoutError,
    MissingLibraryError,
    NoSourcesError,
    PackageError,
    ServiceRestartError,
    SourceRefreshError,
)
from .prerequisites import require_tools

if TYPE_CHECKING:
    from ..adapters.toolchain.settings import DeploySettings
    from .ports import FindTool, ProbeUrl, RunCommand, Sleep

logger = logging.getLogger(__name__)

#: Name of the compiler argument file written inside the build directory.
SOURCES_LIST_NAME: Final[str] = "sources.txt"

#: Earliest timestamp a zip entry can carry; keeps archives byte-identical.
_ZIP_EPOCH: Final[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)

_MANIFEST_PATH: Final[str] = "META-INF/MANIFEST.MF"


@dataclass(frozen=True, slots=True)
class DeploymentReport:
    """Summary of a successful deployment run."""

    library: Path
    source_count: int
    archive: Path
    installed: Path
    health_url: str
    health_attempts: int


def locate_library(directories: Sequence[Path], pattern: str) -> Path:
    """Return the first file matching ``pattern`` across ``directories``.

    Directories are searched in order; inside one directory matches are
    taken in name order.

    Raises:
        MissingLibraryError: If no directory holds a match.
    """
    for directory in directories:
        if not directory.is_dir():
            continue
        matches = sorted(path for path in directory.glob(pattern) if path.is_file())
        if matches:
            return matches[0]

    searched = ", ".join(str(d) for d in directories) or "<no directories configured>"
    first = directories[0] if directories else Path(".")
    stem = pattern.split("*", maxsplit=1)[0] or pattern
    raise MissingLibraryError(
        f"Cannot find {pattern} (searched: {searched}). Check the container installation.",
        hint=f"Hint: ls {first} | grep {stem}",
    )


def resolve_build_dir(project_dir: Path, build_dir: Path, source_dir: Path) -> Path:
    """Return the build directory below ``project_dir``, refusing trees that hold the project.

    The build directory is deleted on every run, so it must lie strictly
    inside ``project_dir`` and must not contain the sources.

    Raises:
        ConfigurationError: If deleting the build directory would remove
            the project directory, one of its parents, or the sources.

    Example:
        >>> resolve_build_dir(Path("/work"), Path("build"), Path("src")).as_posix()
        '/work/build'
        >>> resolve_build_dir(Path("/work"), Path("."), Path("src"))
        Traceback (most recent call last):
        ...
        hola_deploy.domain.errors.ConfigurationError: deploy.build_dir '.' would delete the project directory /work
    """
    root = project_dir.resolve()
    build = (root / build_dir).resolve()
    sources = (root / source_dir).resolve()
    if build == root or build in root.parents:
        raise ConfigurationError(f"deploy.build_dir '{build_dir}' would delete the project directory {root}")
    if root not in build.parents:
        raise ConfigurationError(f"deploy.build_dir '{build_dir}' must lie inside the project directory {root}")
    if build == sources or build in sources.parents:
        raise ConfigurationError(f"deploy.build_dir '{build_dir}' would delete the sources in {sources}")
    return project_dir / build_dir


def prepare_build_dir(build_dir: Path, classes_subdir: str) -> Path:
    """Delete ``build_dir`` and recreate it with an empty classes subtree.

    Returns:
        The classes directory compiled output is written to.

    Raises:
        BuildPrepareError: If the old tree cannot be removed or the new one
            cannot be created.
    """
    classes_dir = build_dir / classes_subdir
    try:
        if build_dir.exists():
            shutil.rmtree(build_dir)
        classes_dir.mkdir(parents=True)
    except OSError as exc:
        raise BuildPrepareError(
            f"Cannot recreate build directory {build_dir}: {exc}",
            hint=f"Hint: sudo chown -R $USER {build_dir}",
        ) from exc
    return classes_dir


def collect_sources(source_dir: Path, suffix: str) -> list[Path]:
    """Return every file below ``source_dir`` ending in ``suffix``, sorted.

    A missing source directory yields an empty list.
    """
    if not source_dir.is_dir():
        return []
    return sorted(path for path in source_dir.rglob(f"*{suffix}") if path.is_file())


def _argfile_entry(path: Path) -> str:
    text = str(path)
    if any(ch.isspace() for ch in text) or '"' in text:
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def write_sources_list(sources: Sequence[Path], build_dir: Path) -> Path:
    """Write one source path per line into the compiler argument file."""
    sources_file = build_dir / SOURCES_LIST_NAME
    sources_file.write_text("".join(f"{_argfile_entry(path)}\n" for path in sources), encoding="utf-8")
    return sources_file


def package_archive(
    build_dir: Path,
    archive_path: Path,
    *,
    exclude: frozenset[str] = frozenset({SOURCES_LIST_NAME}),
) -> Path:
    """Zip the contents of ``build_dir`` into ``archive_path``.

    Any previous archive is removed first. Entries are written in sorted
    order with a fixed timestamp and a minimal manifest, so identical build
    trees always produce byte-identical archives.

    Args:
        build_dir: Directory whose contents become the archive root.
        archive_path: Destination file, overwritten.
        exclude: Paths relative to ``build_dir`` (POSIX form) left out.

    Returns:
        ``archive_path``.

    Raises:
        PackageError: If the old archive cannot be removed or the new one
            cannot be written.
    """
    try:
        archive_path.unlink(missing_ok=True)
        entries = sorted(build_dir.rglob("*"), key=lambda p: p.relative_to(build_dir).as_posix())

        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            _write_entry(archive, "META-INF/", None)
            _write_entry(archive, _MANIFEST_PATH, b"Manifest-Version: 1.0\r\nCreated-By: hola-deploy\r\n\r\n")
            for path in entries:
                name = path.relative_to(build_dir).as_posix()
                if name in exclude or name in {"META-INF", _MANIFEST_PATH}:
                    continue
                if path.is_dir():
                    _write_entry(archive, f"{name}/", None)
                else:
                    _write_entry(archive, name, path.read_bytes())
    except OSError as exc:
        raise PackageError(
            f"Cannot write {archive_path.name}: {exc}",
            hint=f"Hint: ls -ld {archive_path} {archive_path.parent}",
        ) from exc
    return archive_path


def _write_entry(archive: zipfile.ZipFile, name: str, data: bytes | None) -> None:
    info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
    if data is None:
        info.external_attr = (0o40755 << 16) | 0x10
        archive.writestr(info, b"")
        return
    info.external_attr = 0o644 << 16
    info.compress_type = zipfile.ZIP_DEFLATED
    archive.writestr(info, data)


def wait_until_healthy(
    url: str,
    *,
    attempts: int,
    interval: float,
    timeout: float,
    probe_url: ProbeUrl,
    sleep: Sleep,
    hint: str | None = None,
) -> int:
    """Probe ``url`` until it answers, at most ``attempts`` times.

    Sleeps ``interval`` seconds after every failed probe.

    Returns:
        The 1-based number of the successful attempt.

    Raises:
        HealthCheckTimeoutError: If every attempt failed.
    """
    for attempt in range(1, attempts + 1):
        if probe_url(url, timeout=timeout):
            logger.info("[deploy] OK: the application responds at %s", url, extra={"attempt": attempt})
            return attempt
        logger.debug("Health probe %d/%d failed", attempt, attempts)
        sleep(interval)
    raise HealthCheckTimeoutError(
        f"The application did not respond at {url} after {attempts} attempts",
        attempts=attempts,
        hint=hint,
    )


def run_health_check(settings: DeploySettings, *, probe_url: ProbeUrl, sleep: Sleep) -> int:
    """Run the bounded health poll with the configured URL and limits."""
    logger.info("[deploy] Checking URL: %s", settings.probe_url)
    return wait_until_healthy(
        settings.probe_url,
        attempts=settings.health_attempts,
        interval=settings.health_interval,
        timeout=settings.probe_timeout,
        probe_url=probe_url,
        sleep=sleep,
        hint=f"Check the logs: {settings.service_log_hint}",
    )


def _run_step(run_command: RunCommand, command: Sequence[str], cwd: Path) -> int:
    logger.debug("[deploy] $ %s", " ".join(command))
    return run_command(command, cwd=cwd)


def run_deployment(
    settings: DeploySettings,
    *,
    project_dir: Path,
    find_tool: FindTool,
    run_command: RunCommand,
    probe_url: ProbeUrl,
    sleep: Sleep,
) -> DeploymentReport:
    """Run the ten deployment stages in order.

    Args:
        settings: Validated deployment parameters.
        project_dir: Directory relative settings paths resolve against; also
            the working directory of every external command.
        find_tool: Port resolving executables on ``PATH``.
        run_command: Port running external commands.
        probe_url: Port issuing one health probe.
        sleep: Port blocking between health probes.

    Returns:
        Report describing the installed archive.

    Raises:
        ConfigurationError: If the build directory would swallow the
            project or its sources; raised before any stage runs.
        DeploymentError: Subclass matching the first stage that failed.
    """
    build_dir = resolve_build_dir(project_dir, settings.build_dir, settings.source_dir)
    require_tools(settings.required_tools, find_tool=find_tool)

    library = locate_library([project_dir / d for d in settings.library_dirs], settings.library_pattern)
    logger.info("[deploy] Using library: %s", library)

    if settings.refresh_command:
        logger.info("[deploy] Refreshing sources from version control...")
        code = _run_step(run_command, settings.refresh_command, project_dir)
        if code != 0:
            raise SourceRefreshError(f"'{' '.join(settings.refresh_command)}' failed with exit code {code}")

    logger.info("[deploy] Preparing build directory...")
    classes_dir = prepare_build_dir(build_dir, settings.classes_subdir)

    logger.info("[deploy] Compiling sources...")
    source_dir = project_dir / settings.source_dir
    sources = collect_sources(source_dir, settings.source_suffix)
    if not sources:
        raise NoSourcesError(f"No {settings.source_suffix} files found in {settings.source_dir}")
    sources_file = write_sources_list(sources, build_dir)

    compile_command = [settings.compiler, "-cp", str(library), "-d", str(classes_dir), f"@{sources_file}"]
    code = _run_step(run_command, compile_command, project_dir)
    if code != 0:
        raise CompileError(f"Compilation of {len(sources)} source file(s) failed with exit code {code}")

    archive = project_dir / settings.archive_file
    logger.info("[deploy] Packaging archive: %s", settings.archive_file)
    package_archive(build_dir, archive)

    installed = settings.webapps_dir / settings.archive_file
    logger.info("[deploy] Copying archive to %s...", settings.webapps_dir)
    code = _run_step(run_command, [*settings.elevate_command, "cp", str(archive), str(installed)], project_dir)
    if code != 0:
        raise DeployCopyError(
            f"Copying {archive.name} to {installed} failed with exit code {code}",
            hint=f"Check that {settings.webapps_dir} exists and is writable by the deploying user",
        )

    logger.info("[deploy] Restarting service %s...", settings.service_name)
    restart = [*settings.elevate_command, *settings.restart_command, settings.service_name]
    code = _run_step(run_command, restart, project_dir)
    if code != 0:
        raise ServiceRestartError(
            f"Restarting {settings.service_name} failed with exit code {code}",
            hint=f"Check the logs: {settings.service_log_hint}",
        )

    attempts = run_health_check(settings, probe_url=probe_url, sleep=sleep)
    return DeploymentReport(
        library=library,
        source_count=len(sources),
        archive=archive,
        installed=installed,
        health_url=settings.probe_url,
        health_attempts=attempts,
    )


__all__ = [
    "SOURCES_LIST_NAME",
    "DeploymentReport",
    "collect_sources",
    "locate_library",
    "package_archive",
    "prepare_build_dir",
    "resolve_build_dir",
    "run_deployment",
    "run_health_check",
    "wait_until_healthy",
    "write_sources_list",
]
