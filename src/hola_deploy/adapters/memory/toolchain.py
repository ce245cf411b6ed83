"""In-memory toolchain adapters for testing.

Provide spies that satisfy the ``FindTool``, ``RunCommand``, ``ProbeUrl``
and ``Sleep`` protocols without spawning processes, opening sockets or
sleeping.

Contents:
    * :class:`CommandSpy` - Records commands, fakes ``PATH`` and the compiler.
    * :class:`HealthProbeScript` - Scripted health probe outcomes.
    * :class:`SleepRecorder` - Records requested sleeps.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CommandSpy:
    """Captures external commands for test assertions.

    Attributes:
        commands: Every command passed to :meth:`run_command`, in order.
        missing_tools: Names :meth:`find_tool` reports as absent.
        exit_codes: Exit status returned when a key appears as a token of
            the command (e.g. ``{"javac": 1}`` or ``{"restart": 1}``).
        compiler: Program name treated as the compiler.
        emulate_compiler: When True, a successful compile writes one
            ``.class`` file per listed source into the ``-d`` directory.

    Example:
        >>> spy = CommandSpy(exit_codes={"pull": 1})
        >>> spy.run_command(["git", "pull", "--rebase"])
        1
        >>> spy.find_tool("git")
        '/usr/bin/git'
    """

    commands: list[list[str]] = field(default_factory=list)
    missing_tools: set[str] = field(default_factory=set)
    exit_codes: dict[str, int] = field(default_factory=dict)
    compiler: str = "javac"
    emulate_compiler: bool = True

    def find_tool(self, name: str) -> str | None:
        """Return a synthetic ``/usr/bin`` path unless ``name`` is missing."""
        if name in self.missing_tools:
            return None
        return f"/usr/bin/{name}"

    def run_command(self, command: Sequence[str], *, cwd: Path | None = None) -> int:
        """Record ``command`` and return the scripted exit status."""
        recorded = list(command)
        self.commands.append(recorded)
        for token, code in self.exit_codes.items():
            if token in recorded:
                return code
        if self.emulate_compiler and recorded and recorded[0] == self.compiler:
            _fake_compile(recorded)
        return 0

    def programs(self) -> list[str]:
        """Return the first token of every recorded command after elevation."""
        return [cmd[1] if cmd and cmd[0] == "sudo" and len(cmd) > 1 else cmd[0] for cmd in self.commands]


def _fake_compile(command: list[str]) -> None:
    classes_dir = Path(command[command.index("-d") + 1])
    argfile = next(Path(arg[1:]) for arg in command if arg.startswith("@"))
    for line in argfile.read_text(encoding="utf-8").splitlines():
        source = Path(line.strip().strip('"'))
        target = classes_dir / source.parent.name / f"{source.stem}.class"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(f"compiled {source.name}\n".encode())


@dataclass
class HealthProbeScript:
    """Scripted health probe.

    Attributes:
        healthy_from: 1-based attempt from which probes succeed; ``None``
            keeps every probe failing.
        calls: URLs probed, in order.

    Example:
        >>> probe = HealthProbeScript(healthy_from=2)
        >>> probe.probe_url("http://x/"), probe.probe_url("http://x/")
        (False, True)
    """

    healthy_from: int | None = 1
    calls: list[str] = field(default_factory=list)
    timeouts: list[float] = field(default_factory=list)

    def probe_url(self, url: str, *, timeout: float = 1.0) -> bool:
        """Record the probe and answer according to the script."""
        self.calls.append(url)
        self.timeouts.append(timeout)
        return self.healthy_from is not None and len(self.calls) >= self.healthy_from


@dataclass
class SleepRecorder:
    """Records sleep requests instead of blocking."""

    naps: list[float] = field(default_factory=list)

    def sleep(self, seconds: float) -> None:
        """Record ``seconds`` and return immediately."""
        self.naps.append(seconds)


__all__ = [
    "CommandSpy",
    "HealthProbeScript",
    "SleepRecorder",
]
