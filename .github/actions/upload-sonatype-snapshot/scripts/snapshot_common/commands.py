r"""Run external tools through plumbum and report their exit status.

Every command is echoed before execution so CI logs show exactly what ran.
Commands run in the foreground, inheriting stdout and stderr, and the exit
status is captured rather than raised so callers decide whether a failure
is fatal.

Examples
--------
Run a tool and inspect the outcome::

    >>> result = run_command(["unzip", "bundle.jar", "-d", "/tmp/work"])
    $ unzip bundle.jar -d /tmp/work
    >>> result.ok
    True
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import typer
from plumbum import local
from plumbum.commands import CommandNotFound

__all__ = [
    "COMMAND_NOT_FOUND",
    "CommandRunner",
    "RunResult",
    "format_command",
    "run_command",
]

COMMAND_NOT_FOUND = 127


class RunResult(typ.NamedTuple):
    """Exit status and captured output of an external tool."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Return ``True`` when the tool exited successfully."""
        return self.returncode == 0


class CommandRunner(typ.Protocol):
    """Callable that executes ``argv`` and reports a :class:`RunResult`."""

    def __call__(
        self, argv: cabc.Sequence[str]
    ) -> RunResult:  # pragma: no cover - protocol
        ...


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def format_command(argv: cabc.Sequence[str]) -> str:
    """Return ``argv`` joined for display in logs."""
    return " ".join(str(part) for part in argv)


def run_command(argv: cabc.Sequence[str]) -> RunResult:
    """Execute ``argv`` in the foreground and return its exit status.

    Parameters
    ----------
    argv
        Executable followed by its arguments.

    Returns
    -------
    RunResult
        Exit status of the tool. Output streams are inherited, so ``stdout``
        and ``stderr`` are empty unless the tool could not be started.

    Raises
    ------
    ValueError
        If ``argv`` is empty.
    """
    if not argv:
        msg = "run_command requires at least an executable"
        raise ValueError(msg)

    executable, *args = (str(part) for part in argv)
    typer.echo(f"$ {format_command(argv)}")
    try:
        command = local[executable][args]
    except CommandNotFound as exc:
        return RunResult(COMMAND_NOT_FOUND, "", f"command not found: {exc.program}")

    # Explicit None streams inherit the parent terminal, as plumbum's FG does.
    returncode, stdout, stderr = command.run(
        retcode=None, stdin=None, stdout=None, stderr=None
    )
    return RunResult(int(returncode), _ensure_text(stdout), _ensure_text(stderr))
