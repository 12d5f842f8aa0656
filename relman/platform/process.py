"""Subprocess execution with Result-based error handling.

The bundler is a long-running, chatty process: its output is streamed to the
terminal untouched and only the exit status is captured.

Usage:
    result = run_silent(["npx", "tauri", "build"], cwd=project.root)
    match result:
        case Ok(_):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relman.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process could not be started.
        detail: OS error text when the process could not be started.
    """

    command: tuple[str, ...]
    returncode: int
    detail: str = ""

    @property
    def spawn_failed(self) -> bool:
        return self.returncode == -1

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.spawn_failed:
            return f"{cmd_str} could not be started: {self.detail}"
        return f"{cmd_str} failed (exit {self.returncode})"


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with inherited stdin/stdout/stderr.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(None) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, detail=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
