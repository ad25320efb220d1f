"""Subprocess helpers."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from wsgen.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_inherit", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


def run(cmd: Sequence[str], *, cwd: Path) -> Result[str, ProcessError]:
    """Run ``cmd`` capturing output; ``Ok(stdout)`` on exit code 0."""
    argv = [str(c) for c in cmd]
    try:
        proc = subprocess.run(argv, cwd=str(cwd), capture_output=True, text=True, check=False)
    except OSError as e:
        return Err(ProcessError(argv=argv, returncode=127, stderr=str(e)))
    if proc.returncode != 0:
        return Err(
            ProcessError(
                argv=argv,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )
    return Ok(proc.stdout)


def run_streaming(
    cmd: Sequence[str],
    *,
    cwd: Path,
    on_line: Callable[[str], None],
) -> int:
    """Run ``cmd`` and hand each output line (stdout+stderr) to ``on_line``.

    Blocks until the process exits and returns its exit code. ``OSError`` from
    a missing executable propagates.
    """
    argv = [str(c) for c in cmd]
    with subprocess.Popen(
        argv,
        cwd=str(cwd),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    ) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            on_line(line.rstrip("\n"))
        return proc.wait()


def run_inherit(cmd: Sequence[str], *, cwd: Path | None = None) -> int:
    """Run ``cmd`` attached to the current terminal and return its exit code."""
    argv = [str(c) for c in cmd]
    return subprocess.run(argv, cwd=str(cwd) if cwd else None, check=False).returncode
