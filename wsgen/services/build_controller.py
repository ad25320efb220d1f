"""xcodebuild invocation."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Protocol

from wsgen.core.result import Err, Ok, Result
from wsgen.output.console import ConsoleProtocol, Style
from wsgen.platform.process import run_streaming

if TYPE_CHECKING:
    from wsgen.services.inspector import BuildArguments

__all__ = ["BuildController", "BuildInvocationError", "XcodeBuildController"]


@dataclass(frozen=True, slots=True)
class BuildInvocationError:
    """Error from running the build toolchain."""

    kind: Literal["xcodebuild_missing", "build_failed"]
    message: str
    hint: str | None = None
    returncode: int | None = None


class BuildController(Protocol):
    def build(
        self,
        workspace_path: Path,
        scheme: str,
        *,
        clean: bool,
        arguments: BuildArguments,
    ) -> Result[None, BuildInvocationError]:
        """Build ``scheme`` of the workspace, blocking until the toolchain exits."""
        ...


class XcodeBuildController:
    def __init__(self, *, console: ConsoleProtocol, xcodebuild: str = "xcodebuild") -> None:
        self._console = console
        self._xcodebuild = xcodebuild

    def command(
        self,
        workspace_path: Path,
        scheme: str,
        *,
        clean: bool,
        arguments: BuildArguments,
    ) -> list[str]:
        cmd = [self._xcodebuild]
        if clean:
            cmd.append("clean")
        cmd += ["build", "-workspace", str(workspace_path), "-scheme", scheme]
        for arg in arguments:
            cmd += arg.argv()
        return cmd

    def build(
        self,
        workspace_path: Path,
        scheme: str,
        *,
        clean: bool,
        arguments: BuildArguments,
    ) -> Result[None, BuildInvocationError]:
        if shutil.which(self._xcodebuild) is None:
            return Err(
                BuildInvocationError(
                    kind="xcodebuild_missing",
                    message=f"{self._xcodebuild}: missing",
                    hint="install Xcode and run: xcode-select --install",
                )
            )

        cmd = self.command(workspace_path, scheme, clean=clean, arguments=arguments)
        self._console.print(" ".join(cmd), Style.DIM)

        try:
            code = run_streaming(
                cmd,
                cwd=workspace_path.parent,
                on_line=lambda line: self._console.print(line, Style.DIM),
            )
        except OSError as e:
            return Err(BuildInvocationError(kind="xcodebuild_missing", message=str(e)))

        if code != 0:
            return Err(
                BuildInvocationError(
                    kind="build_failed",
                    message=f"xcodebuild failed with code {code}",
                    returncode=code,
                )
            )
        return Ok(None)
