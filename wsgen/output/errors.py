"""Rendering of service errors and their exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wsgen.core.errors import ErrorCode
from wsgen.output.console import Style
from wsgen.services.build import BuildError
from wsgen.services.build_controller import BuildInvocationError
from wsgen.services.graph_provider import GenerationError
from wsgen.services.run import RunError

if TYPE_CHECKING:
    from wsgen.output.console import ConsoleProtocol
    from wsgen.services.run import RunFailure

__all__ = ["error_exit_code", "print_error"]


def print_error(error: RunFailure, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    if isinstance(error, BuildError) and error.severity == "bug":
        console.print(
            "This is unexpected and likely a bug in wsgen; please report it.",
            Style.WARNING,
        )


def error_exit_code(error: RunFailure) -> int:
    match error:
        case BuildError(kind="build_products_not_found"):
            return int(ErrorCode.INTERNAL_ERROR)
        case BuildError(kind="copy_failed"):
            return int(ErrorCode.IO_ERROR)
        case RunError(kind="runnable_not_found" | "runnable_not_executable"):
            return int(ErrorCode.IO_ERROR)
        case BuildError() | RunError():
            return int(ErrorCode.USER_ERROR)
        case GenerationError(kind="generator_missing") | BuildInvocationError(
            kind="xcodebuild_missing"
        ):
            return int(ErrorCode.ENV_ERROR)
        case GenerationError() | BuildInvocationError():
            return int(ErrorCode.BUILD_ERROR)
