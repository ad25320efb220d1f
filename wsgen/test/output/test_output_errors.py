from __future__ import annotations

from pathlib import Path

import pytest

from wsgen.core.errors import ErrorCode
from wsgen.output.console import MockConsole, Style
from wsgen.output.errors import error_exit_code, print_error
from wsgen.services.build import BuildError
from wsgen.services.build_controller import BuildInvocationError
from wsgen.services.graph_provider import GenerationError
from wsgen.services.run import RunError, RunFailure


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (BuildError.scheme_not_found("X", ["A"]), ErrorCode.USER_ERROR),
        (BuildError.workspace_not_found(Path("/p")), ErrorCode.USER_ERROR),
        (BuildError.build_products_not_found(Path("/p")), ErrorCode.INTERNAL_ERROR),
        (RunError.scheme_without_runnable_target("X"), ErrorCode.USER_ERROR),
        (RunError.runnable_not_found(Path("/p/App")), ErrorCode.IO_ERROR),
        (RunError.runnable_not_executable(Path("/p/App"), "denied"), ErrorCode.IO_ERROR),
        (RunError.feature_not_implemented(), ErrorCode.USER_ERROR),
        (GenerationError(kind="generator_missing", message="m"), ErrorCode.ENV_ERROR),
        (GenerationError(kind="graph_invalid", message="m"), ErrorCode.BUILD_ERROR),
        (BuildInvocationError(kind="xcodebuild_missing", message="m"), ErrorCode.ENV_ERROR),
        (BuildInvocationError(kind="build_failed", message="m"), ErrorCode.BUILD_ERROR),
    ],
)
def test_error_exit_code(error: RunFailure, code: ErrorCode) -> None:
    assert error_exit_code(error) == int(code)


def test_print_error_with_hint() -> None:
    console = MockConsole()

    print_error(GenerationError(kind="graph_missing", message="no dump", hint="regenerate"), console)

    assert console.errors == ["no dump"]
    assert console.messages == [("hint: regenerate", Style.DIM)]


def test_print_error_flags_bugs() -> None:
    console = MockConsole()

    print_error(BuildError.build_products_not_found(Path("/dd/Debug")), console)

    assert console.errors == ["The expected build products at /dd/Debug were not found."]
    assert console.messages[-1][1] == Style.WARNING
    assert "bug" in console.messages[-1][0]
