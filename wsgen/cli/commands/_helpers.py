from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from wsgen.core.result import Err, Ok, Result
from wsgen.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from wsgen.cli.context import CLIContext
    from wsgen.services.run import RunFailure

T = TypeVar("T")


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def exit_on_error(result: Result[T, RunFailure], ctx: CLIContext) -> T:
    """Unwrap ``result``; print the error and exit with its code on failure."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            print_error(error, ctx.console)
            exit_with_code(error_exit_code(error))
