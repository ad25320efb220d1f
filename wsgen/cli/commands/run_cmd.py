"""Run command - build a scheme and run its executable."""

from __future__ import annotations

import typer

from wsgen.cli.commands._helpers import exit_on_error, exit_with_code
from wsgen.cli.context import build_context
from wsgen.services.run import RunService

# Everything after the scheme is forwarded, including tokens that look like flags.
RUN_CONTEXT_SETTINGS = {"allow_interspersed_args": False, "ignore_unknown_options": True}


def run(
    scheme: str = typer.Argument(..., help="The scheme to be run."),
    arguments: list[str] | None = typer.Argument(
        None, help="The arguments to pass to the runnable target during execution."
    ),
    generate: bool = typer.Option(
        False, "--generate", help="Force the generation of the project before running."
    ),
    clean: bool = typer.Option(
        False, "--clean", help="When passed, it cleans the project before running."
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        "-p",
        help="The path to the directory that contains the project with the scheme to be run.",
    ),
    configuration: str | None = typer.Option(
        None,
        "--configuration",
        "-C",
        help="The configuration to be used when building the scheme.",
    ),
) -> None:
    """Runs a scheme in the project.

    Given a runnable scheme the run command builds & runs it.
    All arguments after the scheme are forwarded.
    """
    forwarded = list(arguments or [])
    if forwarded[:1] == ["--"]:
        forwarded = forwarded[1:]

    ctx = build_context(path)
    service = RunService(config=ctx.config, console=ctx.console)
    result = service.run(
        scheme_name=scheme,
        generate=generate,
        clean=clean,
        path=ctx.path,
        configuration=configuration,
        arguments=forwarded,
    )
    exit_with_code(exit_on_error(result, ctx))
