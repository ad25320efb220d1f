"""Build command - build one scheme or every entry scheme."""

from __future__ import annotations

import typer

from wsgen.cli.commands._helpers import exit_on_error
from wsgen.cli.context import build_context, resolve_path
from wsgen.services.build import BuildService


def build(
    scheme: str | None = typer.Argument(
        None, help="Scheme to build. Builds every entry scheme when omitted."
    ),
    generate: bool = typer.Option(
        False, "--generate", help="Force the generation of the project before building."
    ),
    clean: bool = typer.Option(
        False, "--clean", help="When passed, it cleans the project before building it."
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        "-p",
        help="The path to the directory that contains the project to be built.",
    ),
    configuration: str | None = typer.Option(
        None, "--configuration", "-C", help="The configuration to be used when building."
    ),
    build_output_path: str | None = typer.Option(
        None,
        "--build-output-path",
        help="The directory where build products will be copied to when the build finishes.",
    ),
) -> None:
    """Build the project's schemes."""
    ctx = build_context(path)
    service = BuildService(config=ctx.config, console=ctx.console)
    result = service.build(
        scheme_name=scheme,
        generate=generate,
        clean=clean,
        configuration=configuration,
        build_output_path=resolve_path(build_output_path) if build_output_path else None,
        path=ctx.path,
    )
    exit_on_error(result, ctx)
