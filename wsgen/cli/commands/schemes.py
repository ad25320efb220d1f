"""Schemes command - list buildable or runnable schemes."""

from __future__ import annotations

import typer

from wsgen.cli.commands._helpers import exit_on_error
from wsgen.cli.context import build_context
from wsgen.services.schemes import SchemeService


def schemes(
    path: str | None = typer.Option(
        None, "--path", "-p", help="The path to the directory that contains the project."
    ),
    runnable: bool = typer.Option(False, "--runnable", help="Only list runnable schemes."),
) -> None:
    """List the schemes of the generated workspace."""
    ctx = build_context(path)
    service = SchemeService(config=ctx.config, console=ctx.console)
    found = exit_on_error(service.list_schemes(ctx.path, runnable=runnable), ctx)

    if not found:
        ctx.console.warning("no runnable schemes found" if runnable else "no buildable schemes found")
        return

    ctx.console.header("runnable schemes" if runnable else "buildable schemes")
    for scheme in found:
        ctx.console.print(f"- {scheme.name}")
