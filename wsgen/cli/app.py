from __future__ import annotations

import typer

from wsgen import __version__
from wsgen.cli.commands.build import build
from wsgen.cli.commands.run_cmd import RUN_CONTEXT_SETTINGS, run
from wsgen.cli.commands.schemes import schemes
from wsgen.cli.context import options
from wsgen.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(build)
app.command(name="run", context_settings=RUN_CONTEXT_SETTINGS)(run)
app.command()(schemes)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    options.verbose = verbose


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        raise SystemExit(int(ErrorCode.INTERRUPTED)) from None
