from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from wsgen.core.config import Config, ConfigError, load_config
from wsgen.core.errors import ErrorCode
from wsgen.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    path: Path
    config: Config
    console: ConsoleProtocol


@dataclass
class _Options:
    verbose: bool = False


# Set by the app callback before any command runs.
options = _Options()


def resolve_path(path: str | None) -> Path:
    if path is None:
        return Path.cwd()
    return Path(path).expanduser().resolve()


def build_context(path: str | None = None) -> CLIContext:
    console = RichConsole(verbose=options.verbose)
    project_path = resolve_path(path)
    try:
        config = load_config(project_path)
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.USER_ERROR)) from e
    return CLIContext(path=project_path, config=config, console=console)
