"""Graph generation and loading.

Generation is delegated to an external generator command which writes the
workspace and a graph dump next to the project. Loading reads an existing dump.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Protocol

from wsgen.core.graph_io import GraphFormatError, read_graph
from wsgen.core.result import Err, Ok, Result
from wsgen.output.console import ConsoleProtocol, Style
from wsgen.platform.process import run as run_process
from wsgen.services.inspector import BuildGraphInspector

if TYPE_CHECKING:
    from wsgen.core.config import GeneratorConfig
    from wsgen.core.graph import Graph

__all__ = ["CommandGraphProvider", "GenerationError", "GraphProvider", "obtain_graph"]


@dataclass(frozen=True, slots=True)
class GenerationError:
    """Error from generating or loading a workspace graph."""

    kind: Literal["generator_missing", "generation_failed", "graph_missing", "graph_invalid"]
    message: str
    hint: str | None = None


class GraphProvider(Protocol):
    def generate(self, path: Path) -> Result[tuple[Path, Graph], GenerationError]:
        """Generate the workspace at ``path``; returns its location and graph."""
        ...

    def load(self, path: Path) -> Result[Graph, GenerationError]: ...


def obtain_graph(
    provider: GraphProvider,
    inspector: BuildGraphInspector,
    path: Path,
    *,
    generate: bool,
) -> Result[Graph, GenerationError]:
    """Generate when asked to or when no workspace exists yet, else load."""
    if generate or inspector.workspace_path(path) is None:
        match provider.generate(path):
            case Ok((_, graph)):
                return Ok(graph)
            case Err(e):
                return Err(e)
    return provider.load(path)


class CommandGraphProvider:
    def __init__(self, *, config: GeneratorConfig, console: ConsoleProtocol) -> None:
        self._config = config
        self._console = console

    def generate(self, path: Path) -> Result[tuple[Path, Graph], GenerationError]:
        cmd = list(self._config.command)
        if shutil.which(cmd[0]) is None:
            return Err(
                GenerationError(
                    kind="generator_missing",
                    message=f"{cmd[0]}: missing",
                    hint="install the generator or set [generator] command in wsgen.toml",
                )
            )

        self._console.print(" ".join(cmd), Style.DIM)
        result = run_process(cmd, cwd=path)
        match result:
            case Err(e):
                stderr = e.stderr.strip()
                if stderr:
                    self._console.print(stderr, Style.DIM)
                return Err(
                    GenerationError(
                        kind="generation_failed",
                        message=f"project generation failed with code {e.returncode}",
                    )
                )
            case Ok(_):
                pass

        loaded = self.load(path)
        if isinstance(loaded, Err):
            return loaded

        workspace = BuildGraphInspector(console=self._console).workspace_path(path)
        return Ok((workspace or path, loaded.value))

    def load(self, path: Path) -> Result[Graph, GenerationError]:
        dump = path / self._config.graph_dump
        if not dump.is_file():
            return Err(
                GenerationError(
                    kind="graph_missing",
                    message=f"graph dump not found: {dump}",
                    hint="run with --generate to regenerate the workspace",
                )
            )
        try:
            graph = read_graph(dump, path)
        except (GraphFormatError, OSError) as e:
            return Err(GenerationError(kind="graph_invalid", message=str(e)))

        self._console.debug(f"loaded graph {graph.name} ({len(graph.projects)} projects)")
        return Ok(graph)
