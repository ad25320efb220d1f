"""Run service: build a scheme, then execute its runnable product."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Protocol

from wsgen.core.graph import Product
from wsgen.core.result import Err, Ok, Result
from wsgen.output.console import Style
from wsgen.platform.process import run_inherit
from wsgen.services.base import BaseService, resolve_configuration
from wsgen.services.build import BuildFailure, BuildService
from wsgen.services.filesystem import LocalFileSystem
from wsgen.services.graph_provider import obtain_graph

if TYPE_CHECKING:
    from wsgen.core.config import Config
    from wsgen.core.graph import Platform, Project, Target
    from wsgen.output.console import ConsoleProtocol
    from wsgen.services.filesystem import FileSystem
    from wsgen.services.graph_provider import GraphProvider
    from wsgen.services.inspector import BuildGraphInspector
    from wsgen.services.locator import BuildDirectoryLocator

__all__ = ["AppLauncher", "RunError", "RunFailure", "RunService", "UnsupportedAppLauncher"]


@dataclass(frozen=True, slots=True)
class RunError:
    """Error from run orchestration. All kinds abort the run."""

    kind: Literal[
        "workspace_not_found",
        "scheme_not_found",
        "scheme_without_runnable_target",
        "runnable_not_found",
        "runnable_not_executable",
        "feature_not_implemented",
    ]
    message: str
    hint: str | None = None
    path: Path | None = None
    scheme: str | None = None
    existing: tuple[str, ...] = ()

    @property
    def severity(self) -> Literal["abort", "bug"]:
        return "abort"

    @classmethod
    def workspace_not_found(cls, path: Path) -> RunError:
        return cls(
            kind="workspace_not_found",
            message=f"Workspace not found expected xcworkspace at {path}",
            hint="run with --generate to generate the workspace",
            path=path,
        )

    @classmethod
    def scheme_not_found(cls, scheme: str, existing: list[str]) -> RunError:
        return cls(
            kind="scheme_not_found",
            message=(
                f"Couldn't find scheme {scheme}. "
                f"The available schemes are: {', '.join(existing)}."
            ),
            scheme=scheme,
            existing=tuple(existing),
        )

    @classmethod
    def scheme_without_runnable_target(cls, scheme: str) -> RunError:
        return cls(
            kind="scheme_without_runnable_target",
            message=f"The scheme {scheme} cannot be run because it contains no runnable target.",
            scheme=scheme,
        )

    @classmethod
    def runnable_not_found(cls, path: Path) -> RunError:
        return cls(
            kind="runnable_not_found",
            message=f"The runnable product was expected but not found at {path}.",
            path=path,
        )

    @classmethod
    def runnable_not_executable(cls, path: Path, reason: str) -> RunError:
        return cls(
            kind="runnable_not_executable",
            message=f"The runnable product at {path} could not be executed: {reason}",
            hint="check that the product is executable on this machine",
            path=path,
        )

    @classmethod
    def feature_not_implemented(cls) -> RunError:
        return cls(
            kind="feature_not_implemented",
            message="Sorry, this feature is not currently implemented.",
        )


RunFailure = RunError | BuildFailure


class AppLauncher(Protocol):
    """Launches application bundles (simulator, device, or host)."""

    def launch(self, app_path: Path, platform: Platform) -> Result[int, RunError]: ...


class UnsupportedAppLauncher:
    def launch(self, app_path: Path, platform: Platform) -> Result[int, RunError]:
        return Err(RunError.feature_not_implemented())


class RunService(BaseService):
    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        graph_provider: GraphProvider | None = None,
        inspector: BuildGraphInspector | None = None,
        locator: BuildDirectoryLocator | None = None,
        build_service: BuildService | None = None,
        filesystem: FileSystem | None = None,
        app_launcher: AppLauncher | None = None,
    ) -> None:
        super().__init__(
            config=config,
            console=console,
            graph_provider=graph_provider,
            inspector=inspector,
            locator=locator,
        )
        self._build_service = build_service or BuildService(
            config=config,
            console=console,
            graph_provider=self._graph_provider,
            inspector=self._inspector,
            locator=self._locator,
        )
        self._fs = filesystem or LocalFileSystem()
        self._app_launcher = app_launcher or UnsupportedAppLauncher()

    def run(
        self,
        *,
        scheme_name: str,
        generate: bool,
        clean: bool,
        path: Path,
        configuration: str | None,
        arguments: list[str],
    ) -> Result[int, RunFailure]:
        """Build ``scheme_name`` and run it; ``Ok`` carries the exit code."""
        graph_result = obtain_graph(self._graph_provider, self._inspector, path, generate=generate)
        if isinstance(graph_result, Err):
            return graph_result
        graph = graph_result.value

        runnable = self._inspector.runnable_schemes(graph)
        workspace_path = self._inspector.workspace_path(path)
        if workspace_path is None:
            return Err(RunError.workspace_not_found(path))

        self._console.debug(
            f"Found the following runnable schemes: {', '.join(s.name for s in runnable)}"
        )

        scheme = self._inspector.find_scheme(runnable, scheme_name)
        if scheme is None:
            return Err(RunError.scheme_not_found(scheme_name, [s.name for s in runnable]))

        resolved = self._inspector.runnable_target(scheme, graph)
        if resolved is None:
            return Err(RunError.scheme_without_runnable_target(scheme.name))
        project, target = resolved

        built = self._build_service.build_scheme(
            scheme=scheme,
            graph=graph,
            workspace_path=workspace_path,
            clean=clean,
            configuration=configuration,
            build_output_path=None,
        )
        if isinstance(built, Err):
            return built

        return self._run_target(
            target,
            project=project,
            workspace_path=workspace_path,
            configuration=configuration,
            arguments=arguments,
        )

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _run_target(
        self,
        target: Target,
        *,
        project: Project,
        workspace_path: Path,
        configuration: str | None,
        arguments: list[str],
    ) -> Result[int, RunFailure]:
        build_dir = self._locator.locate(
            target.platform,
            workspace_path,
            resolve_configuration(configuration, project),
        )
        runnable_path = build_dir / target.product_name_with_extension
        if not self._fs.exists(runnable_path):
            return Err(RunError.runnable_not_found(runnable_path))

        if target.product == Product.COMMAND_LINE_TOOL:
            self._console.header(f"Running executable {runnable_path.name}")
            try:
                return Ok(self._run_executable(runnable_path, arguments))
            except OSError as e:
                return Err(RunError.runnable_not_executable(runnable_path, str(e)))

        self._console.header(f"Running app {target.product_name}")
        return self._app_launcher.launch(runnable_path, target.platform)

    def _run_executable(self, executable: Path, arguments: list[str]) -> int:
        self._console.debug(f"Forwarding arguments: {', '.join(arguments)}")
        cmd = [str(executable), *arguments]
        self._console.print(" ".join(cmd), Style.DIM)
        return run_inherit(cmd)
