"""Build service for workspace schemes.

Generates or loads the workspace graph, picks the scheme(s) to build, runs
xcodebuild for each and optionally copies the build products to an output
directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from wsgen.core.result import Err, Ok, Result
from wsgen.output.console import Style
from wsgen.services.base import BaseService, resolve_configuration
from wsgen.services.build_controller import BuildInvocationError, XcodeBuildController
from wsgen.services.filesystem import LocalFileSystem
from wsgen.services.graph_provider import GenerationError, obtain_graph

if TYPE_CHECKING:
    from wsgen.core.config import Config
    from wsgen.core.graph import Graph, Platform, Scheme
    from wsgen.output.console import ConsoleProtocol
    from wsgen.services.build_controller import BuildController
    from wsgen.services.filesystem import FileSystem
    from wsgen.services.graph_provider import GraphProvider
    from wsgen.services.inspector import BuildGraphInspector
    from wsgen.services.locator import BuildDirectoryLocator

__all__ = ["BuildError", "BuildFailure", "BuildService"]


@dataclass(frozen=True, slots=True)
class BuildError:
    """Error from build orchestration.

    ``build_products_not_found`` means xcodebuild reported success but its
    products are not where they should be; it is reported as a bug.
    """

    kind: Literal[
        "workspace_not_found",
        "scheme_not_found",
        "scheme_without_buildable_targets",
        "build_products_not_found",
        "copy_failed",
    ]
    message: str
    hint: str | None = None
    path: Path | None = None
    scheme: str | None = None
    existing: tuple[str, ...] = ()

    @property
    def severity(self) -> Literal["abort", "bug"]:
        return "bug" if self.kind == "build_products_not_found" else "abort"

    @classmethod
    def workspace_not_found(cls, path: Path) -> BuildError:
        return cls(
            kind="workspace_not_found",
            message=f"Workspace not found expected xcworkspace at {path}",
            hint="run with --generate to generate the workspace",
            path=path,
        )

    @classmethod
    def scheme_not_found(cls, scheme: str, existing: list[str]) -> BuildError:
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
    def scheme_without_buildable_targets(cls, scheme: str) -> BuildError:
        return cls(
            kind="scheme_without_buildable_targets",
            message=(
                f"The scheme {scheme} cannot be built because it contains no buildable targets."
            ),
            scheme=scheme,
        )

    @classmethod
    def build_products_not_found(cls, path: Path) -> BuildError:
        return cls(
            kind="build_products_not_found",
            message=f"The expected build products at {path} were not found.",
            path=path,
        )


BuildFailure = BuildError | GenerationError | BuildInvocationError


class BuildService(BaseService):
    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        graph_provider: GraphProvider | None = None,
        inspector: BuildGraphInspector | None = None,
        locator: BuildDirectoryLocator | None = None,
        build_controller: BuildController | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        super().__init__(
            config=config,
            console=console,
            graph_provider=graph_provider,
            inspector=inspector,
            locator=locator,
        )
        self._build_controller = build_controller or XcodeBuildController(
            console=console, xcodebuild=config.xcode.xcodebuild
        )
        self._fs = filesystem or LocalFileSystem()

    def build(
        self,
        *,
        scheme_name: str | None,
        generate: bool,
        clean: bool,
        configuration: str | None,
        build_output_path: Path | None,
        path: Path,
    ) -> Result[None, BuildFailure]:
        """Build the named scheme, or every entry scheme when none is named."""
        graph_result = obtain_graph(self._graph_provider, self._inspector, path, generate=generate)
        if isinstance(graph_result, Err):
            return graph_result
        graph = graph_result.value

        buildable = self._inspector.buildable_schemes(graph)
        self._console.debug(
            f"Found the following buildable schemes: {', '.join(s.name for s in buildable)}"
        )

        workspace_path = self._inspector.workspace_path(path)
        if workspace_path is None:
            return Err(BuildError.workspace_not_found(path))

        if scheme_name is not None:
            scheme = self._inspector.find_scheme(buildable, scheme_name)
            if scheme is None:
                return Err(BuildError.scheme_not_found(scheme_name, [s.name for s in buildable]))
            result = self.build_scheme(
                scheme=scheme,
                graph=graph,
                workspace_path=workspace_path,
                clean=clean,
                configuration=configuration,
                build_output_path=build_output_path,
            )
            if isinstance(result, Err):
                return result
        else:
            cleaned = False
            for scheme in self._inspector.buildable_entry_schemes(graph):
                result = self.build_scheme(
                    scheme=scheme,
                    graph=graph,
                    workspace_path=workspace_path,
                    clean=clean and not cleaned,
                    configuration=configuration,
                    build_output_path=build_output_path,
                )
                if isinstance(result, Err):
                    return result
                cleaned = True

        self._console.success("The project built successfully")
        return Ok(None)

    def build_scheme(
        self,
        *,
        scheme: Scheme,
        graph: Graph,
        workspace_path: Path,
        clean: bool,
        configuration: str | None,
        build_output_path: Path | None,
    ) -> Result[None, BuildFailure]:
        self._console.header(f"Building scheme {scheme.name}")
        resolved = self._inspector.buildable_target(scheme, graph)
        if resolved is None:
            return Err(BuildError.scheme_without_buildable_targets(scheme.name))
        project, target = resolved

        arguments = self._inspector.build_arguments(
            project, target, configuration, skip_signing=False
        )
        built = self._build_controller.build(
            workspace_path, scheme.name, clean=clean, arguments=arguments
        )
        if isinstance(built, Err):
            return built

        if build_output_path is not None:
            return self._copy_build_products(
                build_output_path,
                workspace_path=workspace_path,
                platform=target.platform,
                configuration=resolve_configuration(configuration, project),
            )
        return Ok(None)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _copy_build_products(
        self,
        output_path: Path,
        *,
        workspace_path: Path,
        platform: Platform,
        configuration: str,
    ) -> Result[None, BuildFailure]:
        products_dir = self._locator.locate(platform, workspace_path, configuration)
        if not self._fs.exists(products_dir):
            return Err(BuildError.build_products_not_found(products_dir))

        dest_dir = output_path / products_dir.name
        self._console.print(f"Copying build products to {dest_dir}", Style.INFO)
        try:
            if not self._fs.exists(dest_dir):
                self._fs.create_directory(dest_dir)

            # Each top-level product is replaced wholesale; a failure midway
            # leaves earlier products already copied.
            for product in self._fs.list_directory(products_dir):
                dest = dest_dir / product.name
                if self._fs.exists(dest):
                    self._fs.delete(dest)
                self._fs.copy(product, dest)
        except OSError as e:
            return Err(
                BuildError(
                    kind="copy_failed",
                    message=f"Copying build products to {dest_dir} failed: {e}",
                    path=dest_dir,
                )
            )
        return Ok(None)
