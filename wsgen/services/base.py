"""Base service class with common initialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wsgen.core.graph import DEFAULT_CONFIGURATION
from wsgen.services.graph_provider import CommandGraphProvider
from wsgen.services.inspector import BuildGraphInspector
from wsgen.services.locator import BuildDirectoryLocator

if TYPE_CHECKING:
    from wsgen.core.config import Config
    from wsgen.core.graph import Project
    from wsgen.output.console import ConsoleProtocol
    from wsgen.services.graph_provider import GraphProvider

__all__ = ["BaseService", "resolve_configuration"]


def resolve_configuration(configuration: str | None, project: Project) -> str:
    """Explicit configuration, else the project's default debug one, else ``Debug``."""
    if configuration:
        return configuration
    default = project.settings.default_debug_build_configuration()
    if default is not None:
        return default.name
    return DEFAULT_CONFIGURATION


class BaseService:
    """Base class for services that load a graph and inspect it.

    Provides:
    - Common constructor pattern
    - Default graph provider, inspector and build directory locator from config
    - Access to config and console
    """

    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        graph_provider: GraphProvider | None = None,
        inspector: BuildGraphInspector | None = None,
        locator: BuildDirectoryLocator | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._graph_provider = graph_provider or CommandGraphProvider(
            config=config.generator, console=console
        )
        self._inspector = inspector or BuildGraphInspector(console=console)
        self._locator = locator or BuildDirectoryLocator(
            derived_data_dir=config.xcode.derived_data_dir()
        )
