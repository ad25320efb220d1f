from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from wsgen.core.hashing import derived_data_dirname

if TYPE_CHECKING:
    from wsgen.core.graph import Platform

__all__ = ["BuildDirectoryLocator"]


class BuildDirectoryLocator:
    """Where ``xcodebuild`` puts the products of a workspace build.

    ``<derived data>/<Workspace>-<hash>/Build/Products/<Configuration>[-<sdk>]``,
    where the ``-<sdk>`` suffix is the simulator SDK and is omitted for macOS.
    Pure path computation; callers check existence.
    """

    def __init__(self, *, derived_data_dir: Path) -> None:
        self._derived_data_dir = derived_data_dir

    def locate(self, platform: Platform, project_path: Path, configuration: str) -> Path:
        products = self._derived_data_dir / derived_data_dirname(project_path) / "Build" / "Products"
        sdk = platform.simulator_sdk
        if sdk is None:
            return products / configuration
        return products / f"{configuration}-{sdk}"
