"""Read-only model of a generated workspace.

Only the parts the build/run pipeline inspects are modelled: projects, their
targets and schemes, and build settings. The graph is produced once per
invocation by a ``GraphProvider`` and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

__all__ = [
    "DEFAULT_CONFIGURATION",
    "BuildConfiguration",
    "Graph",
    "Platform",
    "Product",
    "Project",
    "RunAction",
    "Scheme",
    "Settings",
    "Target",
    "TargetReference",
]

# Last-resort configuration when neither the caller nor the project picks one.
DEFAULT_CONFIGURATION = "Debug"


class Platform(Enum):
    IOS = "ios"
    MACOS = "macos"
    TVOS = "tvos"
    WATCHOS = "watchos"

    @property
    def sdk_root(self) -> str:
        return _SDK_ROOTS[self]

    @property
    def simulator_sdk(self) -> str | None:
        return _SIMULATOR_SDKS.get(self)


_SDK_ROOTS: dict[Platform, str] = {
    Platform.IOS: "iphoneos",
    Platform.MACOS: "macosx",
    Platform.TVOS: "appletvos",
    Platform.WATCHOS: "watchos",
}

_SIMULATOR_SDKS: dict[Platform, str] = {
    Platform.IOS: "iphonesimulator",
    Platform.TVOS: "appletvsimulator",
    Platform.WATCHOS: "watchsimulator",
}


class Product(Enum):
    APP = "app"
    APP_CLIP = "app_clip"
    WATCH2_APP = "watch2_app"
    COMMAND_LINE_TOOL = "command_line_tool"
    STATIC_LIBRARY = "static_library"
    DYNAMIC_LIBRARY = "dynamic_library"
    FRAMEWORK = "framework"
    STATIC_FRAMEWORK = "static_framework"
    BUNDLE = "bundle"
    APP_EXTENSION = "app_extension"
    UNIT_TESTS = "unit_tests"
    UI_TESTS = "ui_tests"

    @property
    def file_extension(self) -> str | None:
        return _EXTENSIONS.get(self)

    @property
    def is_runnable(self) -> bool:
        """Products that can be executed or launched directly."""
        return self in (
            Product.COMMAND_LINE_TOOL,
            Product.APP,
            Product.APP_CLIP,
            Product.WATCH2_APP,
        )


_EXTENSIONS: dict[Product, str] = {
    Product.APP: "app",
    Product.APP_CLIP: "app",
    Product.WATCH2_APP: "app",
    Product.STATIC_LIBRARY: "a",
    Product.DYNAMIC_LIBRARY: "dylib",
    Product.FRAMEWORK: "framework",
    Product.STATIC_FRAMEWORK: "framework",
    Product.BUNDLE: "bundle",
    Product.APP_EXTENSION: "appex",
    Product.UNIT_TESTS: "xctest",
    Product.UI_TESTS: "xctest",
}


@dataclass(frozen=True, slots=True)
class BuildConfiguration:
    name: str
    variant: Literal["debug", "release"]


@dataclass(frozen=True, slots=True)
class Settings:
    configurations: tuple[BuildConfiguration, ...] = ()

    def configuration(self, name: str) -> BuildConfiguration | None:
        for config in self.configurations:
            if config.name == name:
                return config
        return None

    def default_debug_build_configuration(self) -> BuildConfiguration | None:
        """``Debug`` when defined as a debug variant, else the first debug variant by name."""
        debug = sorted(
            (c for c in self.configurations if c.variant == "debug"),
            key=lambda c: c.name,
        )
        for config in debug:
            if config.name == DEFAULT_CONFIGURATION:
                return config
        return debug[0] if debug else None


@dataclass(frozen=True, slots=True)
class Target:
    name: str
    platform: Platform
    product: Product
    product_name: str
    settings: Settings | None = None

    @property
    def product_name_with_extension(self) -> str:
        ext = self.product.file_extension
        if self.product in (Product.STATIC_LIBRARY, Product.DYNAMIC_LIBRARY):
            return f"lib{self.product_name}.{ext}"
        if ext is None:
            return self.product_name
        return f"{self.product_name}.{ext}"


@dataclass(frozen=True, slots=True)
class TargetReference:
    project_path: Path
    name: str


@dataclass(frozen=True, slots=True)
class RunAction:
    executable: TargetReference | None = None


@dataclass(frozen=True, slots=True)
class Scheme:
    name: str
    build_action: tuple[TargetReference, ...] = ()
    run_action: RunAction | None = None


@dataclass(frozen=True, slots=True)
class Project:
    path: Path
    name: str
    targets: tuple[Target, ...] = ()
    schemes: tuple[Scheme, ...] = ()
    settings: Settings = field(default_factory=Settings)

    def target(self, name: str) -> Target | None:
        for target in self.targets:
            if target.name == name:
                return target
        return None


@dataclass(frozen=True, slots=True)
class Graph:
    """Projects of a workspace, keyed by project path.

    ``entry_paths`` are the projects the user asked to generate, as opposed to
    projects pulled in as dependencies.
    """

    name: str
    path: Path
    projects: dict[Path, Project] = field(default_factory=dict)
    workspace_schemes: tuple[Scheme, ...] = ()
    entry_paths: tuple[Path, ...] = ()

    def schemes(self) -> list[Scheme]:
        schemes = list(self.workspace_schemes)
        for project in self.projects.values():
            schemes.extend(project.schemes)
        return schemes

    def entry_projects(self) -> list[Project]:
        return [self.projects[p] for p in self.entry_paths if p in self.projects]

    def target(self, ref: TargetReference) -> tuple[Project, Target] | None:
        project = self.projects.get(ref.project_path)
        if project is None:
            return None
        target = project.target(ref.name)
        if target is None:
            return None
        return (project, target)
