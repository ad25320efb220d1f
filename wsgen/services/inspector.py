"""Graph inspection for build and run.

Decides which schemes can be built or run, which target a scheme builds or
runs, and which ``xcodebuild`` arguments that target needs.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsgen.core.graph import Graph, Project, Scheme, Target
    from wsgen.output.console import ConsoleProtocol

__all__ = [
    "GENERATED_MARKER",
    "BuildArgument",
    "BuildArguments",
    "BuildGraphInspector",
]

# Written by the generator inside every workspace it owns.
GENERATED_MARKER = ".wsgen-generated"

_SKIP_SIGNING_XCARGS: tuple[tuple[str, str], ...] = (
    ("CODE_SIGN_IDENTITY", ""),
    ("CODE_SIGNING_REQUIRED", "NO"),
    ("CODE_SIGN_ENTITLEMENTS", ""),
    ("CODE_SIGNING_ALLOWED", "NO"),
)


@dataclass(frozen=True, slots=True)
class BuildArgument:
    flag: str  # "sdk", "configuration" or "xcarg"
    value: str
    key: str | None = None

    @classmethod
    def sdk(cls, value: str) -> BuildArgument:
        return cls("sdk", value)

    @classmethod
    def configuration(cls, value: str) -> BuildArgument:
        return cls("configuration", value)

    @classmethod
    def xcarg(cls, key: str, value: str) -> BuildArgument:
        return cls("xcarg", value, key)

    def argv(self) -> list[str]:
        if self.flag == "xcarg":
            return [f"{self.key}={self.value}"]
        return [f"-{self.flag}", self.value]


BuildArguments = tuple[BuildArgument, ...]


class BuildGraphInspector:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def buildable_schemes(self, graph: Graph) -> list[Scheme]:
        return sorted(
            (s for s in graph.schemes() if s.build_action),
            key=lambda s: s.name,
        )

    def buildable_entry_schemes(self, graph: Graph) -> list[Scheme]:
        """Buildable schemes of the projects the user generated directly.

        Used when no scheme is named, so a bare ``build`` builds the project
        rather than every scheme of every dependency.
        """
        schemes = [s for p in graph.entry_projects() for s in p.schemes if s.build_action]
        return sorted(schemes, key=lambda s: s.name)

    def buildable_target(self, scheme: Scheme, graph: Graph) -> tuple[Project, Target] | None:
        for ref in scheme.build_action:
            resolved = graph.target(ref)
            if resolved is not None:
                return resolved
        return None

    def build_arguments(
        self,
        project: Project,
        target: Target,
        configuration: str | None,
        *,
        skip_signing: bool,
    ) -> BuildArguments:
        args: list[BuildArgument] = []

        sdk = target.platform.simulator_sdk or target.platform.sdk_root
        args.append(BuildArgument.sdk(sdk))

        if configuration is not None:
            settings = target.settings or project.settings
            if settings.configuration(configuration) is not None:
                args.append(BuildArgument.configuration(configuration))
            else:
                self._console.warning(
                    f"The scheme's targets don't have the given configuration {configuration}. "
                    "Defaulting to the scheme's default."
                )

        if skip_signing:
            args.extend(BuildArgument.xcarg(k, v) for k, v in _SKIP_SIGNING_XCARGS)

        return tuple(args)

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def runnable_schemes(self, graph: Graph) -> list[Scheme]:
        return sorted(
            (s for s in graph.schemes() if s.run_action and s.run_action.executable),
            key=lambda s: s.name,
        )

    def runnable_target(self, scheme: Scheme, graph: Graph) -> tuple[Project, Target] | None:
        if scheme.run_action is None or scheme.run_action.executable is None:
            return None
        resolved = graph.target(scheme.run_action.executable)
        if resolved is None or not resolved[1].product.is_runnable:
            return None
        return resolved

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find_scheme(self, schemes: list[Scheme], name: str) -> Scheme | None:
        """First scheme called ``name``; warns when the name is ambiguous."""
        counts = Counter(s.name for s in schemes)
        if counts[name] > 1:
            self._console.warning(
                f"{counts[name]} schemes are named {name}; using the first one found"
            )
        for scheme in schemes:
            if scheme.name == name:
                return scheme
        return None

    def workspace_path(self, directory: Path) -> Path | None:
        """First generated ``.xcworkspace`` under ``directory``."""
        if not directory.is_dir():
            return None
        for candidate in sorted(directory.rglob("*.xcworkspace")):
            if (candidate / GENERATED_MARKER).exists():
                return candidate
        return None
