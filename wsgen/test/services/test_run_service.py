from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from wsgen.core.config import Config
from wsgen.core.graph import (
    BuildConfiguration,
    Graph,
    Platform,
    Product,
    Project,
    RunAction,
    Scheme,
    Settings,
    Target,
    TargetReference,
)
from wsgen.core.result import Err, Ok, Result
from wsgen.output.console import MockConsole
from wsgen.services.build import BuildService
from wsgen.services.build_controller import BuildInvocationError
from wsgen.services.graph_provider import GenerationError
from wsgen.services.inspector import GENERATED_MARKER, BuildArguments, BuildGraphInspector
from wsgen.services.locator import BuildDirectoryLocator
from wsgen.services.run import RunError, RunService


@dataclass
class FakeGraphProvider:
    graph: Graph | None
    generated: list[Path] = field(default_factory=list)

    def generate(self, path: Path) -> Result[tuple[Path, Graph], GenerationError]:
        self.generated.append(path)
        if self.graph is None:
            return Err(GenerationError(kind="generation_failed", message="boom"))
        return Ok((path / "App.xcworkspace", self.graph))

    def load(self, path: Path) -> Result[Graph, GenerationError]:
        assert self.graph is not None
        return Ok(self.graph)


@dataclass
class RecordingController:
    schemes: list[tuple[str, bool]] = field(default_factory=list)
    error: BuildInvocationError | None = None

    def build(
        self,
        workspace_path: Path,
        scheme: str,
        *,
        clean: bool,
        arguments: BuildArguments,
    ) -> Result[None, BuildInvocationError]:
        self.schemes.append((scheme, clean))
        if self.error is not None:
            return Err(self.error)
        return Ok(None)


@dataclass
class RecordingLauncher:
    launched: list[Path] = field(default_factory=list)

    def launch(self, app_path: Path, platform: Platform) -> Result[int, RunError]:
        self.launched.append(app_path)
        return Ok(0)


def _graph(root: Path) -> Graph:
    path = root / "App"

    def ref(name: str) -> TargetReference:
        return TargetReference(path, name)

    project = Project(
        path=path,
        name="App",
        targets=(
            Target("App", Platform.MACOS, Product.COMMAND_LINE_TOOL, "App"),
            Target("Viewer", Platform.IOS, Product.APP, "Viewer"),
            Target("Kit", Platform.MACOS, Product.FRAMEWORK, "Kit"),
        ),
        schemes=(
            Scheme("App", (ref("App"),), RunAction(executable=ref("App"))),
            Scheme("Viewer", (ref("Viewer"),), RunAction(executable=ref("Viewer"))),
            Scheme("Kit", (ref("Kit"),), RunAction(executable=ref("Kit"))),
            Scheme("KitOnly", (ref("Kit"),)),
        ),
        settings=Settings(configurations=(BuildConfiguration("Debug", "debug"),)),
    )
    return Graph(name="App", path=root, projects={path: project}, entry_paths=(path,))


@dataclass
class Harness:
    root: Path
    workspace: Path
    service: RunService
    controller: RecordingController
    provider: FakeGraphProvider
    console: MockConsole
    locator: BuildDirectoryLocator

    def products(self, platform: Platform, configuration: str = "Debug") -> Path:
        d = self.locator.locate(platform, self.workspace, configuration)
        d.mkdir(parents=True, exist_ok=True)
        return d

    def run(
        self, scheme: str, arguments: Sequence[str] = (), **kwargs: object
    ) -> Result[int, object]:
        params: dict[str, object] = {
            "scheme_name": scheme,
            "generate": False,
            "clean": False,
            "path": self.root,
            "configuration": None,
            "arguments": list(arguments),
        }
        params.update(kwargs)
        return self.service.run(**params)  # type: ignore[arg-type]


def _harness(
    root: Path,
    *,
    graph: Graph | None = None,
    controller: RecordingController | None = None,
    launcher: RecordingLauncher | None = None,
    with_workspace: bool = True,
) -> Harness:
    workspace = root / "App.xcworkspace"
    if with_workspace:
        workspace.mkdir()
        (workspace / GENERATED_MARKER).write_text("", encoding="utf-8")

    console = MockConsole()
    controller = controller or RecordingController()
    provider = FakeGraphProvider(graph if graph is not None else _graph(root))
    inspector = BuildGraphInspector(console=console)
    locator = BuildDirectoryLocator(derived_data_dir=root / "dd")
    build_service = BuildService(
        config=Config(),
        console=console,
        graph_provider=provider,
        inspector=inspector,
        locator=locator,
        build_controller=controller,
    )
    service = RunService(
        config=Config(),
        console=console,
        graph_provider=provider,
        inspector=inspector,
        locator=locator,
        build_service=build_service,
        app_launcher=launcher,
    )
    return Harness(root, workspace, service, controller, provider, console, locator)


@pytest.fixture
def executed(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    seen: list[list[str]] = []

    def fake_run_inherit(cmd: Sequence[str], *, cwd: Path | None = None) -> int:
        seen.append(list(cmd))
        return 3

    monkeypatch.setattr("wsgen.services.run.run_inherit", fake_run_inherit)
    return seen


def test_run_command_line_tool_forwards_arguments(
    tmp_path: Path, executed: list[list[str]]
) -> None:
    h = _harness(tmp_path)
    exe = h.products(Platform.MACOS) / "App"
    exe.write_bytes(b"#!")

    result = h.run("App", ["--verbose", "-x", "two words"])

    assert result == Ok(3)
    assert h.controller.schemes == [("App", False)]
    assert executed == [[str(exe), "--verbose", "-x", "two words"]]


def test_run_example_scenario(tmp_path: Path, executed: list[list[str]]) -> None:
    h = _harness(tmp_path)
    exe = h.products(Platform.MACOS) / "App"
    exe.write_bytes(b"#!")

    result = h.run("App", ["--verbose"], clean=True)

    assert result == Ok(3)
    assert h.controller.schemes == [("App", True)]
    assert executed == [[str(exe), "--verbose"]]
    assert "Running executable App" in h.console.text


def test_run_uses_explicit_configuration_for_artifact(
    tmp_path: Path, executed: list[list[str]]
) -> None:
    h = _harness(tmp_path)
    exe = h.products(Platform.MACOS, "Beta") / "App"
    exe.write_bytes(b"#!")

    result = h.run("App", configuration="Beta")

    assert result == Ok(3)
    assert executed == [[str(exe)]]


def test_run_app_bundle_is_not_implemented_after_building(
    tmp_path: Path, executed: list[list[str]]
) -> None:
    h = _harness(tmp_path)
    (h.products(Platform.IOS) / "Viewer.app").mkdir()

    result = h.run("Viewer")

    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "feature_not_implemented"
    assert result.error.message == "Sorry, this feature is not currently implemented."
    assert h.controller.schemes == [("Viewer", False)]
    assert executed == []


def test_run_app_bundle_uses_injected_launcher(tmp_path: Path, executed: list[list[str]]) -> None:
    launcher = RecordingLauncher()
    h = _harness(tmp_path, launcher=launcher)
    app = h.products(Platform.IOS) / "Viewer.app"
    app.mkdir()

    assert h.run("Viewer") == Ok(0)
    assert launcher.launched == [app]


def test_run_unknown_scheme_lists_runnable_schemes(tmp_path: Path) -> None:
    h = _harness(tmp_path)

    result = h.run("KitOnly")

    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "scheme_not_found"
    assert result.error.existing == ("App", "Kit", "Viewer")
    assert h.controller.schemes == []


def test_run_scheme_without_runnable_target_fails_before_building(tmp_path: Path) -> None:
    h = _harness(tmp_path)

    result = h.run("Kit")

    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "scheme_without_runnable_target"
    assert result.error.message == (
        "The scheme Kit cannot be run because it contains no runnable target."
    )
    assert h.controller.schemes == []


def test_run_missing_artifact(tmp_path: Path, executed: list[list[str]]) -> None:
    h = _harness(tmp_path)

    result = h.run("App")

    expected = h.locator.locate(Platform.MACOS, h.workspace, "Debug") / "App"
    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "runnable_not_found"
    assert result.error.path == expected
    assert executed == []


def test_run_reports_product_that_cannot_be_executed(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(cmd: Sequence[str], *, cwd: Path | None = None) -> int:
        raise PermissionError(13, "Permission denied", cmd[0])

    monkeypatch.setattr("wsgen.services.run.run_inherit", refuse)
    h = _harness(tmp_path)
    exe = h.products(Platform.MACOS) / "App"
    exe.write_bytes(b"not a binary")

    result = h.run("App")

    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "runnable_not_executable"
    assert result.error.path == exe
    assert "Permission denied" in result.error.message


def test_run_propagates_build_failure_unchanged(tmp_path: Path, executed: list[list[str]]) -> None:
    failure = BuildInvocationError(kind="build_failed", message="xcodebuild failed", returncode=65)
    h = _harness(tmp_path, controller=RecordingController(error=failure))

    result = h.run("App")

    assert result == Err(failure)
    assert executed == []


def test_run_propagates_generation_failure(tmp_path: Path) -> None:
    h = _harness(tmp_path, with_workspace=False)
    h.provider.graph = None

    result = h.run("App")

    assert isinstance(result, Err)
    assert isinstance(result.error, GenerationError)
    assert h.provider.generated == [tmp_path]


def test_run_without_workspace(tmp_path: Path) -> None:
    h = _harness(tmp_path, with_workspace=False)

    result = h.run("App")

    assert isinstance(result, Err)
    assert isinstance(result.error, RunError)
    assert result.error.kind == "workspace_not_found"
    assert h.provider.generated == [tmp_path]
