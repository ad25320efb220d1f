from __future__ import annotations

import json
from pathlib import Path

import pytest

from wsgen.core.graph import Platform, Product, TargetReference
from wsgen.core.graph_io import GraphFormatError, parse_graph, read_graph

_DUMP: dict[str, object] = {
    "name": "App",
    "entry_projects": ["App"],
    "workspace_schemes": [
        {"name": "Everything", "build_targets": [{"project": "App", "target": "App"}]}
    ],
    "projects": [
        {
            "path": "App",
            "name": "App",
            "settings": {
                "configurations": [
                    {"name": "Debug", "variant": "debug"},
                    {"name": "Release", "variant": "release"},
                ]
            },
            "targets": [
                {
                    "name": "App",
                    "platform": "macos",
                    "product": "command_line_tool",
                    "product_name": "app",
                },
                {"name": "Kit", "platform": "ios", "product": "framework"},
            ],
            "schemes": [
                {
                    "name": "App",
                    "build_targets": [{"target": "App"}],
                    "run": {"executable": {"target": "App"}},
                }
            ],
        }
    ],
}


def test_parse_graph_resolves_relative_paths(tmp_path: Path) -> None:
    graph = parse_graph(_DUMP, tmp_path)

    project_path = tmp_path / "App"
    assert graph.name == "App"
    assert graph.path == tmp_path
    assert graph.entry_paths == (project_path,)
    assert list(graph.projects) == [project_path]

    project = graph.projects[project_path]
    assert [t.name for t in project.targets] == ["App", "Kit"]
    assert project.targets[0].product == Product.COMMAND_LINE_TOOL
    assert project.targets[0].product_name == "app"
    assert project.targets[1].platform == Platform.IOS
    # product_name defaults to the target name
    assert project.targets[1].product_name == "Kit"

    scheme = project.schemes[0]
    # References without "project" point at the owning project.
    assert scheme.build_action == (TargetReference(project_path, "App"),)
    assert scheme.run_action is not None
    assert scheme.run_action.executable == TargetReference(project_path, "App")

    assert [c.name for c in project.settings.configurations] == ["Debug", "Release"]
    assert graph.workspace_schemes[0].build_action == (TargetReference(project_path, "App"),)


def test_read_graph_from_file(tmp_path: Path) -> None:
    dump = tmp_path / "graph.json"
    dump.write_text(json.dumps(_DUMP), encoding="utf-8")
    graph = read_graph(dump, tmp_path)
    assert [s.name for s in graph.schemes()] == ["Everything", "App"]


def test_read_graph_rejects_invalid_json(tmp_path: Path) -> None:
    dump = tmp_path / "graph.json"
    dump.write_text("{not json", encoding="utf-8")
    with pytest.raises(GraphFormatError, match="invalid JSON"):
        read_graph(dump, tmp_path)


def test_parse_graph_rejects_unknown_platform(tmp_path: Path) -> None:
    raw = {
        "projects": [
            {
                "path": "A",
                "targets": [{"name": "T", "platform": "linux", "product": "app"}],
            }
        ]
    }
    with pytest.raises(GraphFormatError, match="unknown platform 'linux'"):
        parse_graph(raw, tmp_path)


def test_parse_graph_requires_scheme_name(tmp_path: Path) -> None:
    raw = {"projects": [{"path": "A", "schemes": [{"build_targets": []}]}]}
    with pytest.raises(GraphFormatError, match="missing 'name'"):
        parse_graph(raw, tmp_path)


def test_parse_graph_rejects_non_object(tmp_path: Path) -> None:
    with pytest.raises(GraphFormatError):
        parse_graph(["not", "a", "graph"], tmp_path)


def test_parse_graph_rejects_unknown_variant(tmp_path: Path) -> None:
    raw = {
        "projects": [
            {"path": "A", "settings": {"configurations": [{"name": "Beta", "variant": "x"}]}}
        ]
    }
    with pytest.raises(GraphFormatError, match="variant"):
        parse_graph(raw, tmp_path)
