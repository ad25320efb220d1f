"""Graph dump reader.

The generator writes the graph of the workspace it produced as JSON. Relative
project paths in the dump are resolved against the directory the workspace was
generated from.

Example::

    {
      "name": "App",
      "entry_projects": ["App"],
      "workspace_schemes": [],
      "projects": [
        {
          "path": "App",
          "name": "App",
          "settings": {"configurations": [{"name": "Debug", "variant": "debug"}]},
          "targets": [
            {"name": "App", "platform": "macos", "product": "command_line_tool",
             "product_name": "App"}
          ],
          "schemes": [
            {"name": "App",
             "build_targets": [{"project": "App", "target": "App"}],
             "run": {"executable": {"project": "App", "target": "App"}}}
          ]
        }
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path

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
from wsgen.core.structured import as_str_dict, get_list, get_str, get_table

__all__ = ["GraphFormatError", "parse_graph", "read_graph"]


class GraphFormatError(ValueError):
    """Raised when a graph dump does not match the expected shape."""


def read_graph(dump: Path, root: Path) -> Graph:
    """Read the graph dump at ``dump``; relative paths resolve against ``root``."""
    try:
        raw: object = json.loads(dump.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"invalid JSON in {dump}: {e}") from e
    except UnicodeDecodeError as e:
        raise GraphFormatError(f"{dump} is not UTF-8: {e}") from e
    return parse_graph(raw, root)


def parse_graph(raw: object, root: Path) -> Graph:
    data = _table(raw, "graph")
    projects: dict[Path, Project] = {}
    for item in get_list(data, "projects"):
        project = _parse_project(item, root)
        projects[project.path] = project

    entry_paths: list[Path] = []
    for item in get_list(data, "entry_projects"):
        if not isinstance(item, str):
            raise GraphFormatError("graph.entry_projects must contain strings")
        entry_paths.append(_resolve(root, item))

    return Graph(
        name=get_str(data, "name") or root.name,
        path=root,
        projects=projects,
        workspace_schemes=tuple(
            _parse_scheme(s, root, root) for s in get_list(data, "workspace_schemes")
        ),
        entry_paths=tuple(entry_paths),
    )


def _parse_project(raw: object, root: Path) -> Project:
    data = _table(raw, "project")
    path = _resolve(root, _required_str(data, "path", "project"))
    return Project(
        path=path,
        name=get_str(data, "name") or path.name,
        targets=tuple(_parse_target(t) for t in get_list(data, "targets")),
        schemes=tuple(_parse_scheme(s, root, path) for s in get_list(data, "schemes")),
        settings=_parse_settings(get_table(data, "settings")) or Settings(),
    )


def _parse_target(raw: object) -> Target:
    data = _table(raw, "target")
    name = _required_str(data, "name", "target")
    where = f"target {name}"

    platform_value = _required_str(data, "platform", where)
    try:
        platform = Platform(platform_value)
    except ValueError:
        raise GraphFormatError(f"{where}: unknown platform '{platform_value}'") from None

    product_value = _required_str(data, "product", where)
    try:
        product = Product(product_value)
    except ValueError:
        raise GraphFormatError(f"{where}: unknown product '{product_value}'") from None

    return Target(
        name=name,
        platform=platform,
        product=product,
        product_name=get_str(data, "product_name") or name,
        settings=_parse_settings(get_table(data, "settings")),
    )


def _parse_settings(data: dict[str, object] | None) -> Settings | None:
    if data is None:
        return None
    configs: list[BuildConfiguration] = []
    for item in get_list(data, "configurations"):
        config = _table(item, "configuration")
        name = _required_str(config, "name", "configuration")
        variant = get_str(config, "variant")
        if variant == "debug":
            configs.append(BuildConfiguration(name=name, variant="debug"))
        elif variant == "release":
            configs.append(BuildConfiguration(name=name, variant="release"))
        else:
            raise GraphFormatError(f"configuration {name}: variant must be debug or release")
    return Settings(configurations=tuple(configs))


def _parse_scheme(raw: object, root: Path, owner: Path) -> Scheme:
    data = _table(raw, "scheme")
    name = _required_str(data, "name", "scheme")
    where = f"scheme {name}"

    build_targets = tuple(
        _parse_reference(r, root, owner, where) for r in get_list(data, "build_targets")
    )

    run_action: RunAction | None = None
    run = get_table(data, "run")
    if run is not None:
        executable = run.get("executable")
        run_action = RunAction(
            executable=(
                _parse_reference(executable, root, owner, where)
                if executable is not None
                else None
            ),
        )

    return Scheme(name=name, build_action=build_targets, run_action=run_action)


def _parse_reference(raw: object, root: Path, owner: Path, where: str) -> TargetReference:
    data = _table(raw, f"{where} target reference")
    project = get_str(data, "project")
    return TargetReference(
        project_path=_resolve(root, project) if project else owner,
        name=_required_str(data, "target", where),
    )


def _table(raw: object, what: str) -> dict[str, object]:
    data = as_str_dict(raw)
    if data is None:
        raise GraphFormatError(f"{what} must be an object")
    return data


def _required_str(data: dict[str, object], key: str, where: str) -> str:
    value = get_str(data, key)
    if not value:
        raise GraphFormatError(f"{where}: missing '{key}'")
    return value


def _resolve(root: Path, value: str) -> Path:
    p = Path(value)
    return p if p.is_absolute() else root / p
