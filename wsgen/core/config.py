"""Project configuration (``wsgen.toml``).

All keys are optional::

    [generator]
    command = ["tuist", "generate", "--no-open"]
    graph_dump = ".wsgen/graph.json"

    [xcode]
    derived_data = "~/Library/Developer/Xcode/DerivedData"
    xcodebuild = "xcodebuild"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from wsgen.core.structured import get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DERIVED_DATA_ENV",
    "Config",
    "ConfigError",
    "GeneratorConfig",
    "XcodeConfig",
    "load_config",
]

CONFIG_FILENAME = "wsgen.toml"
DERIVED_DATA_ENV = "WSGEN_DERIVED_DATA"


class ConfigError(Exception):
    """Raised when wsgen.toml exists but is malformed."""


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    command: tuple[str, ...] = ("tuist", "generate", "--no-open")
    graph_dump: str = ".wsgen/graph.json"


@dataclass(frozen=True, slots=True)
class XcodeConfig:
    derived_data: str = "~/Library/Developer/Xcode/DerivedData"
    xcodebuild: str = "xcodebuild"

    def derived_data_dir(self) -> Path:
        override = os.environ.get(DERIVED_DATA_ENV)
        return Path(override or self.derived_data).expanduser()


@dataclass(frozen=True, slots=True)
class Config:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    xcode: XcodeConfig = field(default_factory=XcodeConfig)


def load_config(directory: Path) -> Config:
    """Load ``wsgen.toml`` from ``directory``; defaults when the file is absent."""
    path = directory / CONFIG_FILENAME
    if not path.is_file():
        return Config()

    try:
        data: dict[str, object] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    generator = GeneratorConfig()
    gen = get_table(data, "generator")
    if gen is not None:
        command = generator.command
        if "command" in gen:
            value = get_str_list(gen, "command")
            if not value:
                raise ConfigError(f"{path}: generator.command must be a non-empty list of strings")
            command = tuple(value)
        generator = GeneratorConfig(
            command=command,
            graph_dump=_opt_str(gen, "graph_dump", path, "generator") or generator.graph_dump,
        )

    xcode = XcodeConfig()
    xc = get_table(data, "xcode")
    if xc is not None:
        xcode = XcodeConfig(
            derived_data=_opt_str(xc, "derived_data", path, "xcode") or xcode.derived_data,
            xcodebuild=_opt_str(xc, "xcodebuild", path, "xcode") or xcode.xcodebuild,
        )

    return Config(generator=generator, xcode=xcode)


def _opt_str(table: dict[str, object], key: str, path: Path, section: str) -> str | None:
    if key not in table:
        return None
    value = get_str(table, key)
    if not value:
        raise ConfigError(f"{path}: {section}.{key} must be a non-empty string")
    return value
