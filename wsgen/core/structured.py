"""Boundary validation helpers for untyped data (JSON, TOML).

Parsed documents come in as ``object``; these helpers narrow them without
resorting to ``typing.Any``.
"""

from __future__ import annotations

from typing import cast

__all__ = [
    "as_obj_list",
    "as_str_dict",
    "get_list",
    "get_str",
    "get_str_list",
    "get_table",
]


def as_str_dict(value: object) -> dict[str, object] | None:
    if not isinstance(value, dict):
        return None
    raw = cast(dict[object, object], value)
    if not all(isinstance(k, str) for k in raw):
        return None
    return cast(dict[str, object], raw)


def as_obj_list(value: object) -> list[object] | None:
    if not isinstance(value, list):
        return None
    return cast(list[object], value)


def get_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def get_table(data: dict[str, object], key: str) -> dict[str, object] | None:
    return as_str_dict(data.get(key))


def get_list(data: dict[str, object], key: str) -> list[object]:
    """List stored under ``key``; missing or mistyped values read as empty."""
    return as_obj_list(data.get(key)) or []


def get_str_list(data: dict[str, object], key: str) -> list[str] | None:
    items = as_obj_list(data.get(key))
    if items is None:
        return None
    if not all(isinstance(i, str) for i in items):
        return None
    return cast(list[str], items)
