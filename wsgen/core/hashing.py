"""Xcode derived-data directory naming.

Xcode names a workspace's derived data folder ``<stem>-<hash>`` where the hash
is 28 lowercase letters derived from the MD5 of the workspace's absolute path.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

__all__ = ["derived_data_dirname", "derived_data_hash"]

_HALF = 14


def derived_data_hash(path: str) -> str:
    digest = hashlib.md5(path.encode("utf-8"), usedforsecurity=False).digest()
    # Each 8-byte half is written base-26, least significant letter last.
    chars: list[str] = []
    for half in (digest[:8], digest[8:]):
        value = int.from_bytes(half, "big")
        letters = [""] * _HALF
        for i in range(_HALF - 1, -1, -1):
            letters[i] = chr(ord("a") + value % 26)
            value //= 26
        chars.extend(letters)
    return "".join(chars)


def derived_data_dirname(workspace_path: Path) -> str:
    return f"{workspace_path.stem}-{derived_data_hash(str(workspace_path))}"
