from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

__all__ = ["FileSystem", "LocalFileSystem"]


class FileSystem(Protocol):
    """Filesystem primitives used when copying build products.

    Implementations raise ``OSError`` on failure.
    """

    def exists(self, path: Path) -> bool: ...

    def create_directory(self, path: Path) -> None: ...

    def copy(self, src: Path, dst: Path) -> None: ...

    def delete(self, path: Path) -> None: ...

    def list_directory(self, path: Path) -> list[Path]: ...


class LocalFileSystem:
    def exists(self, path: Path) -> bool:
        # Broken symlinks still count; they have to be deleted before a copy.
        return path.exists() or path.is_symlink()

    def create_directory(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy(self, src: Path, dst: Path) -> None:
        if src.is_dir() and not src.is_symlink():
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst, follow_symlinks=False)

    def delete(self, path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()

    def list_directory(self, path: Path) -> list[Path]:
        return sorted(path.iterdir(), key=lambda p: p.name)
