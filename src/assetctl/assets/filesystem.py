from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol


class Filesystem(Protocol):
    """Directory operations the output manager needs."""

    def is_dir(self, path: Path) -> bool: ...

    def list_files(self, path: Path) -> list[str]: ...

    def mtime(self, path: Path) -> float: ...

    def remove(self, path: Path) -> None: ...

    def remove_tree(self, path: Path) -> None: ...


class LocalFilesystem:
    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_files(self, path: Path) -> list[str]:
        return sorted(entry.name for entry in path.iterdir() if entry.is_file())

    def mtime(self, path: Path) -> float:
        return path.stat().st_mtime

    def remove(self, path: Path) -> None:
        path.unlink()

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path)
