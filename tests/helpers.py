from __future__ import annotations

import hashlib
import os
import subprocess
import sys
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

from assetctl.assets.classify import classify

ROOT = Path(__file__).resolve().parents[1]
NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def digested_name(logical_path: str, content: str) -> str:
    """Output filename for `logical_path` fingerprinted with `content`."""
    if classify(logical_path).is_predigested:
        return logical_path
    digest = hashlib.sha1(content.encode("utf-8")).hexdigest()[:8]
    stem, dot, suffix = logical_path.partition(".")
    return f"{stem}-{digest}{dot}{suffix}"


def write_asset(root: Path, logical_path: str, content: str, age_seconds: float = 0.0) -> Path:
    path = root / digested_name(logical_path, content)
    path.write_text(content, encoding="utf-8")
    stamp = time.time() - age_seconds
    os.utime(path, (stamp, stamp))
    return path


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeFilesystem:
    """In-memory single directory: filename -> mtime (epoch seconds)."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.entries: dict[str, float] = {}
        self.present = True
        self.fail_remove: dict[str, OSError] = {}
        self.removed: list[str] = []

    def add(self, name: str, mtime: datetime) -> None:
        self.entries[name] = mtime.timestamp()

    def is_dir(self, path: Path) -> bool:
        return self.present and path == self.root

    def list_files(self, path: Path) -> list[str]:
        assert path == self.root
        return sorted(self.entries)

    def mtime(self, path: Path) -> float:
        try:
            return self.entries[path.name]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def remove(self, path: Path) -> None:
        if path.name in self.fail_remove:
            raise self.fail_remove[path.name]
        if path.name not in self.entries:
            raise FileNotFoundError(str(path))
        del self.entries[path.name]
        self.removed.append(path.name)

    def remove_tree(self, path: Path) -> None:
        assert path == self.root
        self.entries.clear()
        self.present = False


def run_assetctl(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.setdefault("RUN_ID", "pytest-run")
    env.pop("CI", None)
    return subprocess.run(
        [sys.executable, "-m", "assetctl", *args],
        cwd=(cwd or ROOT),
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
