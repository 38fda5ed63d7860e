from __future__ import annotations

import json
import socket
from pathlib import Path

import pytest
from hypothesis import settings
from hypothesis.database import DirectoryBasedExampleDatabase

from tests.helpers import NOW, FakeFilesystem, FixedClock, write_asset

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

_ROOT = Path(__file__).resolve().parents[1]
_HYPOTHESIS_DB = _ROOT / "artifacts/assetctl/.hypothesis/examples"
_HYPOTHESIS_DB.parent.mkdir(parents=True, exist_ok=True)
settings.register_profile("assetctl", database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB), deadline=None)
settings.load_profile("assetctl")

MANIFEST = {
    ".manifest.json": ".manifest.json",
    "one.txt": "one-f2e1ec14.txt",
    "one.txt.map": "one-f2e1ec15.txt.map",
    "file-already-abcdefVWXYZ0123456789_-.digested.css": "file-already-abcdefVWXYZ0123456789_-.digested.css",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CI", "RUN_ID", "ASSETCTL_OUTPUT_ROOT", "ASSETCTL_CONFIG", "ASSETCTL_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def manifest() -> dict[str, str]:
    return dict(MANIFEST)


@pytest.fixture
def output_dir(tmp_path: Path, manifest: dict[str, str]) -> Path:
    root = tmp_path / "public" / "assets"
    root.mkdir(parents=True)
    (root / ".manifest.json").write_text(json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    (root / "one-f2e1ec14.txt").write_text("One from the first build\n", encoding="utf-8")
    (root / "one-f2e1ec15.txt.map").write_text("{}\n", encoding="utf-8")
    (root / "file-already-abcdefVWXYZ0123456789_-.digested.css").write_text("body{}\n", encoding="utf-8")
    return root


@pytest.fixture
def output_asset(output_dir: Path):
    def _make(logical_path: str, content: str, age_seconds: float = 0.0) -> Path:
        return write_asset(output_dir, logical_path, content, age_seconds=age_seconds)

    return _make


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def fake_fs() -> FakeFilesystem:
    return FakeFilesystem(Path("/srv/public/assets"))
