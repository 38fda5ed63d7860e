from __future__ import annotations

import json
from pathlib import Path

from ..contracts.validate import validate
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_VALIDATION


def load_manifest(path: Path, output_root: Path | None = None) -> dict[str, str]:
    """Read the logical-path to output-filename manifest.

    The manifest's own filename is added as a self-entry so the retention
    sweep treats it as live. When ``output_root`` is given the self-entry is
    only added if the manifest actually lives in that directory. A missing
    file yields just that entry.
    """
    manifest: dict[str, str] = {}
    if path.is_file():
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ScriptError(f"manifest is not valid JSON: {path}: {exc}", ERR_VALIDATION, kind="manifest_invalid") from exc
        except OSError as exc:
            raise ScriptError(f"manifest is unreadable: {path}: {exc}", ERR_VALIDATION, kind="manifest_invalid") from exc
        try:
            validate("assetctl.manifest.v1", payload)
        except ScriptError as exc:
            raise ScriptError(f"manifest {path} is malformed: {exc}", ERR_VALIDATION, kind="manifest_invalid") from exc
        manifest.update(payload)
    if output_root is None or path.parent.resolve() == output_root.resolve():
        manifest.setdefault(path.name, path.name)
    return manifest
