from __future__ import annotations

import json
from pathlib import Path

ERROR_REGISTRY = Path(__file__).resolve().parent / "error-registry.json"


def _load_registry() -> dict[str, int]:
    payload = json.loads(ERROR_REGISTRY.read_text(encoding="utf-8"))
    mapping: dict[str, int] = {}
    for row in payload.get("codes", []):
        mapping[str(row["name"])] = int(row["code"])
    return mapping


_REG = _load_registry()

OK = 0
ERR_USAGE = _REG["ASSETS_ERR_USAGE"]
ERR_CONFIG = _REG["ASSETS_ERR_CONFIG"]
ERR_CONTEXT = _REG["ASSETS_ERR_CONTEXT"]
ERR_PREREQ = _REG["ASSETS_ERR_PREREQ"]
ERR_VALIDATION = _REG["ASSETS_ERR_VALIDATION"]
ERR_ARTIFACT = _REG["ASSETS_ERR_ARTIFACT"]
ERR_INTERNAL = _REG["ASSETS_ERR_INTERNAL"]
