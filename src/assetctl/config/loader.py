from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..contracts.validate import validate
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG

DEFAULT_KEEP_LAST = 2
DEFAULT_MAX_AGE_SECONDS = 3600

_DURATION_RE = re.compile(r"^\s*(?P<value>\d+)\s*(?P<unit>[smhdw]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


@dataclass(frozen=True)
class RetentionConfig:
    keep_last: int = DEFAULT_KEEP_LAST
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
    source: str = "defaults"

    def as_dict(self) -> dict[str, object]:
        return {"keep_last": self.keep_last, "max_age_seconds": self.max_age_seconds, "source": self.source}


def parse_duration(raw: str | int) -> int:
    """Seconds from `90`, `90s`, `15m`, `1h`, `2d` or `1w`."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        if raw < 0:
            raise ScriptError(f"duration must be non-negative: {raw}", ERR_CONFIG, kind="invalid_duration")
        return raw
    match = _DURATION_RE.match(str(raw))
    if not match:
        raise ScriptError(f"invalid duration `{raw}`; expected e.g. 3600, 90s, 15m, 1h, 2d", ERR_CONFIG, kind="invalid_duration")
    return int(match["value"]) * _UNIT_SECONDS[match["unit"]]


def load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_config_file(path: Path) -> Any:
    if not path.is_file():
        raise ScriptError(f"retention config not found: {path}", ERR_CONFIG, kind="config_missing")
    try:
        if path.suffix in {".yaml", ".yml"}:
            return load_yaml(path)
        return json.loads(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid YAML in {path}: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    except json.JSONDecodeError as exc:
        raise ScriptError(f"invalid JSON in {path}: {exc}", ERR_CONFIG, kind="config_invalid") from exc


def load_retention_config(path: Path | None) -> RetentionConfig:
    if path is None:
        return RetentionConfig()
    payload = _read_config_file(path)
    if payload is None:
        payload = {}
    try:
        validate("assetctl.retention-config.v1", payload)
    except ScriptError as exc:
        raise ScriptError(str(exc), ERR_CONFIG, kind="config_invalid") from exc
    return RetentionConfig(
        keep_last=int(payload.get("keep_last", DEFAULT_KEEP_LAST)),
        max_age_seconds=parse_duration(payload.get("max_age", DEFAULT_MAX_AGE_SECONDS)),
        source=str(path),
    )


def resolve_retention(config: RetentionConfig, keep_last: int | None, max_age: str | None) -> RetentionConfig:
    if keep_last is None and max_age is None:
        return config
    return RetentionConfig(
        keep_last=config.keep_last if keep_last is None else keep_last,
        max_age_seconds=config.max_age_seconds if max_age is None else parse_duration(max_age),
        source="cli" if config.source == "defaults" else f"{config.source}+cli",
    )
