from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .runtime.env import getenv, getenv_flag

OutputFormat = Literal["text", "json"]

DEFAULT_OUTPUT_ROOT = "public/assets"
MANIFEST_FILENAME = ".manifest.json"


def _resolve(raw: str | Path, base: Path) -> Path:
    path = Path(raw).expanduser()
    return (base / path).resolve() if not path.is_absolute() else path.resolve()


@dataclass(frozen=True)
class RunContext:
    run_id: str
    cwd: Path
    output_root: Path
    manifest_path: Path
    config_path: Path | None
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        output_root: str | None = None,
        manifest: str | None = None,
        config: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
        cwd: Path | None = None,
    ) -> "RunContext":
        base = (cwd or Path.cwd()).resolve()
        default_run = f"assets-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv("RUN_ID") or default_run
        resolved_root = _resolve(output_root or getenv("ASSETCTL_OUTPUT_ROOT") or DEFAULT_OUTPUT_ROOT, base)
        resolved_manifest = _resolve(manifest, base) if manifest else resolved_root / MANIFEST_FILENAME
        raw_config = config or getenv("ASSETCTL_CONFIG")
        return cls(
            run_id=resolved_run_id,
            cwd=base,
            output_root=resolved_root,
            manifest_path=resolved_manifest,
            config_path=_resolve(raw_config, base) if raw_config else None,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json or getenv_flag("ASSETCTL_LOG_JSON"),
        )
