from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..assets.command import configure_assets_parser, run_assets_command
from ..config.command import configure_config_parser, run_config_command
from ..contracts.validate import validate_file
from ..core.arg import add_json_flag
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL, ERR_USAGE
from ..core.runtime.env import getenv
from ..core.runtime.logging import log_event
from .output import emit, render_error, resolve_output_format

ASSET_COMMANDS = {"files", "clean", "clobber"}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="assetctl")
    p.add_argument("--version", action="version", version=f"assetctl {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--run-id", help="run identifier used in logs and reports")
    p.add_argument("--output-root", help="fingerprinted asset output directory (default: public/assets)")
    p.add_argument("--manifest", help="manifest path (default: <output-root>/.manifest.json)")
    p.add_argument("--config", help="retention config file (.json, .yaml or .yml)")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit structured log lines as JSON")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print version")
    add_json_flag(version_p)
    configure_assets_parser(sub)
    configure_config_parser(sub)

    val_p = sub.add_parser("validate-output", help="validate a JSON report against a packaged schema")
    val_p.add_argument("--schema", required=True)
    val_p.add_argument("--file", required=True)
    add_json_flag(val_p)
    return p


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(argv)
    fmt = resolve_output_format(cli_json=("--json" in raw_argv), cli_format=ns.format, ci_present=bool(getenv("CI")))
    as_json = fmt == "json"
    try:
        ctx = RunContext.from_args(
            run_id=ns.run_id,
            output_root=ns.output_root,
            manifest=ns.manifest,
            config=ns.config,
            output_format=fmt,
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, root=str(ctx.output_root))
        if ns.cmd == "version":
            payload = {"schema_version": 1, "tool": "assetctl", "status": "ok", "assetctl_version": __version__}
            if as_json:
                emit(payload, True)
            else:
                print(f"assetctl {__version__}")
            return 0
        if ns.cmd in ASSET_COMMANDS:
            return run_assets_command(ctx, ns)
        if ns.cmd == "config":
            return run_config_command(ctx, ns)
        if ns.cmd == "validate-output":
            validate_file(ns.schema, ns.file)
            if as_json:
                emit({"status": "ok", "schema": ns.schema, "file": ns.file}, True)
            else:
                print(f"ok: {ns.file} matches {ns.schema}")
            return 0
        return ERR_USAGE
    except ScriptError as exc:
        print(render_error(as_json=as_json, **exc.as_row()), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
