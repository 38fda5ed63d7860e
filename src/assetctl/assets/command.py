from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..config.loader import load_retention_config, resolve_retention
from ..contracts.validate import validate
from ..core.arg import add_json_flag, non_negative_int
from ..core.context import RunContext
from ..core.exit_codes import ERR_ARTIFACT, ERR_USAGE
from .manifest import load_manifest
from .output_path import OutputPath


def _output_path(ctx: RunContext) -> OutputPath:
    return OutputPath(ctx.output_root, load_manifest(ctx.manifest_path, ctx.output_root), ctx=ctx)


def _as_json(ctx: RunContext, ns: argparse.Namespace) -> bool:
    return ctx.output_format == "json" or bool(getattr(ns, "json", False))


def _cmd_files(ctx: RunContext, ns: argparse.Namespace) -> int:
    records = _output_path(ctx).files()
    payload = build_base_payload(ctx, "assetctl.files.v1")
    payload["files"] = {name: record.as_dict() for name, record in sorted(records.items())}
    validate("assetctl.files.v1", payload)
    if _as_json(ctx, ns):
        emit(payload, True)
        return 0
    for name, record in sorted(records.items()):
        marker = "live" if record.is_live else "-"
        print(f"{name}\t{record.logical_path}\t{record.digest or '-'}\t{record.mtime.isoformat()}\t{marker}")
    return 0


def _cmd_clean(ctx: RunContext, ns: argparse.Namespace) -> int:
    retention = resolve_retention(load_retention_config(ctx.config_path), ns.keep, ns.max_age)
    report = _output_path(ctx).prune(retention.keep_last, retention.max_age_seconds, dry_run=ns.dry_run)
    payload = build_base_payload(ctx, "assetctl.clean.v1", status=report.status)
    payload.update(
        {
            "keep_last": report.keep_count,
            "max_age_seconds": report.max_age_seconds,
            "dry_run": report.dry_run,
            "removed": sorted(report.removed),
            "kept": dict(sorted(report.kept.items())),
            "failed": report.failed,
        }
    )
    validate("assetctl.clean.v1", payload)
    if _as_json(ctx, ns):
        emit(payload, True)
    else:
        verb = "would-remove" if report.dry_run else "removed"
        print(f"{verb}={len(report.removed)} kept={len(report.kept)} failed={len(report.failed)}")
    return 0 if not report.failed else ERR_ARTIFACT


def _cmd_clobber(ctx: RunContext, ns: argparse.Namespace) -> int:
    removed = OutputPath(ctx.output_root, {}, ctx=ctx).clobber()
    payload = build_base_payload(ctx, "assetctl.clobber.v1")
    payload["removed"] = removed
    validate("assetctl.clobber.v1", payload)
    if _as_json(ctx, ns):
        emit(payload, True)
    else:
        print(f"clobbered={str(removed).lower()} root={ctx.output_root}")
    return 0


def run_assets_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.cmd == "files":
        return _cmd_files(ctx, ns)
    if ns.cmd == "clean":
        return _cmd_clean(ctx, ns)
    if ns.cmd == "clobber":
        return _cmd_clobber(ctx, ns)
    return ERR_USAGE


def configure_assets_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    files = sub.add_parser("files", help="list fingerprinted files in the output directory")
    add_json_flag(files)

    clean = sub.add_parser("clean", help="remove superseded asset versions not referenced by the manifest")
    clean.add_argument("--keep", type=non_negative_int, help="versions to keep per asset regardless of age")
    clean.add_argument("--max-age", help="keep older versions younger than this (seconds or 90s/15m/1h/2d)")
    clean.add_argument("--dry-run", action="store_true", help="report decisions without deleting")
    add_json_flag(clean)

    clobber = sub.add_parser("clobber", help="remove the whole output directory")
    add_json_flag(clobber)
