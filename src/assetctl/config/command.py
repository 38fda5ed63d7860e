from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..contracts.validate import validate
from ..core.arg import add_json_flag
from ..core.context import RunContext
from .loader import load_retention_config


def run_config_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    retention = load_retention_config(ctx.config_path)
    payload = build_base_payload(ctx, "assetctl.config.v1")
    payload.update(
        {
            "manifest_path": str(ctx.manifest_path),
            "config_path": str(ctx.config_path) if ctx.config_path else None,
            "retention": retention.as_dict(),
        }
    )
    validate("assetctl.config.v1", payload)
    emit(payload, ctx.output_format == "json" or ns.json)
    return 0


def configure_config_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    config = sub.add_parser("config", help="configuration commands")
    config_sub = config.add_subparsers(dest="config_cmd", required=True)
    dump = config_sub.add_parser("dump", help="print the resolved retention configuration")
    add_json_flag(dump)
