"""Shared argparse helpers for common assetctl flags."""

from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser, help_text: str = "emit JSON output") -> None:
    parser.add_argument("--json", action="store_true", help=help_text)


def non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got `{raw}`") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got `{raw}`")
    return value
