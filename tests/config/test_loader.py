from __future__ import annotations

import json
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from assetctl.config.loader import (
    DEFAULT_KEEP_LAST,
    DEFAULT_MAX_AGE_SECONDS,
    RetentionConfig,
    load_retention_config,
    parse_duration,
    resolve_retention,
)
from assetctl.core.errors import ScriptError
from assetctl.core.exit_codes import ERR_CONFIG


@pytest.mark.parametrize(
    ("raw", "seconds"),
    [("0", 0), ("90", 90), ("90s", 90), ("15m", 900), ("1h", 3600), ("2d", 172800), ("1w", 604800), (45, 45)],
)
def test_parse_duration(raw, seconds: int) -> None:
    assert parse_duration(raw) == seconds


@pytest.mark.parametrize("raw", ["", "h", "-5", "1.5h", "10y", -1])
def test_parse_duration_rejects_garbage(raw) -> None:
    with pytest.raises(ScriptError) as excinfo:
        parse_duration(raw)
    assert excinfo.value.kind == "invalid_duration"


@given(st.integers(min_value=0, max_value=10**6), st.sampled_from(["s", "m", "h", "d", "w"]))
def test_parse_duration_scales_by_unit(value: int, unit: str) -> None:
    factor = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}[unit]
    assert parse_duration(f"{value}{unit}") == value * factor


def test_defaults_without_config() -> None:
    cfg = load_retention_config(None)
    assert cfg == RetentionConfig(DEFAULT_KEEP_LAST, DEFAULT_MAX_AGE_SECONDS, "defaults")


def test_json_config(tmp_path: Path) -> None:
    path = tmp_path / "retention.json"
    path.write_text(json.dumps({"schema_version": 1, "keep_last": 5, "max_age": "2h"}), encoding="utf-8")
    cfg = load_retention_config(path)
    assert cfg.keep_last == 5
    assert cfg.max_age_seconds == 7200
    assert cfg.source == str(path)


def test_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "retention.yaml"
    path.write_text("keep_last: 0\nmax_age: 600\n", encoding="utf-8")
    cfg = load_retention_config(path)
    assert (cfg.keep_last, cfg.max_age_seconds) == (0, 600)


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "retention.yml"
    path.write_text("", encoding="utf-8")
    cfg = load_retention_config(path)
    assert (cfg.keep_last, cfg.max_age_seconds) == (DEFAULT_KEEP_LAST, DEFAULT_MAX_AGE_SECONDS)


@pytest.mark.parametrize(
    ("name", "content"),
    [
        ("bad.json", "{"),
        ("bad.yaml", "keep_last: [unclosed\n"),
        ("neg.json", '{"keep_last": -1}'),
        ("extra.json", '{"keep": 1}'),
        ("age.json", '{"max_age": "soon"}'),
        ("list.yaml", "- 1\n- 2\n"),
    ],
)
def test_invalid_config_is_config_error(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ScriptError) as excinfo:
        load_retention_config(path)
    assert excinfo.value.code == ERR_CONFIG
    assert excinfo.value.kind == "config_invalid"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as excinfo:
        load_retention_config(tmp_path / "nope.json")
    assert excinfo.value.kind == "config_missing"


def test_cli_values_override_config() -> None:
    base = RetentionConfig(5, 7200, "retention.json")
    assert resolve_retention(base, None, None) is base
    merged = resolve_retention(base, 1, "30m")
    assert (merged.keep_last, merged.max_age_seconds, merged.source) == (1, 1800, "retention.json+cli")
    assert resolve_retention(RetentionConfig(), 0, None).source == "cli"
