from __future__ import annotations

from pathlib import Path

import pytest

from derivatives_pricing.cli import config as mod


def test_load_yaml_config_none_returns_empty() -> None:
    assert mod.load_yaml_config(None) == {}


def test_load_yaml_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        mod.load_yaml_config(tmp_path / "missing.yml")


def test_load_yaml_config_non_mapping_raises(write_yaml) -> None:
    path = write_yaml("bad.yml", [1.2, 0.8])
    with pytest.raises(ValueError, match="YAML mapping"):
        mod.load_yaml_config(path)


def test_load_yaml_config_reads_contract(write_yaml) -> None:
    path = write_yaml("ok.yml", {"contract": {"up": 1.2, "down": 0.8}})
    assert mod.load_yaml_config(path) == {"contract": {"up": 1.2, "down": 0.8}}


def test_load_yaml_config_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert mod.load_yaml_config(path) == {}


def test_deep_merge_merges_nested_and_overrides() -> None:
    base = {"steps": 2, "contract": {"up": 1.2, "down": 0.8}, "tags": [1, 2]}
    updates = {"contract": {"up": 1.5}, "tags": [3], "extra": True}
    merged = mod.deep_merge(base, updates)
    assert merged == {
        "steps": 2,
        "contract": {"up": 1.5, "down": 0.8},
        "tags": [3],
        "extra": True,
    }
    assert base["contract"]["up"] == 1.2


def test_build_config_precedence_defaults_yaml_overrides(write_yaml) -> None:
    defaults = {"contract": {"spot": None, "steps": 2}, "dry_run": False}
    yaml_path = write_yaml("cfg.yml", {"contract": {"spot": 100.0, "steps": 3}})
    overrides = {"contract": {"steps": 5}, "dry_run": True}
    config = mod.build_config(defaults, yaml_path, overrides)
    assert config == {"contract": {"spot": 100.0, "steps": 5}, "dry_run": True}


def test_resolve_path_expands_home_and_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("CONFIG_ROOT", str(tmp_path / "cfg"))

    assert mod.resolve_path("~/runs") == tmp_path / "runs"
    assert mod.resolve_path("$CONFIG_ROOT/tree.yml") == tmp_path / "cfg" / "tree.yml"


def test_resolve_path_passthrough_and_none(tmp_path: Path) -> None:
    assert mod.resolve_path(None) is None
    assert mod.resolve_path(tmp_path) == tmp_path
