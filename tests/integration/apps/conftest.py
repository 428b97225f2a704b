from __future__ import annotations

import json
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _repo_root_cwd(monkeypatch, request) -> None:
    # Apps read `config/*.yml` relative to the repository root.
    monkeypatch.chdir(request.config.rootpath)


@pytest.fixture
def parse_printed_config():
    return json.loads


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        assert expected in capsys.readouterr().out

    return _run


@pytest.fixture
def run_print_config(capsys):
    def _run(mod, config_path: str) -> dict[str, Any]:
        mod.main(["--config", config_path, "--print-config"])
        return json.loads(capsys.readouterr().out)

    return _run


@pytest.fixture
def assert_paths_exist():
    def _assert(cfg: dict[str, Any], paths: list[tuple[str, ...]]) -> None:
        for keys in paths:
            node: Any = cfg
            for key in keys:
                assert key in node, f"missing config key path {keys}"
                node = node[key]

    return _assert
