from __future__ import annotations

import importlib

import pytest

from derivatives_pricing.options import InvalidInputError

pytestmark = pytest.mark.integration

MODULE = "derivatives_pricing.apps.black_scholes"


def test_black_scholes_help_exits_cleanly(run_help) -> None:
    mod = importlib.import_module(MODULE)
    run_help(mod, "Black-Scholes price and Greeks for a European option.")


def test_black_scholes_cli_overrides_yaml(capsys, parse_printed_config) -> None:
    mod = importlib.import_module(MODULE)
    mod.main(
        [
            "--config",
            "config/black_scholes.yml",
            "--expiry",
            "0.5",
            "--volatility",
            "0.3",
            "--option-type",
            "put",
            "--print-config",
        ]
    )
    cfg = parse_printed_config(capsys.readouterr().out)
    assert cfg["option"]["time_to_expiry"] == 0.5
    assert cfg["option"]["volatility"] == 0.3
    assert cfg["option"]["option_type"] == "put"
    assert cfg["option"]["spot"] == 100.0


def test_black_scholes_prints_report(capsys) -> None:
    mod = importlib.import_module(MODULE)
    mod.main(["--config", "config/black_scholes.yml", "--no-color"])
    out = capsys.readouterr().out
    assert "Black-Scholes call" in out
    assert "10.4506" in out
    assert "d1" in out


def test_black_scholes_rejects_non_positive_volatility() -> None:
    mod = importlib.import_module(MODULE)
    with pytest.raises(InvalidInputError, match="volatility must be > 0"):
        mod.main(
            ["--config", "config/black_scholes.yml", "--volatility", "0", "--no-color"]
        )


def test_black_scholes_report_comes_from_pricer(monkeypatch, capsys) -> None:
    mod = importlib.import_module(MODULE)
    calls: list[str] = []
    real_pricer = mod.BlackScholesPricer

    class _RecordingPricer(real_pricer):
        def price_and_greeks(self, spec, state):
            calls.append(spec.option_type)
            return super().price_and_greeks(spec, state)

    monkeypatch.setattr(mod, "BlackScholesPricer", _RecordingPricer)
    mod.main(["--config", "config/black_scholes.yml", "--option-type", "put", "--no-color"])

    assert calls == ["put"]
    out = capsys.readouterr().out
    assert "Black-Scholes put" in out
    assert "5.5735" in out
    assert "d2                     : 0.1500" in out
