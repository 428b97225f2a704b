import math

import pytest

from derivatives_pricing.options import (
    BinomialContract,
    ExerciseStyle,
    OptionType,
    bs_greeks,
    build_binomial_tree,
    quoted_greeks,
)
from derivatives_pricing.options.reporting import (
    LATTICE_COLUMNS,
    format_binomial_report,
    format_black_scholes_report,
    lattice_frame,
)


@pytest.fixture
def american_put_result():
    contract = BinomialContract(
        spot=100.0,
        strike=100.0,
        up=1.2,
        down=0.8,
        rate=0.05,
        steps=2,
        option_type=OptionType.PUT,
        exercise_style=ExerciseStyle.AMERICAN,
    )
    return build_binomial_tree(contract)


def test_lattice_frame_has_one_row_per_node(american_put_result):
    frame = lattice_frame(american_put_result)

    assert list(frame.columns) == list(LATTICE_COLUMNS)
    assert len(frame) == 6
    assert frame["up_moves"].tolist() == [0, 1, 0, 2, 1, 0]
    assert frame["down_moves"].tolist() == [0, 0, 1, 0, 1, 2]
    assert frame["early_exercise"].tolist() == [False, False, True, False, False, False]

    root = frame.iloc[0]
    assert root["option_value"] == pytest.approx(american_put_result.price)
    assert frame["hold_value"].iloc[3:].isna().all()


def test_binomial_report_lists_arithmetic(american_put_result):
    text = format_binomial_report(american_put_result)

    assert "Binomial american put (2 steps)" in text
    assert f"{american_put_result.price:.4f}" in text
    assert f"{math.exp(0.05):.6f}" in text
    assert f"{american_put_result.probability:.6f}" in text
    assert "P(2,2)" in text
    assert "Early exercise at (step, node): (1, 1)" in text


def test_binomial_report_can_append_table(american_put_result):
    text = format_binomial_report(american_put_result, include_table=True)
    assert "stock_price" in text
    assert "early_exercise" in text


def test_black_scholes_report_uses_quoted_units():
    values = quoted_greeks(bs_greeks(S=100.0, K=100.0, T=1.0, sigma=0.2, r=0.05))
    text = format_black_scholes_report(values, option_type=OptionType.CALL)

    assert "Black-Scholes call" in text
    assert f"{values['price']:.4f}" in text
    assert "Theta (per day)" in text
    assert "d1" not in text
