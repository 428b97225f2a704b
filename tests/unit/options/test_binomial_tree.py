import dataclasses
import math

import numpy as np
import pytest

from derivatives_pricing.options import (
    BinomialContract,
    ExerciseStyle,
    OptionType,
    backward_induction,
    binomial_tree_price,
    build_binomial_tree,
    build_stock_lattice,
    intrinsic_value,
    risk_neutral_probability,
    terminal_payoff,
)


def _contract(**kwargs) -> BinomialContract:
    base = dict(
        spot=100.0,
        strike=100.0,
        up=1.2,
        down=0.8,
        rate=0.05,
        steps=2,
        option_type=OptionType.CALL,
        exercise_style=ExerciseStyle.EUROPEAN,
    )
    base.update(kwargs)
    return BinomialContract(**base)


def test_risk_neutral_probability_formula():
    p = risk_neutral_probability(1.2, 0.8, 0.05)
    assert p == pytest.approx((math.exp(0.05) - 0.8) / 0.4)
    assert p == pytest.approx(0.6282, abs=1e-4)


def test_risk_neutral_probability_is_not_clamped():
    # e^r above u: arbitrage, p > 1 is returned as-is.
    assert risk_neutral_probability(1.01, 0.9, 0.5) > 1.0
    assert risk_neutral_probability(1.2, 0.99, -0.5) < 0.0


def test_terminal_payoff_call_and_put():
    prices = np.array([144.0, 96.0, 64.0])
    assert terminal_payoff(prices, 100.0, OptionType.CALL) == pytest.approx([44, 0, 0])
    assert terminal_payoff(prices, 100.0, OptionType.PUT) == pytest.approx([0, 4, 36])


def test_intrinsic_value_accepts_scalars():
    assert float(intrinsic_value(120.0, 100.0, OptionType.CALL)) == 20.0
    assert float(intrinsic_value(120.0, 100.0, OptionType.PUT)) == 0.0


def test_european_call_scenario():
    result = build_binomial_tree(_contract())

    p = (math.exp(0.05) - 0.8) / 0.4
    disc = math.exp(-0.05)
    hold_up = disc * (p * 44.0 + (1 - p) * 0.0)
    root = disc * (p * hold_up + (1 - p) * 0.0)

    assert result.probability == pytest.approx(p)
    assert result.stock_prices.row(2) == pytest.approx([144.0, 96.0, 64.0])
    assert result.option_values.row(2) == pytest.approx([44.0, 0.0, 0.0])
    assert result.option_values[1, 0] == pytest.approx(hold_up)
    assert result.option_values[1, 0] == pytest.approx(26.29, abs=1e-2)
    assert result.option_values[1, 1] == 0.0
    assert result.price == pytest.approx(root)
    assert result.price == pytest.approx(15.7104, abs=1e-3)
    assert result.early_exercise_nodes == []


def test_american_put_scenario_flags_only_profitable_exercise():
    result = build_binomial_tree(
        _contract(option_type=OptionType.PUT, exercise_style=ExerciseStyle.AMERICAN)
    )

    p = result.probability
    disc = math.exp(-0.05)
    hold_10 = disc * (p * 0.0 + (1 - p) * 4.0)
    hold_11 = disc * (p * 4.0 + (1 - p) * 36.0)
    value_11 = max(hold_11, 20.0)
    hold_00 = disc * (p * hold_10 + (1 - p) * value_11)

    assert hold_11 < 20.0
    assert result.early_exercise_nodes == [(1, 1)]
    assert result.option_values[1, 1] == pytest.approx(20.0)
    assert result.hold_values[1, 1] == pytest.approx(hold_11)
    assert result.option_values[1, 0] == pytest.approx(hold_10)
    assert result.price == pytest.approx(max(hold_00, 0.0))
    assert result.price == pytest.approx(7.919, abs=1e-3)


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
@pytest.mark.parametrize("steps", [1, 3, 5])
def test_terminal_boundary(option_type: OptionType, steps: int):
    result = build_binomial_tree(
        _contract(option_type=option_type, steps=steps, strike=95.0)
    )
    for j, s in enumerate(result.stock_prices.row(steps)):
        expected = max(s - 95.0, 0.0) if option_type == OptionType.CALL else max(95.0 - s, 0.0)
        assert result.option_values[steps, j] == expected


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_european_values_follow_discounted_expectation(option_type: OptionType):
    result = build_binomial_tree(
        _contract(option_type=option_type, steps=5, up=1.1, down=0.92, rate=0.01)
    )
    p = result.probability
    disc = math.exp(-0.01)
    v = result.option_values

    for step in range(5):
        for node in range(step + 1):
            expected = disc * (p * v[step + 1, node] + (1 - p) * v[step + 1, node + 1])
            assert v[step, node] == pytest.approx(expected, rel=1e-14, abs=1e-14)
            assert result.early_exercise[step, node] is False


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_american_value_dominates_hold_and_exercise(option_type: OptionType):
    result = build_binomial_tree(
        _contract(
            option_type=option_type,
            exercise_style=ExerciseStyle.AMERICAN,
            steps=5,
            strike=105.0,
            up=1.15,
            down=0.85,
            rate=0.03,
        )
    )
    for step in range(5):
        for node in range(step + 1):
            value = result.option_values[step, node]
            hold = result.hold_values[step, node]
            exercise = result.exercise_values[step, node]
            flagged = result.early_exercise[step, node]

            assert value >= hold
            assert value >= exercise
            assert value == hold or value == exercise
            assert flagged == (value == exercise and exercise > hold)


def test_exercise_tie_prefers_holding():
    # Spot 80, strike 100, u=1.25, d=0.75, r=0: terminal S={100, 60}, payoffs {0, 40};
    # p = (1 - 0.75) / 0.5 = 0.5 -> hold 20 == exercise 20.
    contract = _contract(
        spot=80.0,
        strike=100.0,
        up=1.25,
        down=0.75,
        rate=0.0,
        steps=1,
        option_type=OptionType.PUT,
        exercise_style=ExerciseStyle.AMERICAN,
    )
    result = build_binomial_tree(contract)
    assert result.hold_values[0, 0] == 20.0
    assert result.exercise_values[0, 0] == 20.0
    assert result.early_exercise[0, 0] is False
    assert result.price == 20.0


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_american_not_below_european(option_type: OptionType):
    european = _contract(option_type=option_type, steps=5, strike=110.0)
    american = dataclasses.replace(european, exercise_style=ExerciseStyle.AMERICAN)
    assert binomial_tree_price(american) >= binomial_tree_price(european)


def test_european_never_flags_exercise():
    result = build_binomial_tree(
        _contract(option_type=OptionType.PUT, steps=4, strike=130.0)
    )
    assert not result.early_exercise.values.any()


def test_hold_values_are_nan_at_maturity():
    result = build_binomial_tree(_contract(steps=3))
    assert np.isnan(result.hold_values.row(3)).all()
    assert not np.isnan(result.hold_values.row(2)).any()


def test_pipeline_is_bit_identical_across_runs():
    contract = _contract(
        option_type=OptionType.PUT, exercise_style=ExerciseStyle.AMERICAN, steps=6
    )
    first = build_binomial_tree(contract)
    second = build_binomial_tree(contract)

    assert first.stock_prices == second.stock_prices
    assert first.option_values == second.option_values
    assert first.early_exercise == second.early_exercise
    assert first.hold_values == second.hold_values
    assert first.exercise_values == second.exercise_values
    assert first.probability == second.probability


def test_result_is_frozen():
    result = build_binomial_tree(_contract())
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.probability = 0.5
    with pytest.raises(ValueError):
        result.option_values.values[0] = 0.0


def test_result_exposes_display_intermediates():
    result = build_binomial_tree(_contract())
    assert result.contract == _contract()
    assert result.steps == 2
    assert result.down_probability == pytest.approx(1 - result.probability)
    assert result.growth_factor == pytest.approx(math.exp(0.05))
    assert result.discount_factor == pytest.approx(math.exp(-0.05))


def test_backward_induction_accepts_out_of_range_probability():
    stock = build_stock_lattice(100.0, 1.01, 0.99, 2)
    terminal = terminal_payoff(stock.row(2), 100.0, OptionType.CALL)
    out = backward_induction(stock, terminal, 1.5, 0.05, 100.0, OptionType.CALL, False)
    assert np.isfinite(out.option_values.values).all()
