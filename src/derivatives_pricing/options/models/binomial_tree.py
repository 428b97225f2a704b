"""Binomial-lattice pricing for vanilla options with explicit up/down factors.

Pipeline: stock lattice -> risk-neutral probability -> terminal payoff ->
backward induction -> frozen `BinomialTreeResult`. Every stage is a pure
function of its inputs and performs no validation; callers check the model
parameters first (see `derivatives_pricing.options.validation`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from derivatives_pricing.options.lattice import TriangularLattice, build_stock_lattice
from derivatives_pricing.options.types import BinomialContract, OptionType


def intrinsic_value(
    spot: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    """Immediate-exercise payoff for each spot."""
    if option_type == OptionType.CALL:
        return np.maximum(np.asarray(spot, dtype=float) - strike, 0.0)
    return np.maximum(strike - np.asarray(spot, dtype=float), 0.0)


def risk_neutral_probability(up: float, down: float, rate: float) -> float:
    """Up-move probability `(e^r - d) / (u - d)` under the pricing measure.

    The value is not clamped: a result outside `[0, 1]` means the factors and
    rate admit arbitrage, which callers may report but the model accepts.
    """
    return (math.exp(rate) - down) / (up - down)


def terminal_payoff(
    terminal_prices: np.ndarray, strike: float, option_type: OptionType
) -> np.ndarray:
    """Option values at maturity, the boundary row of the induction."""
    return intrinsic_value(terminal_prices, strike, option_type)


@dataclass(frozen=True)
class InductionResult:
    """Lattices produced by one backward-induction pass."""

    option_values: TriangularLattice
    early_exercise: TriangularLattice
    hold_values: TriangularLattice
    exercise_values: TriangularLattice


def backward_induction(
    stock: TriangularLattice,
    terminal: np.ndarray,
    p: float,
    rate: float,
    strike: float,
    option_type: OptionType,
    american: bool,
) -> InductionResult:
    """Roll option values back from maturity to the root.

    At each node the hold value is the discounted risk-neutral expectation of
    the up-successor `(step + 1, node)` and the down-successor
    `(step + 1, node + 1)`. For American exercise the node takes the larger of
    hold and intrinsic value and is flagged only when intrinsic value is
    strictly greater; ties hold.

    Hold values at maturity are NaN since there is no continuation there.
    """
    n = stock.steps
    disc = math.exp(-rate)

    values: list[np.ndarray] = [np.empty(0)] * (n + 1)
    exercised: list[np.ndarray] = [np.empty(0, dtype=bool)] * (n + 1)
    holds: list[np.ndarray] = [np.empty(0)] * (n + 1)
    exercise: list[np.ndarray] = [np.empty(0)] * (n + 1)

    values[n] = np.asarray(terminal, dtype=float)
    exercised[n] = np.zeros(n + 1, dtype=bool)
    holds[n] = np.full(n + 1, np.nan)
    exercise[n] = intrinsic_value(stock.row(n), strike, option_type)

    for step in range(n - 1, -1, -1):
        nxt = values[step + 1]
        hold = disc * (p * nxt[:-1] + (1.0 - p) * nxt[1:])
        intrinsic = intrinsic_value(stock.row(step), strike, option_type)

        holds[step] = hold
        exercise[step] = intrinsic
        if american:
            flags = intrinsic > hold
            values[step] = np.where(flags, intrinsic, hold)
            exercised[step] = flags
        else:
            values[step] = hold
            exercised[step] = np.zeros(step + 1, dtype=bool)

    return InductionResult(
        option_values=TriangularLattice.from_rows(values),
        early_exercise=TriangularLattice.from_rows(exercised),
        hold_values=TriangularLattice.from_rows(holds),
        exercise_values=TriangularLattice.from_rows(exercise),
    )


@dataclass(frozen=True)
class BinomialTreeResult:
    """Frozen snapshot of one binomial valuation.

    Consumers read `price` as the headline value, walk the lattices by
    `(step, node)` to lay out the tree, and read `early_exercise` to mark
    nodes where exercising beats holding. Hold and exercise values are kept
    so that displays never re-derive the arithmetic.
    """

    contract: BinomialContract
    probability: float
    stock_prices: TriangularLattice
    option_values: TriangularLattice
    early_exercise: TriangularLattice
    hold_values: TriangularLattice
    exercise_values: TriangularLattice

    @property
    def steps(self) -> int:
        return self.contract.steps

    @property
    def price(self) -> float:
        return self.option_values[0, 0]

    @property
    def down_probability(self) -> float:
        return 1.0 - self.probability

    @property
    def growth_factor(self) -> float:
        """Per-period growth `e^r` used in the probability formula."""
        return math.exp(self.contract.rate)

    @property
    def discount_factor(self) -> float:
        """Per-period discount `e^-r` applied to each expectation."""
        return math.exp(-self.contract.rate)

    @property
    def early_exercise_nodes(self) -> list[tuple[int, int]]:
        return [idx for idx in self.early_exercise.indices() if self.early_exercise[idx]]


def build_binomial_tree(contract: BinomialContract) -> BinomialTreeResult:
    """Run the full lattice pipeline for one contract."""
    option_type = OptionType(contract.option_type)
    stock = build_stock_lattice(
        contract.spot, contract.up, contract.down, contract.steps
    )
    p = risk_neutral_probability(contract.up, contract.down, contract.rate)
    terminal = terminal_payoff(stock.row(contract.steps), contract.strike, option_type)
    induction = backward_induction(
        stock,
        terminal,
        p,
        contract.rate,
        contract.strike,
        option_type,
        american=contract.is_american,
    )
    return BinomialTreeResult(
        contract=contract,
        probability=p,
        stock_prices=stock,
        option_values=induction.option_values,
        early_exercise=induction.early_exercise,
        hold_values=induction.hold_values,
        exercise_values=induction.exercise_values,
    )


def binomial_tree_price(contract: BinomialContract) -> float:
    """Present value at the root of the lattice."""
    return build_binomial_tree(contract).price
