"""Binomial-tree pricing engine for vanilla options."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from derivatives_pricing.options.models.binomial_tree import (
    BinomialTreeResult,
    build_binomial_tree,
)
from derivatives_pricing.options.types import BinomialContract, ExerciseStyle
from derivatives_pricing.options.validation import check_risk_neutral_probability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinomialTreePricer:
    """Explicit-factor lattice pricer supporting American and European exercise.

    When `exercise_style` is set it overrides the style carried by each
    contract, which lets one contract be priced both ways for comparison.
    With `warn_on_inconsistency` the engine emits a
    `ModelInconsistencyWarning` for probabilities outside [0, 1] but still
    returns the computed lattice.
    """

    exercise_style: ExerciseStyle | None = None
    warn_on_inconsistency: bool = True

    def _resolve(self, contract: BinomialContract) -> BinomialContract:
        if self.exercise_style is None or contract.exercise_style == self.exercise_style:
            return contract
        return dataclasses.replace(contract, exercise_style=self.exercise_style)

    def evaluate(self, contract: BinomialContract) -> BinomialTreeResult:
        contract = self._resolve(contract)
        result = build_binomial_tree(contract)
        if self.warn_on_inconsistency:
            check_risk_neutral_probability(result.probability)
        logger.debug(
            "Priced %s %s over %d steps: p=%.6f value=%.6f",
            contract.exercise_style,
            contract.option_type,
            contract.steps,
            result.probability,
            result.price,
        )
        return result

    def price(self, contract: BinomialContract) -> float:
        return self.evaluate(contract).price
