"""Interfaces for option-pricing engines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from derivatives_pricing.options.types import (
    BinomialContract,
    MarketState,
    OptionSpec,
    PricingResult,
)

if TYPE_CHECKING:
    from derivatives_pricing.options.models.binomial_tree import BinomialTreeResult


@runtime_checkable
class PriceModel(Protocol):
    """Closed-form pricing capability keyed on contract terms and market state."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        """Return option value for one contract."""


@runtime_checkable
class GreeksModel(Protocol):
    """Optional extension for engines that provide stable sensitivities."""

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult:
        """Return option value and sensitivities for one contract."""


@runtime_checkable
class LatticeModel(Protocol):
    """Engines that expose the full lattice behind a price."""

    def evaluate(self, contract: BinomialContract) -> BinomialTreeResult:
        """Return the frozen lattice snapshot for one contract."""
