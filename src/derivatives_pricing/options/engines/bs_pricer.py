"""Black-Scholes pricing engine."""

from __future__ import annotations

from derivatives_pricing.options.models.black_scholes import (
    bs_d1_d2,
    bs_greeks,
    bs_price,
)
from derivatives_pricing.options.types import MarketState, OptionSpec, PricingResult


def _model_args(spec: OptionSpec, state: MarketState) -> dict[str, float]:
    return {
        "S": state.spot,
        "K": spec.strike,
        "T": spec.time_to_expiry,
        "sigma": state.volatility,
        "r": state.rate,
        "q": state.dividend_yield,
    }


class BlackScholesPricer:
    """Closed-form European pricer; Greeks are raw per-unit sensitivities."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_price(**_model_args(spec, state), option_type=spec.option_type)

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult:
        out = bs_greeks(**_model_args(spec, state), option_type=spec.option_type)
        return PricingResult.from_flat(out)

    def d1_d2(self, spec: OptionSpec, state: MarketState) -> tuple[float, float]:
        """Standardized moneyness terms behind the price, for display."""
        return bs_d1_d2(**_model_args(spec, state))
