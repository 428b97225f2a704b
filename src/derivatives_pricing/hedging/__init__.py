"""Futures hedging calculators."""

from .futures import (
    DEFAULT_CONTRACT_MULTIPLIER,
    FuturesHedgeResult,
    HedgeMethod,
    format_hedge_report,
    futures_hedge,
    minimum_variance_hedge_ratio,
    parse_futures_hedge_inputs,
    round_half_up,
)

__all__ = [
    "DEFAULT_CONTRACT_MULTIPLIER",
    "FuturesHedgeResult",
    "HedgeMethod",
    "format_hedge_report",
    "futures_hedge",
    "minimum_variance_hedge_ratio",
    "parse_futures_hedge_inputs",
    "round_half_up",
]
