"""Lattice and analytical option-pricing models."""

from .binomial_tree import (
    BinomialTreeResult,
    InductionResult,
    backward_induction,
    binomial_tree_price,
    build_binomial_tree,
    intrinsic_value,
    risk_neutral_probability,
    terminal_payoff,
)
from .black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    normalize_option_type,
    quoted_greeks,
)

__all__ = [
    "BinomialTreeResult",
    "InductionResult",
    "backward_induction",
    "binomial_tree_price",
    "build_binomial_tree",
    "intrinsic_value",
    "risk_neutral_probability",
    "terminal_payoff",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "quoted_greeks",
    "normalize_option_type",
]
