"""Option pricing models, engines, validation and shared types."""

from .engines import (
    BinomialTreePricer,
    BlackScholesPricer,
    GreeksModel,
    LatticeModel,
    PriceModel,
)
from .lattice import TriangularLattice, build_stock_lattice
from .models import (
    BinomialTreeResult,
    backward_induction,
    binomial_tree_price,
    build_binomial_tree,
    intrinsic_value,
    risk_neutral_probability,
    terminal_payoff,
)
from .models.black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    quoted_greeks,
)
from .types import (
    BinomialContract,
    ExerciseStyle,
    ExerciseStyleInput,
    Greeks,
    MarketState,
    OptionSpec,
    OptionType,
    OptionTypeInput,
    PricingResult,
)
from .validation import (
    InvalidInputError,
    ModelInconsistencyWarning,
    check_risk_neutral_probability,
    parse_binomial_contract,
    parse_black_scholes_inputs,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "ExerciseStyle",
    "ExerciseStyleInput",
    "BinomialContract",
    "OptionSpec",
    "MarketState",
    "Greeks",
    "PricingResult",
    "PriceModel",
    "GreeksModel",
    "LatticeModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
    "TriangularLattice",
    "build_stock_lattice",
    "BinomialTreeResult",
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
    "InvalidInputError",
    "ModelInconsistencyWarning",
    "check_risk_neutral_probability",
    "parse_binomial_contract",
    "parse_black_scholes_inputs",
]
