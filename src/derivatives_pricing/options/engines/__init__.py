"""Pricing engines wrapping the functional models."""

from .base import GreeksModel, LatticeModel, PriceModel
from .binomial_tree_pricer import BinomialTreePricer
from .bs_pricer import BlackScholesPricer

__all__ = [
    "PriceModel",
    "GreeksModel",
    "LatticeModel",
    "BinomialTreePricer",
    "BlackScholesPricer",
]
