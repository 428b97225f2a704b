"""Shared option-pricing dataclasses and aliases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


class ExerciseStyle(StrEnum):
    """When the holder may exercise: only at maturity or at any node."""

    EUROPEAN = "european"
    AMERICAN = "american"


# Tolerant input types accepted at system boundaries (forms/config/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]
ExerciseStyleInput: TypeAlias = (
    ExerciseStyle | Literal["european", "american", "E", "A"]
)


@dataclass(frozen=True)
class BinomialContract:
    """Contract and lattice parameters for one binomial-tree valuation.

    `rate` is the continuously-compounded rate per period, in decimals.
    No validation happens here; see `options.validation` for the checks
    (`up > 1`, `0 < down < 1`, `down < up`) callers run before pricing.
    """

    spot: float
    strike: float
    up: float
    down: float
    rate: float
    steps: int
    option_type: OptionType = OptionType.CALL
    exercise_style: ExerciseStyle = ExerciseStyle.EUROPEAN

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL

    @property
    def is_american(self) -> bool:
        return self.exercise_style == ExerciseStyle.AMERICAN


@dataclass(frozen=True)
class OptionSpec:
    """Contract terms required for closed-form pricing of one vanilla option."""

    strike: float
    time_to_expiry: float
    option_type: OptionTypeInput


@dataclass(frozen=True)
class MarketState:
    """Market inputs used by closed-form pricing engines."""

    spot: float
    volatility: float
    rate: float = 0.0
    dividend_yield: float = 0.0


@dataclass(frozen=True, slots=True)
class Greeks:
    """First/second-order sensitivities."""

    delta: float
    gamma: float
    vega: float
    theta: float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Option value and first/second-order sensitivities."""

    price: float
    greeks: Greeks
    rho: float

    @classmethod
    def from_flat(cls, data: Mapping[str, float]) -> PricingResult:
        """Build ``PricingResult`` from a flat mapping (price/delta/.../rho)."""
        return cls(
            price=float(data["price"]),
            greeks=Greeks(
                delta=float(data["delta"]),
                gamma=float(data["gamma"]),
                vega=float(data["vega"]),
                theta=float(data["theta"]),
            ),
            rho=float(data["rho"]),
        )

    @property
    def delta(self) -> float:
        return self.greeks.delta

    @property
    def gamma(self) -> float:
        return self.greeks.gamma

    @property
    def vega(self) -> float:
        return self.greeks.vega

    @property
    def theta(self) -> float:
        return self.greeks.theta

    def to_flat(self) -> dict[str, float]:
        """Inverse of `from_flat`."""
        return {
            "price": self.price,
            "delta": self.delta,
            "gamma": self.gamma,
            "vega": self.vega,
            "theta": self.theta,
            "rho": self.rho,
        }
