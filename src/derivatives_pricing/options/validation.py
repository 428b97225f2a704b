"""Input validation run by callers before invoking the pricing models.

The models themselves are total over valid inputs and never validate. This
module is the boundary: it turns raw form/config values into typed contracts
and rejects anything the models would silently mis-price.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Mapping
from typing import Any

from derivatives_pricing.options.models.black_scholes import normalize_option_type
from derivatives_pricing.options.types import (
    BinomialContract,
    ExerciseStyle,
    ExerciseStyleInput,
    MarketState,
    OptionSpec,
)

logger = logging.getLogger(__name__)

BINOMIAL_FIELDS: tuple[str, ...] = ("spot", "strike", "up", "down", "rate", "steps")
BLACK_SCHOLES_FIELDS: tuple[str, ...] = (
    "spot",
    "strike",
    "time_to_expiry",
    "volatility",
    "rate",
)


class InvalidInputError(ValueError):
    """Raised when a required field is missing, non-numeric or out of range."""


class ModelInconsistencyWarning(UserWarning):
    """Risk-neutral probability outside [0, 1]: the parameters admit arbitrage."""


def coerce_float(value: Any, name: str) -> float:
    """Parse one numeric field; strings are stripped first."""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{name} is required and must be numeric")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidInputError(f"{name} is required and must be numeric")
    try:
        out = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be numeric, got {value!r}") from e
    if not math.isfinite(out):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return out


def coerce_int(value: Any, name: str) -> int:
    out = coerce_float(value, name)
    if not out.is_integer():
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    return int(out)


def normalize_exercise_style(style: ExerciseStyleInput) -> ExerciseStyle:
    """Normalize exercise style labels to `ExerciseStyle`."""
    if isinstance(style, str):
        label = style.strip().lower()
        if label in ("european", "e"):
            return ExerciseStyle.EUROPEAN
        if label in ("american", "a"):
            return ExerciseStyle.AMERICAN
    raise ValueError(
        "exercise_style must be one of {'european', 'american', 'E', 'A'}"
    )


def _require(raw: Mapping[str, Any], fields: tuple[str, ...]) -> None:
    missing = [name for name in fields if raw.get(name) is None]
    if missing:
        raise InvalidInputError(f"Missing required fields: {missing}")


def validate_factors(up: float, down: float) -> None:
    """Reject factor pairs outside `up > 1`, `0 < down < 1`, `down < up`."""
    if up <= 1:
        raise InvalidInputError(f"up factor must be > 1, got {up}")
    if not 0 < down < 1:
        raise InvalidInputError(f"down factor must be in (0, 1), got {down}")
    if down >= up:
        raise InvalidInputError("down factor must be smaller than up factor")


def parse_binomial_contract(raw: Mapping[str, Any]) -> BinomialContract:
    """Build a validated `BinomialContract` from raw field values.

    Expected keys: spot, strike, up, down, rate (decimal per period), steps,
    and optionally option_type (default call) and exercise_style (default
    european).
    """
    _require(raw, BINOMIAL_FIELDS)

    spot = coerce_float(raw["spot"], "spot")
    strike = coerce_float(raw["strike"], "strike")
    up = coerce_float(raw["up"], "up")
    down = coerce_float(raw["down"], "down")
    rate = coerce_float(raw["rate"], "rate")
    steps = coerce_int(raw["steps"], "steps")

    if spot <= 0:
        raise InvalidInputError(f"spot must be > 0, got {spot}")
    if strike <= 0:
        raise InvalidInputError(f"strike must be > 0, got {strike}")
    if steps < 1:
        raise InvalidInputError(f"steps must be >= 1, got {steps}")
    validate_factors(up, down)

    try:
        option_type = normalize_option_type(raw.get("option_type") or "call")
        exercise_style = normalize_exercise_style(
            raw.get("exercise_style") or "european"
        )
    except ValueError as e:
        raise InvalidInputError(str(e)) from e

    return BinomialContract(
        spot=spot,
        strike=strike,
        up=up,
        down=down,
        rate=rate,
        steps=steps,
        option_type=option_type,
        exercise_style=exercise_style,
    )


def parse_black_scholes_inputs(
    raw: Mapping[str, Any],
) -> tuple[OptionSpec, MarketState]:
    """Build validated closed-form inputs from raw field values.

    Expected keys: spot, strike, time_to_expiry (years), volatility, rate
    (decimals), optionally dividend_yield (default 0) and option_type.
    """
    _require(raw, BLACK_SCHOLES_FIELDS)

    spot = coerce_float(raw["spot"], "spot")
    strike = coerce_float(raw["strike"], "strike")
    expiry = coerce_float(raw["time_to_expiry"], "time_to_expiry")
    sigma = coerce_float(raw["volatility"], "volatility")
    rate = coerce_float(raw["rate"], "rate")
    q = coerce_float(raw.get("dividend_yield") or 0.0, "dividend_yield")

    for name, value in (
        ("spot", spot),
        ("strike", strike),
        ("time_to_expiry", expiry),
        ("volatility", sigma),
    ):
        if value <= 0:
            raise InvalidInputError(f"{name} must be > 0, got {value}")

    try:
        option_type = normalize_option_type(raw.get("option_type") or "call")
    except ValueError as e:
        raise InvalidInputError(str(e)) from e

    spec = OptionSpec(strike=strike, time_to_expiry=expiry, option_type=option_type)
    state = MarketState(spot=spot, volatility=sigma, rate=rate, dividend_yield=q)
    return spec, state


def check_risk_neutral_probability(p: float) -> bool:
    """Warn when `p` falls outside [0, 1]; return True when it is consistent."""
    if 0.0 <= p <= 1.0:
        return True
    logger.warning(
        "Risk-neutral probability p=%.6f outside [0, 1]; "
        "up/down factors and rate admit arbitrage.",
        p,
    )
    warnings.warn(
        f"risk-neutral probability {p:.6f} is outside [0, 1]",
        ModelInconsistencyWarning,
        stacklevel=2,
    )
    return False
