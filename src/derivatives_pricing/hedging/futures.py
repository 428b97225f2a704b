"""Futures hedge ratios and contract counts.

Two hedges are supported:

- naive: hedge ratio 1, notional matched one-for-one;
- minimum variance: hedge ratio `rho * sigma_spot / sigma_futures`.

Contract count is `ratio * spot_value / (futures_price * multiplier)`; the
tradeable count rounds to the nearest whole contract, halves up.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from derivatives_pricing.options.validation import InvalidInputError, coerce_float

DEFAULT_CONTRACT_MULTIPLIER = 250_000.0


class HedgeMethod(StrEnum):
    NAIVE = "naive"
    MINIMUM_VARIANCE = "minimum_variance"


@dataclass(frozen=True, slots=True)
class FuturesHedgeResult:
    """Sizing outcome for one futures hedge."""

    method: HedgeMethod
    hedge_ratio: float
    contract_value: float
    contracts: float
    rounded_contracts: int
    hedged_value: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf."""
    return int(math.floor(value + 0.5))


def _validate_statistics(
    spot_std: float, futures_std: float, correlation: float
) -> None:
    for name, value in (("spot_std", spot_std), ("futures_std", futures_std)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive number")
    if not math.isfinite(correlation) or not -1.0 <= correlation <= 1.0:
        raise InvalidInputError("correlation must be in [-1, 1]")


def minimum_variance_hedge_ratio(
    spot_std: float, futures_std: float, correlation: float
) -> float:
    """Hedge ratio minimizing the variance of the hedged position."""
    _validate_statistics(spot_std, futures_std, correlation)
    return correlation * (spot_std / futures_std)


def _validate_inputs(
    *,
    method: HedgeMethod | str,
    spot_value: float | None,
    futures_price: float | None,
    multiplier: float | None,
    spot_std: float | None,
    futures_std: float | None,
    correlation: float | None,
) -> HedgeMethod:
    try:
        method = HedgeMethod(method)
    except ValueError as e:
        raise InvalidInputError(
            f"method must be one of {[m.value for m in HedgeMethod]}"
        ) from e

    for name, value in (
        ("spot_value", spot_value),
        ("futures_price", futures_price),
        ("multiplier", multiplier),
    ):
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive number")

    if method == HedgeMethod.MINIMUM_VARIANCE:
        if spot_std is None or futures_std is None or correlation is None:
            raise InvalidInputError(
                "minimum_variance hedge requires spot_std, futures_std and correlation"
            )
        _validate_statistics(spot_std, futures_std, correlation)
    return method


def parse_futures_hedge_inputs(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce raw config values into validated `futures_hedge` keyword args.

    Applies every check `futures_hedge` applies, so a caller can reject bad
    inputs before deciding whether to compute anything. A missing
    `multiplier` falls back to `DEFAULT_CONTRACT_MULTIPLIER`.
    """
    multiplier = raw.get("multiplier")
    kwargs: dict[str, Any] = {
        "method": raw.get("method") or HedgeMethod.NAIVE.value,
        "spot_value": coerce_float(raw.get("spot_value"), "spot_value"),
        "futures_price": coerce_float(raw.get("futures_price"), "futures_price"),
        "multiplier": (
            DEFAULT_CONTRACT_MULTIPLIER
            if multiplier is None
            else coerce_float(multiplier, "multiplier")
        ),
    }
    for name in ("spot_std", "futures_std", "correlation"):
        value = raw.get(name)
        kwargs[name] = None if value is None else coerce_float(value, name)

    kwargs["method"] = _validate_inputs(**kwargs)
    return kwargs


def futures_hedge(
    *,
    spot_value: float,
    futures_price: float,
    multiplier: float = DEFAULT_CONTRACT_MULTIPLIER,
    method: HedgeMethod | str = HedgeMethod.NAIVE,
    spot_std: float | None = None,
    futures_std: float | None = None,
    correlation: float | None = None,
) -> FuturesHedgeResult:
    """Size a futures hedge for a spot position.

    `spot_std`, `futures_std` and `correlation` are required only for the
    minimum-variance method.
    """
    method = _validate_inputs(
        method=method,
        spot_value=spot_value,
        futures_price=futures_price,
        multiplier=multiplier,
        spot_std=spot_std,
        futures_std=futures_std,
        correlation=correlation,
    )

    contract_value = futures_price * multiplier

    if method == HedgeMethod.NAIVE:
        ratio = 1.0
        contracts = spot_value / contract_value
    else:
        ratio = correlation * (spot_std / futures_std)
        contracts = ratio * (spot_value / contract_value)

    rounded = round_half_up(contracts)
    return FuturesHedgeResult(
        method=method,
        hedge_ratio=ratio,
        contract_value=contract_value,
        contracts=contracts,
        rounded_contracts=rounded,
        hedged_value=rounded * contract_value,
    )


def format_hedge_report(result: FuturesHedgeResult) -> str:
    """Format a readable console summary of a hedge sizing."""
    lines = [
        "=" * 40,
        f"Futures hedge ({result.method})",
        "=" * 40,
        f"Hedge ratio            : {result.hedge_ratio:.4f}",
        f"Contract value         : {result.contract_value:,.2f}",
        f"Contracts (exact)      : {result.contracts:.4f}",
        f"Contracts (rounded)    : {result.rounded_contracts}",
        f"Hedged value           : {result.hedged_value:,.2f}",
        "",
    ]
    return "\n".join(lines)
