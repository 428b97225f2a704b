"""Black-Scholes pricing and Greeks for European options.

All functions take annual inputs in decimals and return raw sensitivities:
vega per +1.0 volatility, rho per +1.0 rate, theta per +1.0 year. Use
`quoted_greeks` for per-day / per-point display units.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import norm

from derivatives_pricing.options.types import OptionType, OptionTypeInput

DAYS_PER_YEAR = 365.0


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    if isinstance(option_type, str):
        label = option_type.strip()
        if label.lower() in ("call", "put"):
            return OptionType(label.lower())
        if label.upper() == "C":
            return OptionType.CALL
        if label.upper() == "P":
            return OptionType.PUT
    raise ValueError("option_type must be one of {'call', 'put', 'C', 'P'}")


def _is_degenerate(T: float, sigma: float) -> bool:
    return T <= 0 or sigma <= 0


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes with continuous dividend yield."""
    if _is_degenerate(T, sigma):
        raise ValueError("T and sigma must be positive")
    vol_sqrt_t = sigma * np.sqrt(T)
    d1 = (np.log(S / K) + (r - q + 0.5 * sigma**2) * T) / vol_sqrt_t
    return float(d1), float(d1 - vol_sqrt_t)


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes price with continuous dividend yield."""
    sign = 1.0 if normalize_option_type(option_type) == OptionType.CALL else -1.0
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    forward_leg = S * np.exp(-q * T) * norm.cdf(sign * d1)
    strike_leg = K * np.exp(-r * T) * norm.cdf(sign * d2)
    return float(sign * (forward_leg - strike_leg))


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes spot delta."""
    opt_type = normalize_option_type(option_type)
    if _is_degenerate(T, sigma):
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    carry = np.exp(-q * T)
    if opt_type == OptionType.CALL:
        return float(carry * norm.cdf(d1))
    return float(carry * (norm.cdf(d1) - 1.0))


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes gamma (same for calls and puts)."""
    if _is_degenerate(T, sigma):
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(np.exp(-q * T) * norm.pdf(d1) / (S * sigma * np.sqrt(T)))


def bs_vega(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
) -> float:
    """Black-Scholes vega per +1.0 volatility."""
    if _is_degenerate(T, sigma):
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r, q)
    return float(S * np.exp(-q * T) * norm.pdf(d1) * np.sqrt(T))


def bs_theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes theta per +1.0 calendar year."""
    sign = 1.0 if normalize_option_type(option_type) == OptionType.CALL else -1.0
    if _is_degenerate(T, sigma):
        return 0.0
    d1, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    spot_carry = S * np.exp(-q * T)
    strike_pv = K * np.exp(-r * T)

    decay = -spot_carry * norm.pdf(d1) * sigma / (2 * np.sqrt(T))
    dividend = sign * q * spot_carry * norm.cdf(sign * d1)
    financing = -sign * r * strike_pv * norm.cdf(sign * d2)
    return float(decay + dividend + financing)


def bs_rho(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> float:
    """Black-Scholes rho per +1.0 rate."""
    sign = 1.0 if normalize_option_type(option_type) == OptionType.CALL else -1.0
    if _is_degenerate(T, sigma):
        return 0.0
    _, d2 = bs_d1_d2(S, K, T, sigma, r, q)
    return float(sign * K * T * np.exp(-r * T) * norm.cdf(sign * d2))


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.CALL,
) -> dict[str, float]:
    """Return Black-Scholes price and Greeks for one option."""
    return {
        "price": bs_price(S, K, T, sigma, r, q, option_type),
        "delta": bs_delta(S, K, T, sigma, r, q, option_type),
        "gamma": bs_gamma(S, K, T, sigma, r, q),
        "vega": bs_vega(S, K, T, sigma, r, q),
        "theta": bs_theta(S, K, T, sigma, r, q, option_type),
        "rho": bs_rho(S, K, T, sigma, r, q, option_type),
    }


def quoted_greeks(greeks: dict[str, float]) -> dict[str, float]:
    """Rescale raw Greeks to quoting units.

    theta per calendar day, vega per volatility point (0.01), rho per 1%
    rate move. Other keys (price, delta, gamma, d1, d2) pass through.
    """
    out = dict(greeks)
    if "theta" in out:
        out["theta"] = out["theta"] / DAYS_PER_YEAR
    if "vega" in out:
        out["vega"] = out["vega"] / 100.0
    if "rho" in out:
        out["rho"] = out["rho"] / 100.0
    return out
