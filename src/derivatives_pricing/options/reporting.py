"""Tabular and console views of pricing results."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from derivatives_pricing.options.models.binomial_tree import BinomialTreeResult
from derivatives_pricing.options.types import OptionType

LATTICE_COLUMNS: tuple[str, ...] = (
    "step",
    "node",
    "up_moves",
    "down_moves",
    "stock_price",
    "option_value",
    "hold_value",
    "exercise_value",
    "early_exercise",
)


def _fmt_num(value: float | None, digits: int = 4) -> str:
    return f"{value:.{digits}f}" if value is not None else "n/a"


def _fmt_usd(value: float | None) -> str:
    return f"{value:,.2f}" if value is not None else "n/a"


def lattice_frame(result: BinomialTreeResult) -> pd.DataFrame:
    """One row per lattice node, ordered by step then down-move count."""
    records = []
    for step, node in result.stock_prices.indices():
        records.append(
            {
                "step": step,
                "node": node,
                "up_moves": step - node,
                "down_moves": node,
                "stock_price": result.stock_prices[step, node],
                "option_value": result.option_values[step, node],
                "hold_value": result.hold_values[step, node],
                "exercise_value": result.exercise_values[step, node],
                "early_exercise": result.early_exercise[step, node],
            }
        )
    return pd.DataFrame.from_records(records, columns=list(LATTICE_COLUMNS))


def format_binomial_report(
    result: BinomialTreeResult, *, include_table: bool = False
) -> str:
    """Format the headline value and the probability arithmetic."""
    c = result.contract
    label = "C" if c.option_type == OptionType.CALL else "P"
    growth = result.growth_factor
    lines = [
        "=" * 40,
        f"Binomial {c.exercise_style} {c.option_type} ({c.steps} steps)",
        "=" * 40,
        f"Option value {label}(0,0)   : {_fmt_num(result.price)}",
        "",
        "Risk-neutral probability p = (e^r - d) / (u - d)",
        f"  e^r                    : {_fmt_num(growth, 6)}",
        f"  e^r - d                : {_fmt_num(growth - c.down, 6)}",
        f"  u - d                  : {_fmt_num(c.up - c.down, 6)}",
        f"  p                      : {_fmt_num(result.probability, 6)}",
        f"  1 - p                  : {_fmt_num(result.down_probability, 6)}",
        f"  e^-r                   : {_fmt_num(result.discount_factor, 6)}",
        "",
        "Terminal payoffs",
    ]

    for node, (price, value) in enumerate(
        zip(result.stock_prices.row(c.steps), result.option_values.row(c.steps))
    ):
        lines.append(
            f"  {label}({c.steps},{node}) S={_fmt_usd(price):>10} -> {_fmt_num(value)}"
        )

    exercised = result.early_exercise_nodes
    lines.append("")
    if exercised:
        lines.append("Early exercise at (step, node): " + ", ".join(map(str, exercised)))
    else:
        lines.append("Early exercise at (step, node): none")

    if include_table:
        lines.extend(["", lattice_frame(result).to_string(index=False)])

    lines.append("")
    return "\n".join(lines)


def format_black_scholes_report(
    values: Mapping[str, float], *, option_type: OptionType
) -> str:
    """Format closed-form price and quoted Greeks."""
    lines = [
        "=" * 40,
        f"Black-Scholes {option_type}",
        "=" * 40,
        f"Price                  : {_fmt_num(values.get('price'))}",
    ]
    if "d1" in values:
        lines.append(f"d1                     : {_fmt_num(values.get('d1'))}")
        lines.append(f"d2                     : {_fmt_num(values.get('d2'))}")
    lines.extend(
        [
            f"Delta                  : {_fmt_num(values.get('delta'))}",
            f"Gamma                  : {_fmt_num(values.get('gamma'))}",
            f"Theta (per day)        : {_fmt_num(values.get('theta'))}",
            f"Vega (per vol point)   : {_fmt_num(values.get('vega'))}",
            f"Rho (per 1% rate)      : {_fmt_num(values.get('rho'))}",
            "",
        ]
    )
    return "\n".join(lines)
