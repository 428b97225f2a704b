#!/usr/bin/env python
"""Price a European option and its Greeks with the Black-Scholes formula."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from derivatives_pricing.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    collect_logging_overrides,
    collect_section_overrides,
    log_dry_run,
    print_config,
)
from derivatives_pricing.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    setup_logging_from_config,
)
from derivatives_pricing.options import (
    BlackScholesPricer,
    InvalidInputError,
    parse_black_scholes_inputs,
    quoted_greeks,
)
from derivatives_pricing.options.reporting import format_black_scholes_report

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "option": {
        "spot": None,
        "strike": None,
        "time_to_expiry": None,
        "volatility": None,
        "rate": None,
        "dividend_yield": 0.0,
        "option_type": "call",
    },
}

_OPTION_ARGS: dict[str, str] = {
    "spot": "spot",
    "strike": "strike",
    "expiry": "time_to_expiry",
    "volatility": "volatility",
    "rate": "rate",
    "dividend_yield": "dividend_yield",
    "option_type": "option_type",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Black-Scholes price and Greeks for a European option."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument("--spot", type=float, default=None)
    parser.add_argument("--strike", type=float, default=None)
    parser.add_argument(
        "--expiry", type=float, default=None, help="Time to expiry in years."
    )
    parser.add_argument(
        "--volatility", type=float, default=None, help="Annualized, in decimals."
    )
    parser.add_argument(
        "--rate", type=float, default=None, help="Annual risk-free rate, in decimals."
    )
    parser.add_argument("--dividend-yield", type=float, default=None)
    parser.add_argument(
        "--option-type", type=str, choices=["call", "put"], default=None
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    option = collect_section_overrides(args, _OPTION_ARGS)
    if option:
        overrides["option"] = option
    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides
    return overrides


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    try:
        spec, state = parse_black_scholes_inputs(config.get("option", {}))
    except InvalidInputError as e:
        logger.error("Invalid option inputs: %s", e)
        raise

    logger.info(
        "Option:     S=%s K=%s T=%s sigma=%s r=%s q=%s (%s)",
        state.spot,
        spec.strike,
        spec.time_to_expiry,
        state.volatility,
        state.rate,
        state.dividend_yield,
        spec.option_type,
    )

    if config.get("dry_run", False):
        log_dry_run(
            logger,
            {
                "action": "black_scholes",
                "option": config.get("option", {}),
            },
        )
        return

    pricer = BlackScholesPricer()
    result = pricer.price_and_greeks(spec, state)
    d1, d2 = pricer.d1_d2(spec, state)
    logger.debug("d1=%.6f d2=%.6f", d1, d2)

    values = quoted_greeks({**result.to_flat(), "d1": d1, "d2": d2})
    print(format_black_scholes_report(values, option_type=spec.option_type))


if __name__ == "__main__":
    main()
