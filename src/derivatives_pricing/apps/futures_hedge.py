#!/usr/bin/env python
"""Size a futures hedge with the naive or minimum-variance ratio."""

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
from derivatives_pricing.hedging import (
    DEFAULT_CONTRACT_MULTIPLIER,
    HedgeMethod,
    format_hedge_report,
    futures_hedge,
    parse_futures_hedge_inputs,
)
from derivatives_pricing.options.validation import InvalidInputError

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "hedge": {
        "method": HedgeMethod.NAIVE.value,
        "spot_value": None,
        "futures_price": None,
        "multiplier": DEFAULT_CONTRACT_MULTIPLIER,
        "spot_std": None,
        "futures_std": None,
        "correlation": None,
    },
}

_HEDGE_ARGS: dict[str, str] = {
    "method": "method",
    "spot_value": "spot_value",
    "futures_price": "futures_price",
    "multiplier": "multiplier",
    "spot_std": "spot_std",
    "futures_std": "futures_std",
    "correlation": "correlation",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Futures hedge ratio and contract count."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument(
        "--method", type=str, choices=[m.value for m in HedgeMethod], default=None
    )
    parser.add_argument("--spot-value", type=float, default=None)
    parser.add_argument("--futures-price", type=float, default=None)
    parser.add_argument("--multiplier", type=float, default=None)
    parser.add_argument("--spot-std", type=float, default=None)
    parser.add_argument("--futures-std", type=float, default=None)
    parser.add_argument("--correlation", type=float, default=None)
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    hedge = collect_section_overrides(args, _HEDGE_ARGS)
    if hedge:
        overrides["hedge"] = hedge
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
        kwargs = parse_futures_hedge_inputs(config.get("hedge", {}))
    except InvalidInputError as e:
        logger.error("Invalid hedge inputs: %s", e)
        raise

    logger.info("Method:     %s", kwargs["method"])
    logger.info(
        "Position:   spot_value=%s futures_price=%s multiplier=%s",
        kwargs["spot_value"],
        kwargs["futures_price"],
        kwargs["multiplier"],
    )

    if config.get("dry_run", False):
        log_dry_run(logger, {"action": "futures_hedge", "hedge": kwargs})
        return

    result = futures_hedge(**kwargs)
    print(format_hedge_report(result))


if __name__ == "__main__":
    main()
