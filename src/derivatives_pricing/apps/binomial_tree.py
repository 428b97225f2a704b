#!/usr/bin/env python
"""Price a vanilla option on an explicit up/down binomial lattice."""

from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
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
    BinomialTreePricer,
    ExerciseStyle,
    InvalidInputError,
    parse_binomial_contract,
)
from derivatives_pricing.options.reporting import format_binomial_report

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "contract": {
        "spot": None,
        "strike": None,
        "up": None,
        "down": None,
        "rate": None,
        "steps": 2,
        "option_type": "call",
        "exercise_style": "european",
    },
    "output": {
        "table": False,
        "compare_styles": False,
    },
}

_CONTRACT_ARGS: dict[str, str] = {
    "spot": "spot",
    "strike": "strike",
    "up": "up",
    "down": "down",
    "rate": "rate",
    "steps": "steps",
    "option_type": "option_type",
    "exercise_style": "exercise_style",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price an option on a recombining binomial lattice."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument("--spot", type=float, default=None, help="Spot price S0.")
    parser.add_argument("--strike", type=float, default=None, help="Strike K.")
    parser.add_argument("--up", type=float, default=None, help="Up factor u > 1.")
    parser.add_argument(
        "--down", type=float, default=None, help="Down factor d in (0, 1)."
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Continuously-compounded rate per period, in decimals.",
    )
    parser.add_argument("--steps", type=int, default=None, help="Number of periods.")
    parser.add_argument(
        "--option-type", type=str, choices=["call", "put"], default=None
    )
    parser.add_argument(
        "--exercise-style",
        type=str,
        choices=["european", "american"],
        default=None,
    )
    parser.add_argument(
        "--table",
        dest="table",
        action="store_true",
        help="Append the per-node table to the report.",
    )
    parser.set_defaults(table=None)
    parser.add_argument(
        "--compare-styles",
        dest="compare_styles",
        action="store_true",
        help="Also report the other exercise style for the same contract.",
    )
    parser.set_defaults(compare_styles=None)
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    contract = collect_section_overrides(args, _CONTRACT_ARGS)
    if contract:
        overrides["contract"] = contract

    output = collect_section_overrides(
        args, {"table": "table", "compare_styles": "compare_styles"}
    )
    if output:
        overrides["output"] = output

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
        contract = parse_binomial_contract(config.get("contract", {}))
    except InvalidInputError as e:
        logger.error("Invalid contract: %s", e)
        raise

    output = config.get("output", {})
    logger.info(
        "Contract:   S0=%s K=%s u=%s d=%s r=%s n=%d",
        contract.spot,
        contract.strike,
        contract.up,
        contract.down,
        contract.rate,
        contract.steps,
    )
    logger.info("Style:      %s %s", contract.exercise_style, contract.option_type)

    if config.get("dry_run", False):
        log_dry_run(
            logger,
            {
                "action": "binomial_tree",
                "contract": asdict(contract),
                "output": output,
            },
        )
        return

    result = BinomialTreePricer().evaluate(contract)
    print(format_binomial_report(result, include_table=bool(output.get("table"))))

    if output.get("compare_styles"):
        other = (
            ExerciseStyle.EUROPEAN
            if contract.is_american
            else ExerciseStyle.AMERICAN
        )
        other_price = BinomialTreePricer(exercise_style=other).price(contract)
        logger.info("%s value: %.4f", other.value.capitalize(), other_price)
        print(f"{other.value.capitalize()} value for comparison: {other_price:.4f}")


if __name__ == "__main__":
    main()
