from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from derivatives_pricing.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file_format": "%(asctime)s %(levelname)s %(name)s - %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S",
    "file": None,
    "color": True,
    "module_levels": None,
}

_LOGGING_KEYS: tuple[str, ...] = tuple(DEFAULT_LOGGING)


def add_logging_args(parser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    group.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    group.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    if not config:
        return merged

    for key in _LOGGING_KEYS:
        if config.get(key) is not None:
            merged[key] = config[key]
    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        fmt_file=log_cfg["file_format"],
        datefmt=log_cfg["datefmt"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["module_levels"],
        colored=log_cfg["color"],
    )
