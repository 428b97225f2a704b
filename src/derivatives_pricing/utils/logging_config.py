"""Project-wide logging configuration for entry points.

Library modules never call `basicConfig`; they only do
`logger = logging.getLogger(__name__)`. Entry points call `setup_logging(...)`
once, normally through `cli.logging.setup_logging_from_config`, which maps the
`logging:` section of an app config onto the keyword arguments below.

The console handler attaches `_AddShortNameFilter`, so console format strings
may use `%(shortname)s` (last dotted component of the logger name).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


class _AddShortNameFilter(logging.Filter):
    """Inject `record.shortname`; `record.name` is left untouched."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.split(".")[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Colour only the level name; console handler only."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _coerce_level(level: int | str) -> int:
    """Accept `logging.INFO`, `"info"` or `"20"`."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)
    try:
        return _LEVELS[s]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Configure the root logger.

    Parameters
    - level: root level (int or string).
    - fmt_console: console format; `%(shortname)s` is available.
    - fmt_file: file format, used only when `log_file` is given.
    - datefmt: timestamp format shared by both handlers.
    - log_file: also write records to this file (parents are created).
    - module_levels: per-logger level overrides, e.g.
      `{"derivatives_pricing.options.validation": "ERROR"}`.
    - colored: ANSI-colour the console level names.

    Uses `force=True` so repeated calls replace handlers instead of stacking
    them.
    """
    root_level = _coerce_level(level)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.addFilter(_AddShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if module_levels:
        for name, lvl in module_levels.items():
            logging.getLogger(name).setLevel(_coerce_level(lvl))
