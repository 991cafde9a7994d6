"""Logging setup for Game Catalog.

Every module logs through a child of the ``gamecatalog`` logger
(``gamecatalog.database``, ``gamecatalog.config``, ...). ``setup_logging``
attaches a console handler and, on request, a file handler to that parent.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["logger", "resolve_level", "setup_logging"]

logger = logging.getLogger("gamecatalog")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_CONSOLE_HANDLER = "gamecatalog.console"
_FILE_HANDLER = "gamecatalog.file"


def resolve_level(level: int | str) -> int:
    """Turn a level name like ``"debug"`` into its numeric value.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _find_handler(name: str) -> logging.Handler | None:
    return next((h for h in logger.handlers if h.get_name() == name), None)


def _install(handler: logging.Handler, name: str, level: int) -> None:
    handler.set_name(name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> None:
    """Configure the ``gamecatalog`` logger.

    Safe to call more than once: the level is always updated, the console
    handler is added once, and a file handler is added the first time a
    ``log_file`` is given. The file handler always records DEBUG and up.

    Args:
        level: Level for the logger and console, as a number or a name.
        log_file: Optional log file; parent directories are created.
    """
    level = resolve_level(level)
    logger.setLevel(level)

    console = _find_handler(_CONSOLE_HANDLER)
    if console is None:
        _install(logging.StreamHandler(sys.stdout), _CONSOLE_HANDLER, level)
    else:
        console.setLevel(level)

    if log_file is not None and _find_handler(_FILE_HANDLER) is None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _install(logging.FileHandler(log_file, encoding="utf-8"), _FILE_HANDLER, logging.DEBUG)
