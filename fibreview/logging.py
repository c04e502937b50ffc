"""Logging for fibreview.

All modules log through children of the ``fibreview`` logger, which carries a
single stdout handler. The starting level comes from ``FIBREVIEW_LOG_LEVEL``
when set (a level name such as ``DEBUG``), otherwise INFO. The command line
overrides it through ``configure_cli_logging``.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "fibreview"
LOG_LEVEL_ENV = "FIBREVIEW_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _root() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name (``"debug"``, ``"WARNING"``) to its number.

    Unknown or empty names give ``default``.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the package handler on the ``fibreview`` logger.

    Only the first call has an effect until ``reset_logging()`` runs.

    Args:
        level: Logging level. Defaults to ``FIBREVIEW_LOG_LEVEL`` or INFO.
        format_string: Record format, ``DEFAULT_FORMAT`` when omitted.
        handler: Target handler, a stdout ``StreamHandler`` when omitted.
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = level_from_name(os.getenv(LOG_LEVEL_ENV))
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    root = _root()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # pytest's caplog listens on the stdlib root logger
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger below ``fibreview`` for ``name``.

    Names outside the package (``__main__`` when a module runs as a script)
    are nested under ``fibreview`` so they share its handler and level.
    """
    setup_root_logger()
    if name == ROOT_LOGGER_NAME:
        return _root()
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    # Children defer to the package level
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Apply ``level`` to the package logger and its handlers."""
    setup_root_logger()
    root = _root()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)


def configure_cli_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Pick the level for the command-line flags and apply it.

    ``verbose`` wins over ``quiet``. Without either flag the level is taken
    from ``FIBREVIEW_LOG_LEVEL``, falling back to INFO.

    Returns:
        The level that was applied.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = level_from_name(os.getenv(LOG_LEVEL_ENV))
    set_global_log_level(level)
    return level


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler so the next setup starts clean (tests)."""
    global _configured
    _configured = False
    root = _root()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


setup_root_logger()
