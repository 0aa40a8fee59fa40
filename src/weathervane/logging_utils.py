"""Rich-backed logging setup for weathervane.

Library modules only ever call ``logging.getLogger(__name__)``. The CLI (or a
``SiloAPI`` created in a program without any logging configured) installs a
single :class:`rich.logging.RichHandler` on the root logger, writing to
stderr so that tables printed on stdout stay machine-readable.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "HANDLER_MARKER",
    "apply_log_level",
    "configure_logging",
    "get_console",
    "get_package_logger",
    "resolve_log_level",
]

# Set on the handler that configure_logging installs, so it can be found again
HANDLER_MARKER = "_weathervane_handler"

PACKAGE_LOGGER_NAME = "weathervane"


def resolve_log_level(level: int | str) -> int:
    """Turn "debug", "INFO", 30 etc. into a numeric logging level.

    Raises:
        ValueError: Unknown level name
        TypeError: Anything other than a str or int (bools included)
    """
    if isinstance(level, bool) or not isinstance(level, (int, str)):
        raise TypeError(f"Invalid logging level type: {type(level)!r}")
    if isinstance(level, int):
        return level

    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid logging level string: {level}")
    return numeric


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Shared Rich console on stderr."""
    return Console(stderr=True)


@lru_cache(maxsize=1)
def get_package_logger() -> logging.Logger:
    """The ``weathervane`` logger at the top of the package hierarchy.

    Example:
        >>> get_package_logger().setLevel(logging.DEBUG)
    """
    return logging.getLogger(PACKAGE_LOGGER_NAME)


def _installed_handler(root_logger: logging.Logger) -> RichHandler | None:
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, HANDLER_MARKER, False):
            return handler
    return None


def configure_logging(
    level: int | str = logging.INFO,
    *,
    rich_tracebacks: bool = True,
    show_path: bool = False,
) -> None:
    """Route log records through a Rich handler on the root logger.

    Calling it again only updates the level of the handler installed the
    first time. Plain (non-Rich) handlers already on the root logger are
    removed so records are not printed twice.

    Args:
        level: Level name or number, applied to the root logger and handler
        rich_tracebacks: Render exceptions with Rich
        show_path: Show the emitting file and line next to each record
    """
    root_logger = logging.getLogger()
    numeric_level = resolve_log_level(level)
    root_logger.setLevel(numeric_level)

    existing = _installed_handler(root_logger)
    if existing is not None:
        existing.setLevel(numeric_level)
        return

    for handler in [h for h in root_logger.handlers if not isinstance(h, RichHandler)]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=get_console(),
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_path=show_path,
    )
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, HANDLER_MARKER, True)
    root_logger.addHandler(handler)


def apply_log_level(level: int | str) -> int:
    """Set the verbosity of weathervane's own loggers.

    Installs the Rich handler first if the application has not configured
    logging at all. Other libraries' loggers are left alone.

    Returns:
        The numeric level applied
    """
    numeric_level = resolve_log_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        configure_logging(level=numeric_level)

    get_package_logger().setLevel(numeric_level)
    handler = _installed_handler(root_logger)
    if handler is not None:
        handler.setLevel(numeric_level)
    return numeric_level
