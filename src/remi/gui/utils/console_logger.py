"""stderr logging for the command-line entry point."""

from __future__ import annotations

import logging
import sys

VERBOSE_FORMAT = "%(levelname)-7s %(name)s: %(message)s"


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
    fmt: str = "%(message)s",
) -> logging.Handler:
    """Return the handler called *handler_name* on *logger*, adding it if missing.

    Output goes to stderr; stdout is reserved for command output.
    """
    existing = next((h for h in logger.handlers if h.get_name() == handler_name), None)
    if existing is not None:
        return existing

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(handler_name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(min(logger.level or level, level))
    return handler
