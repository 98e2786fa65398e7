"""Logging helpers for applications embedding docsync.

The library itself only creates module loggers; these helpers are for hosts
that want docsync's diagnostics on a stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

__all__ = ["LOG_FORMAT", "get_logger", "setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``docsync`` logger.

    Calling it again replaces the handler installed by the previous call
    instead of adding a second one.

    Args:
        level: Logging level for the ``docsync`` logger.
        stream: Destination stream.  Defaults to ``sys.stderr``.

    Returns:
        The configured ``docsync`` logger.
    """
    root = logging.getLogger("docsync")
    for handler in list(root.handlers):
        if getattr(handler, "_docsync_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._docsync_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``docsync`` namespace."""
    if name == "docsync" or name.startswith("docsync."):
        return logging.getLogger(name)
    return logging.getLogger(f"docsync.{name}")
