"""Application-wide logging setup (console only; the process manager owns log files)."""
from __future__ import annotations

import logging

_INITIALIZED = False


def configure_logging(level: str = "INFO") -> None:
    """Install one console handler on the root logger. Safe to call more than once."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(console_handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at level %s", level.upper())


__all__ = ["configure_logging"]
