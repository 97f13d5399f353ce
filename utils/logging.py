"""Logger setup shared by the dashboard modules."""

from __future__ import annotations

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger('beacon')
    root.addHandler(handler)
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``beacon`` namespace."""
    _configure_root()
    if not name.startswith('beacon'):
        name = f'beacon.{name}'
    return logging.getLogger(name)
