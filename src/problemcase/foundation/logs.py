"""Logging setup for the ``problemcase`` logger hierarchy.

Modules log through ``logging.getLogger("problemcase.<area>")``. Nothing is
emitted until an application either configures the root logger itself or
calls :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .config import get_settings

_ROOT = "problemcase"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``problemcase`` logger.

    Idempotent: repeated calls only adjust the level. Level defaults to
    ``PROBLEMCASE_LOG_LEVEL``.
    """
    log = logging.getLogger(_ROOT)
    log.setLevel(level if level is not None else get_settings().log_level)
    if not any(getattr(h, "_problemcase", False) for h in log.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._problemcase = True  # type: ignore[attr-defined]
        log.addHandler(handler)
    return log
