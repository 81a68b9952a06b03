"""Problem ids: 6 random bytes, standard base64 (8 characters)."""

from __future__ import annotations

import base64
import logging
import secrets
from typing import Callable, TypeAlias

logger = logging.getLogger("problemcase.problem.ids")

ID_BYTES = 6

IdSource: TypeAlias = Callable[[int], bytes]
"""Random source: called with a byte count, returns that many bytes."""


class RandomSourceError(RuntimeError):
    """The random source returned fewer bytes than requested. Not retryable."""


def problem_id(source: IdSource | None = None) -> str:
    """Generate a problem id from ``source`` (``secrets.token_bytes`` by default)."""
    raw = (source or secrets.token_bytes)(ID_BYTES)
    if len(raw) != ID_BYTES:
        logger.error("random source returned %d of %d bytes", len(raw), ID_BYTES)
        raise RandomSourceError(f"random source returned {len(raw)} of {ID_BYTES} bytes")
    return base64.b64encode(raw).decode("ascii")
