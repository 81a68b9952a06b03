"""Display modes for problems and their parts: concise, quoted and verbose.

``render_verbose`` output is the text ``parse_causes`` understands, so a
problem whose messages are single lines renders and re-parses to the same
cause chain.
"""

from __future__ import annotations

import math
from typing import Any, TypeAlias

import orjson

from problemcase.trace import Cause, CauseChain, StackTrace, error_message, verbose_text

from .problem import Problem

Renderable: TypeAlias = "Problem | Cause | CauseChain | StackTrace | BaseException"


def number(value: float) -> str:
    """Float as it reads in a message: ``18.0`` -> ``18``, ``nan`` -> ``NaN``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return str(int(value)) if value.is_integer() and abs(value) < 1e21 else repr(value)


def plain(value: Any) -> str:
    """Value as it reads in a message, with floats normalized by ``number``."""
    return number(value) if isinstance(value, float) else str(value)


def literal(value: Any) -> str:
    """JSON-style literal of a value: strings quoted, numbers and booleans bare."""
    if isinstance(value, float):
        return number(value)
    try:
        return orjson.dumps(value, option=orjson.OPT_NON_STR_KEYS).decode()
    except TypeError:
        return repr(value)


def render_concise(value: Renderable) -> str:
    match value:
        case Problem():
            return value.error()
        case Cause():
            return value.message
        case CauseChain():
            return "\n".join(c.message for c in value)
        case StackTrace():
            return ""
        case BaseException():
            return error_message(value)
    raise TypeError(f"cannot render {type(value).__name__}")


def render_quoted(value: Renderable) -> str:
    return literal(render_concise(value))


def render_verbose(value: Renderable) -> str:
    """Causes with their frames, one ``function`` / ``\\tfile:line`` pair per frame."""
    match value:
        case Problem():
            return value.causes.render()
        case Cause() | CauseChain() | StackTrace():
            return value.render()
        case BaseException():
            return verbose_text(value)
    raise TypeError(f"cannot render {type(value).__name__}")
