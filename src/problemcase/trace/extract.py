"""Cause-chain extraction from the verbose rendering of an error.

The verbose convention is the one produced by ``CauseChain.render``::

    <message>
    <function>
    \t<file>:<line>
    <function>
    \t<file>:<line>
    <next message>
    ...

``parse_causes`` walks that text line by line and rebuilds the chain. A line
following a finished frame is taken as the next function name until the line
after it shows otherwise, at which point it is reassigned as a new cause's
message. The parser only understands this convention; it is not a general
traceback parser and degrades to extra or incomplete causes instead of raising.
"""

from __future__ import annotations

import logging
from typing import Literal

from .cause import Cause, CauseChain, cause
from .stack import UNKNOWN, StackFrame, StackTrace, from_traceback, make_frame

logger = logging.getLogger("problemcase.trace.extract")

Dangling = Literal["frame", "cause"]


def error_message(err: BaseException) -> str:
    """Rendered message of an error, falling back to its type name when empty."""
    try:
        return str(err) or type(err).__name__
    except Exception:  # noqa: BLE001 - a broken __str__ must not break extraction
        return f"<unprintable {type(err).__name__}>"


def _structured(err: BaseException) -> CauseChain | None:
    causes = getattr(err, "causes", None)
    return causes if isinstance(causes, CauseChain) else None


def _ancestry(err: BaseException) -> list[BaseException]:
    """The exception and everything it was raised from, root first."""
    seen: set[int] = set()
    out: list[BaseException] = []
    cur: BaseException | None = err
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        out.append(cur)
        if _structured(cur) is not None:
            break  # a problem already carries its own ancestry
        cur = cur.__cause__ if cur.__cause__ is not None or cur.__suppress_context__ else cur.__context__
    out.reverse()
    return out


def verbose_text(err: BaseException) -> str:
    """Render any error in the verbose cause convention.

    Problems render their own chain. Foreign exceptions render each link of
    their ``__cause__``/``__context__`` ancestry as its message plus the frames
    of its traceback.
    """
    parts: list[str] = []
    for e in _ancestry(err):
        if (causes := _structured(e)) is not None:
            parts.append(causes.render())
        else:
            parts.append(error_message(e) + from_traceback(e.__traceback__).render())
    return "\n".join(parts)


def _location(function: str, loc: str) -> StackFrame:
    file, _, rest = loc.partition(":")
    raw = rest.split(":", 1)[0]
    try:
        line = int(raw)
    except ValueError:
        logger.debug("non-numeric line in location %r, using 0", loc)
        line = 0
    return make_frame(function, file, line, loc)


def parse_causes(text: str, *, dangling: Dangling = "frame") -> CauseChain:
    """Rebuild a CauseChain from verbose text.

    Messages are single lines in this convention: a message spanning several
    lines comes back as several causes. Use ``error_to_causes`` when the error
    object itself is at hand.

    Args:
        text: Output of ``verbose_text`` / ``CauseChain.render``.
        dangling: What a function-name line left at end of input without a
            location becomes: ``"frame"`` appends an incomplete frame to the
            last cause, ``"cause"`` emits it as a frameless cause.
    """
    messages: list[str] = []
    traces: list[list[StackFrame]] = []
    opened = False
    # None: no function line seen for the open frame. "" is a real (empty) line.
    function: str | None = None
    for line in text.split("\n"):
        if opened and line.startswith("\t"):
            traces[-1].append(_location(function or "", line[1:]))
            function = None
        elif opened and function is None:
            function = line
        else:
            if function is not None:
                # previous "function" had no location, so it was a message
                messages.append(function)
                function = line
            else:
                messages.append(line)
            opened = True
            traces.append([])
    if function is not None and (function or dangling == "cause"):
        logger.debug("dangling function line %r at end of input, kept as %s", function, dangling)
        if dangling == "cause":
            messages.append(function)
            traces.append([])
        else:
            traces[-1].append(make_frame(function, UNKNOWN, 0, ""))
    return CauseChain.model_construct(
        tuple(cause(m, StackTrace.model_construct(tuple(t))) for m, t in zip(messages, traces))
    )


def error_to_causes(err: BaseException) -> CauseChain:
    """Cause chain of any error, root first. Never raises.

    Problems in the ancestry hand over their structured chain as is. Every
    foreign link becomes one cause: its message and the frames of its
    traceback, however many lines the message has.
    """
    if (causes := _structured(err)) is not None:
        return causes
    out: list[Cause] = []
    for e in _ancestry(err):
        if (causes := _structured(e)) is not None:
            out.extend(causes)
        else:
            out.append(cause(error_message(e), from_traceback(e.__traceback__)))
    return CauseChain.model_construct(tuple(out))
