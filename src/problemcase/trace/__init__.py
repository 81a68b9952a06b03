"""Stack capture and cause chains.

- StackFrame/StackTrace: call sites captured at construction time
- Cause/CauseChain: message + stack per hop, root cause first
- parse_causes/error_to_causes: rebuild a chain from verbose error text
"""

from .cause import Cause, CauseChain, cause, chain, validate_causes
from .extract import error_message, error_to_causes, parse_causes, verbose_text
from .stack import EMPTY_TRACE, UNKNOWN, StackFrame, StackTrace, capture, from_traceback, make_frame

__all__ = [
    "StackFrame", "StackTrace", "EMPTY_TRACE", "UNKNOWN", "capture", "from_traceback", "make_frame",
    "Cause", "CauseChain", "cause", "chain", "validate_causes",
    "error_message", "error_to_causes", "parse_causes", "verbose_text",
]
