"""Call-stack capture for problem causes.

Frames are read straight off the interpreter's frame objects: no source
files are opened, so capture is cheap enough to run on every problem
construction. Traces are ordered call-site first.
"""

from __future__ import annotations

import sys
from traceback import walk_tb
from types import CodeType, TracebackType
from typing import Iterator

from pydantic import BaseModel, ConfigDict, RootModel

from problemcase.foundation.config import get_settings

UNKNOWN = "unknown"


class StackFrame(BaseModel):
    """One resolved call site. ``unknown`` function/file is a valid state."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    function: str = UNKNOWN
    file: str = UNKNOWN
    line: int = 0
    file_with_line: str = ""

    def render(self) -> str:
        return f"\n{self.function}\n\t{self.file_with_line}"

    def to_map(self) -> dict[str, str]:
        return {"file": self.file_with_line, "func": self.function}


class StackTrace(RootModel[tuple[StackFrame, ...]]):
    """Immutable sequence of frames, call-site first."""

    model_config = ConfigDict(frozen=True, revalidate_instances="never")

    root: tuple[StackFrame, ...] = ()

    def __iter__(self) -> Iterator[StackFrame]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, i: int) -> StackFrame:
        return self.root[i]

    def __bool__(self) -> bool:
        return bool(self.root)

    def shift(self) -> StackTrace:
        """Drop the first frame (the capturing call site) if anything remains after it."""
        return StackTrace.model_construct(self.root[1:]) if len(self.root) > 1 else self

    def append(self, frame: StackFrame) -> StackTrace:
        """Return a new trace with ``frame`` added at the end."""
        return StackTrace.model_construct((*self.root, frame))

    def render(self) -> str:
        return "".join(f.render() for f in self.root)

    def to_map(self) -> list[dict[str, str]]:
        return [f.to_map() for f in self.root]


EMPTY_TRACE = StackTrace.model_construct(())


def make_frame(function: str, file: str, line: int, file_with_line: str | None = None) -> StackFrame:
    """Create StackFrame concisely (bypasses validation for performance)."""
    return StackFrame.model_construct(
        function=function or UNKNOWN,
        file=file or UNKNOWN,
        line=line,
        file_with_line=f"{file}:{line}" if file_with_line is None else file_with_line,
    )


def _resolve(code: CodeType, module: str | None, lineno: int | None) -> StackFrame:
    name = getattr(code, "co_qualname", None) or code.co_name
    if not code.co_filename or not name:
        return StackFrame.model_construct(function=UNKNOWN, file=UNKNOWN, line=0, file_with_line="")
    return make_frame(f"{module}.{name}" if module else name, code.co_filename, lineno or 0)


def capture(skip: int = 0, depth: int | None = None) -> StackTrace:
    """Capture the calling thread's stack.

    Args:
        skip: Frames to skip above the caller of ``capture``. ``0`` makes the
            caller itself the first frame.
        depth: Maximum frames to record. Defaults to the ``stack_depth`` setting.
    """
    limit = depth or get_settings().stack_depth
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return EMPTY_TRACE
    frames: list[StackFrame] = []
    while frame is not None and len(frames) < limit:
        frames.append(_resolve(frame.f_code, frame.f_globals.get("__name__"), frame.f_lineno))
        frame = frame.f_back
    return StackTrace.model_construct(tuple(frames))


def from_traceback(tb: TracebackType | None, depth: int | None = None) -> StackTrace:
    """Convert a traceback into a StackTrace, innermost (raising) frame first."""
    if tb is None:
        return EMPTY_TRACE
    limit = depth or get_settings().stack_depth
    frames = [_resolve(f.f_code, f.f_globals.get("__name__"), ln) for f, ln in walk_tb(tb)]
    frames.reverse()
    return StackTrace.model_construct(tuple(frames[:limit]))
