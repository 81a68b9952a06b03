"""Cause and CauseChain: the ancestry of a problem, one captured hop at a time."""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, RootModel, TypeAdapter

from .stack import EMPTY_TRACE, StackTrace


class Cause(BaseModel):
    """One hop in an error's ancestry: a message and the stack captured with it."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    message: str = ""
    stack_trace: StackTrace = Field(default_factory=StackTrace)

    def render(self) -> str:
        """Message followed by one ``\\n{function}\\n\\t{file}:{line}`` block per frame."""
        return self.message + self.stack_trace.render()

    def to_map(self) -> dict[str, Any]:
        return {"message": self.message, "stacktrace": self.stack_trace.to_map()}

    def __str__(self) -> str:
        return self.message


class CauseChain(RootModel[tuple[Cause, ...]]):
    """Ordered causes, oldest root cause first, most recent wrapping last."""

    model_config = ConfigDict(frozen=True, revalidate_instances="never")

    root: tuple[Cause, ...] = ()

    def __iter__(self) -> Iterator[Cause]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, i: int) -> Cause:
        return self.root[i]

    def __bool__(self) -> bool:
        return bool(self.root)

    def __add__(self, other: CauseChain) -> CauseChain:
        return CauseChain.model_construct((*self.root, *other.root))

    def render(self) -> str:
        return "\n".join(c.render() for c in self.root)

    def to_map(self) -> list[dict[str, Any]]:
        return [c.to_map() for c in self.root]


def cause(message: str, stack_trace: StackTrace = EMPTY_TRACE) -> Cause:
    """Create Cause concisely (bypasses validation for performance)."""
    return Cause.model_construct(message=message, stack_trace=stack_trace)


def chain(*causes: Cause) -> CauseChain:
    return CauseChain.model_construct(causes)


_CauseChainAdapter: TypeAdapter[CauseChain] = TypeAdapter(CauseChain)


def validate_causes(data: list[dict[str, Any]]) -> CauseChain:
    """Validate model-dumped causes (``message``/``stack_trace`` records) back into a chain."""
    return _CauseChainAdapter.validate_python(data)
