"""The Problem entity: a structured, machine-inspectable error value.

Problems are ordinary exceptions (raise them, catch them, chain them) that
also carry RFC 7807-style fields, a cause chain with captured stacks, and
validation context. They are built by ``Typed`` constructors and treated as
immutable afterwards; ``merge`` always returns a new problem.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from problemcase.foundation.config import get_settings
from problemcase.trace import CauseChain

from .ids import IdSource, problem_id

logger = logging.getLogger("problemcase.problem")


def type_uri(category: str, title: str) -> str:
    """``{base}/{category}/{title}``, or the default type when either part is empty."""
    settings = get_settings()
    if category and title:
        return f"{settings.type_base_uri}/{category}/{title}"
    return settings.default_type


@dataclass(eq=False, repr=False)
class Problem(Exception):
    """Problem details error.

    Attributes:
        id: Random per-instance token
        type: URI derived from category and title
        category: Classification bucket (``general``, ``merged``, ...)
        title: Machine-readable kind, e.g. ``invalid_range``
        status: HTTP-style status code
        detail: Human message, never empty once constructed
        instance, resource, field: Optional request context
        merged: Problems folded into this one by ``merge`` (flat, in order)
        meta: Free-form metadata
        causes: Cause chain, root cause first, own cause last
        validation_result: Structured validation context
        wrapped: The error this problem was constructed around, if any

    Fields are read-only once constructed; ``merge`` returns a new problem.
    """

    id: str
    title: str
    status: int
    detail: str = ""
    type: str = ""
    category: str = ""
    instance: str = ""
    resource: str = ""
    field: str = ""
    merged: tuple[Problem, ...] = ()
    meta: dict[str, Any] = dataclasses.field(default_factory=dict)
    causes: CauseChain = dataclasses.field(default_factory=CauseChain)
    validation_result: dict[str, Any] = dataclasses.field(default_factory=dict)
    wrapped: BaseException | None = None

    def __post_init__(self) -> None:
        super().__init__(self.error())
        if self.wrapped is not None:
            self.__cause__ = self.wrapped
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        # exception bookkeeping (__traceback__, __notes__, ...) stays writable
        if name in _FIELD_NAMES and self.__dict__.get("_sealed"):
            raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _FIELD_NAMES:
            raise dataclasses.FrozenInstanceError(f"cannot delete field {name!r}")
        super().__delattr__(name)

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild, (type(self), {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}))

    def error(self) -> str:
        return f"{self.title}: {self.detail}" if self.detail else self.title

    __str__ = error

    def __repr__(self) -> str:
        return f"Problem(id={self.id!r}, title={self.title!r}, status={self.status}, detail={self.detail!r})"

    def response_status(self) -> int:
        """HTTP status for an error-mapping layer."""
        return self.status

    def token(self) -> str:
        """Correlation token for an error-mapping layer (the problem id)."""
        return self.id

    def merge(self, err: BaseException | None, *, id_source: IdSource | None = None) -> Problem:
        """Fold ``err`` into a new problem.

        Matching status and title are kept. Otherwise the worse status wins and is
        normalized to ``400 bad_request`` or ``500 internal_error`` under the
        ``merged`` category. Merged lists are flattened, not nested.
        """
        if err is None:
            return self
        other = as_problem(err)
        status, title, category, typ = self.status, self.title, self.category, self.type
        if self.status != other.status or self.title != other.title:
            status, title = (400, "bad_request") if max(self.status, other.status) < 500 else (500, "internal_error")
            category = "merged"
            typ = type_uri(category, title)
        logger.debug(
            "merged %s/%d with %s/%d into %s/%d",
            self.title, self.status, other.title, other.status, title, status,
        )
        return Problem(
            id=problem_id(id_source),
            title=title,
            status=status,
            detail=f"{self.detail}; {other.detail}" if other.detail else self.detail,
            type=typ,
            category=category,
            merged=(*(self.merged or (self,)), *(other.merged or (other,))),
            meta={"merged": True},
            causes=self.causes + other.causes,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data shape for transports. Empty optional context is omitted."""
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
        }
        for key in ("instance", "resource", "field"):
            if value := getattr(self, key):
                out[key] = value
        if self.meta:
            out["meta"] = dict(self.meta)
        if self.validation_result:
            out["validation_result"] = dict(self.validation_result)
        if self.merged:
            out["merged"] = [p.to_dict() for p in self.merged]
        out["causes"] = self.causes.to_map()
        return out


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(Problem))


def _rebuild(cls: type[Problem], fields: dict[str, Any]) -> Problem:
    return cls(**fields)


def as_problem(err: BaseException) -> Problem:
    """Return ``err`` if it already is a Problem, else wrap it as ``internal_error``."""
    if isinstance(err, Problem):
        return err
    from .general import INTERNAL_ERROR

    return INTERNAL_ERROR(err)
