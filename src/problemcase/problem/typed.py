"""Typed constructors: fixed title/status in, a Problem factory out.

Example:
    >>> NOT_FOUND = typed("not_found", 404)
    >>> p = NOT_FOUND("user 42 does not exist", Resource("user"))
    >>> str(p)
    'not_found: user 42 does not exist'

Arguments are dispatched by kind, not position. The marker types below say
which field a string belongs to; a plain string becomes the detail; an
exception is wrapped and its cause chain spliced in ahead of the new one.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from problemcase.trace import CauseChain, capture, cause, error_message, error_to_causes

from .ids import IdSource, problem_id
from .problem import Problem, type_uri


class Detail(str):
    """Human detail message."""


class Category(str):
    """Classification bucket, part of the type URI."""


class Instance(str):
    """URI of the specific occurrence."""


class Resource(str):
    """Resource the problem concerns."""


class Field(str):
    """Request field the problem concerns."""


class Meta(tuple):
    """Alternating key/value entries: ``Meta("attempt", 3, "host", "db1")``.

    A trailing key without a value is ignored.
    """

    def __new__(cls, *entries: Any) -> Meta:
        return super().__new__(cls, entries)

    def merge_into(self, target: dict[str, Any]) -> dict[str, Any]:
        key = ""
        for n, value in enumerate(self):
            if n % 2 == 0:
                key = str(value)
            else:
                target[key] = value
        return target


class ValidationResult(dict[str, Any]):
    """Validation context (name, offending value, expected constraint, ...). Later keys win."""

    def merge_into(self, target: dict[str, Any]) -> dict[str, Any]:
        target.update(self)
        return target


_NOT_STRINGABLE = (int, float, complex, bytes, bytearray)


def _stringable(value: object) -> bool:
    """Whether the value's type defines its own ``__str__``."""
    return type(value).__str__ is not object.__str__ and not isinstance(value, _NOT_STRINGABLE)


@dataclass(frozen=True, slots=True)
class Typed:
    """Problem constructor with fixed title, status and type-level arguments.

    Type-level ``fixed`` arguments are prepended to every call's arguments.
    """

    title: str
    status: int
    fixed: tuple[Any, ...] = ()
    id_source: IdSource | None = dataclasses.field(default=None, compare=False, repr=False)

    def __call__(self, *args: Any) -> Problem:
        own = capture(skip=1)
        detail = category = instance = resource = field = message = ""
        meta: dict[str, Any] = {}
        validation: dict[str, Any] = {}
        wrapped: BaseException | None = None
        ancestry = CauseChain()

        for i, value in enumerate((*self.fixed, *args)):
            match value:
                case Detail():
                    detail = detail or str(value)
                case Category():
                    category = str(value)
                case Instance():
                    instance = str(value)
                case Resource():
                    resource = str(value)
                case Field():
                    field = str(value)
                case str():
                    detail = detail or value
                case BaseException():
                    message = error_message(value)
                    wrapped = value
                    ancestry = error_to_causes(value) + ancestry
                    detail = detail or message
                case Meta():
                    value.merge_into(meta)
                case ValidationResult():
                    value.merge_into(validation)
                case _ if _stringable(value):
                    detail = detail or str(value)
                case _ if i == 0:
                    detail = str(value)

        detail = detail or "unknown"
        return Problem(
            id=problem_id(self.id_source),
            title=self.title,
            status=self.status,
            detail=detail,
            type=type_uri(category, self.title),
            category=category,
            instance=instance,
            resource=resource,
            field=field,
            meta=meta,
            causes=ancestry + CauseChain.model_construct((cause(message or detail, own),)),
            validation_result=validation,
            wrapped=wrapped,
        )

    def with_id_source(self, source: IdSource | None) -> Typed:
        """Same constructor drawing ids from ``source``."""
        return dataclasses.replace(self, id_source=source)

    def matches(self, err: BaseException | None) -> bool:
        """Whether ``err`` is a Problem of this kind (same title and status)."""
        return isinstance(err, Problem) and err.title == self.title and err.status == self.status


def typed(title: str, status: int, *fixed: Any, id_source: IdSource | None = None) -> Typed:
    """Create a Typed constructor."""
    return Typed(title, status, fixed, id_source)


def within_category(category: str, title: str, status: int, *fixed: Any, id_source: IdSource | None = None) -> Typed:
    """Typed constructor whose problems belong to ``category``."""
    return Typed(title, status, (Category(category), *fixed), id_source)
