"""Predefined problem kinds and validation helpers.

The registry is built once at import and is read-only; ``build_registry``
makes an equivalent one bound to a specific random source (e.g. for tests).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from problemcase.trace import error_message

from .ids import IdSource
from .problem import Problem
from .render import literal, plain
from .typed import Detail, Typed, ValidationResult, typed, within_category

# Generic bad request.
BAD_REQUEST = typed("bad_request", 400)

# Generic unauthorized.
UNAUTHORIZED = typed("unauthorized", 401)

# A request parameter or payload failed to validate.
INVALID_REQUEST = typed("invalid_request", 400)

# A request body failed to decode.
INVALID_ENCODING = typed("invalid_encoding", 400)

# Request body exceeded the allowed length.
REQUEST_TOO_LARGE = typed("request_too_large", 413)

# No auth middleware is mounted for a security scheme.
NO_AUTH_MIDDLEWARE = typed("no_auth_middleware", 500)

# A requested file does not exist or is not readable.
INVALID_FILE = typed("invalid_file", 404)

# No handler matches the request.
NOT_FOUND = typed("not_found", 404)

# A handler matches the path but not the method.
METHOD_NOT_ALLOWED = typed("method_not_allowed", 405)

IO_ERROR = typed("io_error", 500, Detail("io error"))

# Uncaught errors; also what ``as_problem`` wraps foreign errors with.
INTERNAL_ERROR = typed("internal_error", 500)

_PREDEFINED: tuple[Typed, ...] = (
    BAD_REQUEST, UNAUTHORIZED, INVALID_REQUEST, INVALID_ENCODING, REQUEST_TOO_LARGE,
    NO_AUTH_MIDDLEWARE, INVALID_FILE, NOT_FOUND, METHOD_NOT_ALLOWED, IO_ERROR, INTERNAL_ERROR,
)


def build_registry(id_source: IdSource | None = None) -> Mapping[str, Typed]:
    """Read-only title -> constructor mapping of the predefined kinds."""
    return MappingProxyType({t.title: t.with_id_source(id_source) for t in _PREDEFINED})


REGISTRY: Mapping[str, Typed] = build_registry()

_OK = typed("ok", 200)
_MISSING_PAYLOAD = within_category("general", "missing_payload", 400)
_INVALID_PARAM_TYPE = within_category("general", "invalid_param_type", 400)
_MISSING_PARAM = within_category("general", "missing_param", 400)
_INVALID_ATTRIBUTE_TYPE = within_category("general", "invalid_attribute_type", 400)
_MISSING_ATTRIBUTE = within_category("general", "missing_attribute", 400)
_MISSING_HEADER = within_category("general", "missing_header", 400)
_INVALID_ENUM_VALUE = within_category("general", "invalid_enum_value", 400)
_INVALID_FORMAT = within_category("general", "invalid_format", 400)
_INVALID_PATTERN = within_category("general", "invalid_pattern", 400)
_INVALID_RANGE = within_category("general", "invalid_range", 400)
_INVALID_LENGTH = within_category("general", "invalid_length", 400)
_NO_AUTH_MIDDLEWARE = within_category("general", "no_auth_middleware", 500)
_METHOD_NOT_ALLOWED = within_category("general", "method_not_allowed", 405)


def _comparison(minimum: bool) -> str:
    return "greater than or equal to" if minimum else "less than or equal to"


def ok(message: str) -> Problem:
    """Status 200 pseudo-problem, for APIs that report success through the same channel."""
    return _OK(message)


def missing_payload_error() -> Problem:
    """Request is missing a required payload."""
    return _MISSING_PAYLOAD("missing required payload")


def invalid_param_type_error(name: str, value: Any, expected: str) -> Problem:
    """Parameter value has the wrong type."""
    return _INVALID_PARAM_TYPE(
        f"invalid value {literal(value)} for parameter {literal(name)}, must be a {expected}",
        ValidationResult(name=name, value=value, expected=expected),
    )


def missing_param_error(name: str) -> Problem:
    """Path or querystring parameter is missing."""
    return _MISSING_PARAM(
        f"missing required parameter {literal(name)}",
        ValidationResult(name=name),
    )


def invalid_attribute_type_error(ctx: str, value: Any, expected: str) -> Problem:
    """Payload field has the wrong type."""
    return _INVALID_ATTRIBUTE_TYPE(
        f"type of {ctx} must be {expected} but got value {literal(value)}",
        ValidationResult(name=ctx, value=value, expected=expected),
    )


def missing_attribute_error(ctx: str, name: str) -> Problem:
    """Payload is missing a required field."""
    return _MISSING_ATTRIBUTE(
        f"attribute {literal(name)} of {ctx} is missing and required",
        ValidationResult(name=name, parent=ctx),
    )


def missing_header_error(name: str) -> Problem:
    return _MISSING_HEADER(
        f"missing required HTTP header {literal(name)}",
        ValidationResult(name=name),
    )


def invalid_enum_value_error(ctx: str, value: Any, allowed: Iterable[Any]) -> Problem:
    """Value is not one of the allowed enum values."""
    elems = [literal(a) for a in allowed]
    return _INVALID_ENUM_VALUE(
        f"value of {ctx} must be one of {', '.join(elems)} but got value {literal(value)}",
        ValidationResult(name=ctx, value=value, expected=": ".join(elems)),
    )


def invalid_format_error(ctx: str, target: str, format: str, format_error: BaseException) -> Problem:
    """Value does not match a format validation (date-time, email, ...)."""
    reason = error_message(format_error)
    return _INVALID_FORMAT(
        f"{ctx} must be formatted as a {format} but got value {literal(target)}, {reason}",
        ValidationResult(name=ctx, value=target, expected=format, error=reason),
    )


def invalid_pattern_error(ctx: str, target: str, pattern: str) -> Problem:
    return _INVALID_PATTERN(
        f"{ctx} must match the regexp {literal(pattern)} but got value {literal(target)}",
        ValidationResult(name=ctx, value=target, expected=pattern),
    )


def invalid_range_error(ctx: str, target: Any, value: Any, minimum: bool) -> Problem:
    """Value is outside a range bound. ``minimum`` selects the lower bound."""
    comp = _comparison(minimum)
    return _INVALID_RANGE(
        f"{ctx} must be {comp} {plain(value)} but got value {literal(target)}",
        ValidationResult(name=ctx, value=target, comp=comp, expected=value, min=minimum),
    )


def invalid_length_error(ctx: str, target: Any, length: int, value: int, minimum: bool) -> Problem:
    """Value length is outside a length bound."""
    comp = _comparison(minimum)
    return _INVALID_LENGTH(
        f"length of {ctx} must be {comp} {plain(value)} but got value {literal(target)} (len={length})",
        ValidationResult(name=ctx, value=target, len=length, comp=comp, expected=value, min=minimum),
    )


def no_auth_middleware(scheme: str) -> Problem:
    return _NO_AUTH_MIDDLEWARE(
        f"Auth middleware for security scheme {scheme} is not mounted",
        ValidationResult(scheme=scheme),
    )


def method_not_allowed_error(method: str, allowed: Sequence[str]) -> Problem:
    plural = " one of" if len(allowed) > 1 else ""
    return _METHOD_NOT_ALLOWED(
        f"Method {method} must be{plural} {', '.join(allowed)}",
        ValidationResult(method=method, allowed=": ".join(allowed)),
    )
