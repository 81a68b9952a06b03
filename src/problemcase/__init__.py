"""Problemcase - structured problem-details errors with provenance.

Build richly described errors once, raise and propagate them as ordinary
exceptions, then render or merge them without losing where they came from.

Quick Start:
    >>> from problemcase import INTERNAL_ERROR, NOT_FOUND, Resource, invalid_range_error
    >>>
    >>> p = NOT_FOUND("no such user", Resource("user"))
    >>> str(p)
    'not_found: no such user'
    >>> p.status
    404

Wrapping keeps the cause chain, root first:
    >>> try:
    ...     int("x")
    ... except ValueError as exc:
    ...     wrapped = INTERNAL_ERROR(exc)
    >>> len(wrapped.causes) >= 2
    True

Merging folds concurrent failures into one problem:
    >>> age = invalid_range_error("age", 5, 18, True)
    >>> both = age.merge(NOT_FOUND("gone"))
    >>> both.status, both.title, len(both.merged)
    (400, 'bad_request', 2)

Custom kinds:
    >>> from problemcase import within_category, Detail
    >>> QUOTA = within_category("billing", "quota_exceeded", 429, Detail("quota exceeded"))
    >>> QUOTA().type
    'https://example.com/errors/billing/quota_exceeded'
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import ProblemSettings, clear_settings_cache, configure_logging, get_settings
from .problem import (
    BAD_REQUEST,
    INTERNAL_ERROR,
    INVALID_ENCODING,
    INVALID_FILE,
    INVALID_REQUEST,
    IO_ERROR,
    METHOD_NOT_ALLOWED,
    NO_AUTH_MIDDLEWARE,
    NOT_FOUND,
    REGISTRY,
    REQUEST_TOO_LARGE,
    UNAUTHORIZED,
    Category,
    Detail,
    Field,
    IdSource,
    Instance,
    Meta,
    Problem,
    RandomSourceError,
    Resource,
    Typed,
    ValidationResult,
    as_problem,
    build_registry,
    invalid_attribute_type_error,
    invalid_enum_value_error,
    invalid_format_error,
    invalid_length_error,
    invalid_param_type_error,
    invalid_pattern_error,
    invalid_range_error,
    method_not_allowed_error,
    missing_attribute_error,
    missing_header_error,
    missing_param_error,
    missing_payload_error,
    no_auth_middleware,
    ok,
    render_concise,
    render_quoted,
    render_verbose,
    typed,
    within_category,
)
from .trace import Cause, CauseChain, StackFrame, StackTrace, capture, error_to_causes, parse_causes

__all__ = [
    "__version__",
    # Config
    "ProblemSettings", "get_settings", "clear_settings_cache", "configure_logging",
    # Trace
    "StackFrame", "StackTrace", "capture", "Cause", "CauseChain", "error_to_causes", "parse_causes",
    # Problem
    "Problem", "as_problem", "Typed", "typed", "within_category",
    "Detail", "Category", "Instance", "Resource", "Field", "Meta", "ValidationResult",
    "IdSource", "RandomSourceError",
    "render_concise", "render_quoted", "render_verbose",
    # Predefined kinds
    "REGISTRY", "build_registry",
    "BAD_REQUEST", "UNAUTHORIZED", "INVALID_REQUEST", "INVALID_ENCODING", "REQUEST_TOO_LARGE",
    "NO_AUTH_MIDDLEWARE", "INVALID_FILE", "NOT_FOUND", "METHOD_NOT_ALLOWED", "IO_ERROR", "INTERNAL_ERROR",
    "ok", "missing_payload_error", "invalid_param_type_error", "missing_param_error",
    "invalid_attribute_type_error", "missing_attribute_error", "missing_header_error",
    "invalid_enum_value_error", "invalid_format_error", "invalid_pattern_error",
    "invalid_range_error", "invalid_length_error", "no_auth_middleware", "method_not_allowed_error",
]
