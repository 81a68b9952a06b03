"""Problem details: the entity, typed constructors, rendering and predefined kinds.

- Problem: structured error value (title, status, detail, causes, metadata)
- Typed/typed/within_category: constructor factories with kind-directed arguments
- Detail/Category/Instance/Resource/Field/Meta/ValidationResult: argument markers
- render_concise/render_quoted/render_verbose: display modes
- REGISTRY and helpers: predefined kinds for common request failures
"""

from .general import (
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
)
from .ids import ID_BYTES, IdSource, RandomSourceError, problem_id
from .problem import Problem, as_problem, type_uri
from .render import literal, number, plain, render_concise, render_quoted, render_verbose
from .typed import Category, Detail, Field, Instance, Meta, Resource, Typed, ValidationResult, typed, within_category

__all__ = [
    # Entity
    "Problem", "as_problem", "type_uri",
    # Construction
    "Typed", "typed", "within_category",
    "Detail", "Category", "Instance", "Resource", "Field", "Meta", "ValidationResult",
    # Ids
    "ID_BYTES", "IdSource", "RandomSourceError", "problem_id",
    # Rendering
    "literal", "number", "plain", "render_concise", "render_quoted", "render_verbose",
    # Predefined kinds
    "REGISTRY", "build_registry",
    "BAD_REQUEST", "UNAUTHORIZED", "INVALID_REQUEST", "INVALID_ENCODING", "REQUEST_TOO_LARGE",
    "NO_AUTH_MIDDLEWARE", "INVALID_FILE", "NOT_FOUND", "METHOD_NOT_ALLOWED", "IO_ERROR", "INTERNAL_ERROR",
    # Helpers
    "ok", "missing_payload_error", "invalid_param_type_error", "missing_param_error",
    "invalid_attribute_type_error", "missing_attribute_error", "missing_header_error",
    "invalid_enum_value_error", "invalid_format_error", "invalid_pattern_error",
    "invalid_range_error", "invalid_length_error", "no_auth_middleware", "method_not_allowed_error",
]
