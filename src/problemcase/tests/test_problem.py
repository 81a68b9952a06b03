"""Tests for the Problem entity: merge, as_problem and plain-data conversion."""

from __future__ import annotations

import copy
import dataclasses
import pickle

import pytest

from problemcase import (
    BAD_REQUEST,
    INTERNAL_ERROR,
    INVALID_REQUEST,
    NOT_FOUND,
    Meta,
    Problem,
    as_problem,
    invalid_range_error,
    typed,
    within_category,
)

UNAVAILABLE = typed("unavailable", 503)


# ═════════════════════════════════════════════════════════════════════════════
# Merge - status/title reconciliation
# ═════════════════════════════════════════════════════════════════════════════


def test_merge_below_500_becomes_bad_request() -> None:
    m = BAD_REQUEST("a").merge(NOT_FOUND("b"))
    assert (m.status, m.title, m.category) == (400, "bad_request", "merged")
    assert m.type == "https://example.com/errors/merged/bad_request"


def test_merge_500_or_above_becomes_internal_error() -> None:
    m = BAD_REQUEST("a").merge(UNAVAILABLE("b"))
    assert (m.status, m.title, m.category) == (500, "internal_error", "merged")
    assert m.type == "https://example.com/errors/merged/internal_error"


def test_merge_matching_kinds_keeps_identity() -> None:
    kind = within_category("orders", "invalid_order", 422)
    m = kind("a").merge(kind("b"))
    assert (m.status, m.title, m.category) == (422, "invalid_order", "orders")
    assert m.type == "https://example.com/errors/orders/invalid_order"


def test_merge_same_status_different_title_reconciles() -> None:
    m = BAD_REQUEST("a").merge(INVALID_REQUEST("b"))
    assert (m.status, m.title, m.category) == (400, "bad_request", "merged")


# ═════════════════════════════════════════════════════════════════════════════
# Merge - structure
# ═════════════════════════════════════════════════════════════════════════════


def test_merge_joins_details() -> None:
    assert BAD_REQUEST("a").merge(BAD_REQUEST("b")).detail == "a; b"


def test_merge_with_empty_detail_keeps_left() -> None:
    bare = Problem(id="x", title="bad_request", status=400)
    assert BAD_REQUEST("a").merge(bare).detail == "a"


def test_merge_flattens() -> None:
    a, b, c = BAD_REQUEST("a"), NOT_FOUND("b"), INVALID_REQUEST("c")
    m = a.merge(b).merge(c)
    assert len(m.merged) == 3
    assert all(x is y for x, y in zip(m.merged, (a, b, c)))


def test_merge_flattens_on_both_sides() -> None:
    a, b, c, d = (BAD_REQUEST(s) for s in "abcd")
    m = a.merge(b).merge(c.merge(d))
    assert [p.detail for p in m.merged] == ["a", "b", "c", "d"]


def test_merge_resets_meta_and_issues_fresh_id() -> None:
    a = BAD_REQUEST("a", Meta("k", 1))
    b = BAD_REQUEST("b")
    m = a.merge(b)
    assert m.meta == {"merged": True}
    assert m.id not in (a.id, b.id)
    assert a.meta == {"k": 1}


def test_merge_concatenates_causes() -> None:
    a, b = BAD_REQUEST("a"), INTERNAL_ERROR(ValueError("b"))
    m = a.merge(b)
    assert list(m.causes) == [*a.causes, *b.causes]


def test_merge_does_not_mutate_inputs() -> None:
    a, b = BAD_REQUEST("a"), NOT_FOUND("b")
    a.merge(b)
    assert (a.status, a.title, a.detail, a.merged) == (400, "bad_request", "a", ())
    assert (b.status, b.title, b.detail, b.merged) == (404, "not_found", "b", ())


def test_merge_none_returns_self() -> None:
    a = BAD_REQUEST("a")
    assert a.merge(None) is a


def test_merge_foreign_error_equals_merge_as_problem() -> None:
    a = BAD_REQUEST("a")
    direct = a.merge(ValueError("boom"))
    via = a.merge(as_problem(ValueError("boom")))
    fields = ("status", "title", "category", "type", "detail", "meta")
    assert [getattr(direct, f) for f in fields] == [getattr(via, f) for f in fields]
    assert len(direct.merged) == len(via.merged) == 2


def test_merge_with_injected_id_source(zero_source) -> None:
    m = BAD_REQUEST("a").merge(BAD_REQUEST("b"), id_source=zero_source)
    assert m.id == "AAAAAAAA"


# ═════════════════════════════════════════════════════════════════════════════
# Accessors and conversion
# ═════════════════════════════════════════════════════════════════════════════


def test_error_without_detail_is_title() -> None:
    assert Problem(id="x", title="t", status=400).error() == "t"


def test_service_error_accessors() -> None:
    p = NOT_FOUND("gone")
    assert p.response_status() == 404
    assert p.token() == p.id


def test_as_problem_passthrough() -> None:
    p = NOT_FOUND("gone")
    assert as_problem(p) is p


def test_as_problem_wraps_foreign_error() -> None:
    err = OSError("disk on fire")
    p = as_problem(err)
    assert (p.status, p.title, p.detail) == (500, "internal_error", "disk on fire")
    assert p.wrapped is err


def test_to_dict_shape() -> None:
    p = within_category("general", "missing_param", 400)("missing id", Meta("attempt", 2))
    data = p.to_dict()

    assert {k: data[k] for k in ("title", "status", "detail", "category")} == {
        "title": "missing_param",
        "status": 400,
        "detail": "missing id",
        "category": "general",
    }
    assert data["meta"] == {"attempt": 2}
    assert "instance" not in data
    assert data["causes"][-1]["message"] == "missing id"
    assert set(data["causes"][-1]["stacktrace"][0]) == {"file", "func"}


def test_to_dict_nests_merged() -> None:
    data = BAD_REQUEST("a").merge(NOT_FOUND("b")).to_dict()
    assert [m["title"] for m in data["merged"]] == ["bad_request", "not_found"]


def test_type_base_uri_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PROBLEMCASE_TYPE_BASE_URI", "https://errors.test/")
    assert within_category("c", "t", 400)().type == "https://errors.test/c/t"


# ═════════════════════════════════════════════════════════════════════════════
# Immutability and copying
# ═════════════════════════════════════════════════════════════════════════════


def _fields(p: Problem) -> tuple[object, ...]:
    return (
        p.id,
        p.title,
        p.status,
        p.detail,
        p.category,
        p.validation_result,
        [(c.message, [(f.function, f.line) for f in c.stack_trace]) for c in p.causes],
    )


@pytest.mark.parametrize(
    "clone",
    [lambda p: pickle.loads(pickle.dumps(p)), copy.copy, copy.deepcopy],
    ids=["pickle", "copy", "deepcopy"],
)
def test_problem_survives_copying(clone) -> None:
    p = invalid_range_error("age", 5, 18, True)
    restored = clone(p)
    assert isinstance(restored, Problem)
    assert _fields(restored) == _fields(p)
    assert str(restored) == str(p)


def test_pickled_wrapper_keeps_cause() -> None:
    outer = INTERNAL_ERROR(NOT_FOUND("gone"))
    restored = pickle.loads(pickle.dumps(outer))
    assert restored.wrapped.title == "not_found"
    assert restored.__cause__ is restored.wrapped
    assert len(restored.causes) == len(outer.causes)


def test_fields_are_read_only() -> None:
    p = NOT_FOUND("gone")
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.detail = "x"
    with pytest.raises(AttributeError):
        del p.title
    assert p.detail == "gone"


def test_exception_bookkeeping_stays_writable() -> None:
    p = NOT_FOUND("gone")
    p.add_note("while loading")
    p.__traceback__ = None
    with pytest.raises(Problem) as info:
        raise p
    assert info.value.__notes__ == ["while loading"]
    assert info.value.__traceback__ is not None
