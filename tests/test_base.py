"""Tests for descriptions, results, matchers and the callable adapter."""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import Any, Optional, Union

import pytest

from matchtree.base import (
    Description,
    Matcher,
    MatcherConstructionError,
    Result,
    describe,
    inspect_callable,
    matcher,
    matcherf,
    normalize_match_function,
    result,
    resultf,
)
from matchtree.core import anything


# ---------------------------------------------------------------------------
# Description / Result
# ---------------------------------------------------------------------------


def test_describe_renders_lazily():
    class Counter:
        renders = 0

        def __repr__(self):
            Counter.renders += 1
            return "counter"

    d = describe("value %r", Counter())
    assert Counter.renders == 0
    assert str(d) == "value counter"
    assert Counter.renders == 1


def test_description_without_args_is_verbatim():
    assert str(describe("100% sure")) == "100% sure"
    assert str(Description("%v stays")) == "%v stays"


def test_format_into_writes_rendered_text():
    sink = io.StringIO()
    describe("%s and %s", "a", "b").format_into(sink)
    resultf(True, "ok %d", 1).format_into(sink)
    assert sink.getvalue() == "a and bok 1"


def test_result_renders_its_description():
    r = result(False, describe("was %r", 3))
    assert not r.matched
    assert str(r) == "was 3"
    assert r.causes == ()
    assert r.matcher is None


def test_result_coerces_matched_to_bool():
    assert result(1, "x").matched is True
    assert result(0, "x").matched is False


@pytest.mark.parametrize("description", ["", None, describe("")])
def test_result_rejects_empty_description(description):
    with pytest.raises(ValueError, match="must not be empty"):
        result(False, description)


def test_with_causes_keeps_non_empty_description():
    r = resultf(True, "ok").with_causes(resultf(False, "inner"))
    assert str(r) == "ok"


def test_with_causes_replaces_and_does_not_mutate():
    a = resultf(True, "a")
    b = resultf(False, "b")
    parent = resultf(False, "parent")
    updated = parent.with_causes(a, b)
    assert updated.causes == (a, b)
    assert parent.causes == ()
    assert updated.with_causes().causes == ()


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", [0, "x", None, [1, 2], {"k": "v"}])
def test_match_attaches_matcher_and_value(value):
    m = anything()
    r = m.match(value)
    assert r.matcher is m
    assert r.value is value


def test_matcher_renders_description():
    m = matcherf(lambda v: True, "IsGood(%d)", 3)
    assert str(m) == "IsGood(3)"
    sink = io.StringIO()
    m.format_into(sink)
    assert sink.getvalue() == "IsGood(3)"


def test_comment_returns_new_matcher_and_keeps_original():
    m = anything()
    commented = m.comment("first")
    twice = commented.comment("second", 3)
    assert m.comments == ()
    assert commented.comments == ("first",)
    assert twice.comments == ("first", "second", 3)
    assert twice is not commented
    assert str(twice) == str(m)
    assert twice.match(1).matched


def test_match_reports_unusable_function_output():
    m = Matcher("broken", lambda v: None)
    r = m.match(1)
    assert not r.matched
    assert "expected Result or bool" in str(r)


def test_operators_build_logic_combinators():
    yes = anything()
    no = ~anything()
    assert str(no) == "Not[Anything]"
    assert (yes & yes).match(0).matched
    assert not (yes & no).match(0).matched
    assert (no | yes).match(0).matched
    assert not (yes ^ yes).match(0).matched
    assert (yes ^ no).match(0).matched


# ---------------------------------------------------------------------------
# Callable adapter
# ---------------------------------------------------------------------------


def test_adapter_str_to_bool():
    def is_bar(s: str) -> bool:
        return s == "bar"

    m = matcher(is_bar, "IsBar")
    assert m.match("bar").matched
    assert not m.match("foo").matched
    mismatch = m.match(39)
    assert not mismatch.matched
    assert "Could not apply" in str(mismatch)
    assert "int" in str(mismatch)


def test_adapter_does_not_call_function_on_type_mismatch():
    calls = []

    def record(s: str) -> bool:
        calls.append(s)
        return True

    m = matcher(record, "Record")
    assert not m.match(1.5).matched
    assert calls == []
    assert m.match("ok").matched
    assert calls == ["ok"]


def test_adapter_requires_type_identity():
    def positive(n: int) -> bool:
        return n > 0

    m = matcher(positive, "Positive")
    assert m.match(3).matched
    # bool is a subclass of int, but not the same type
    assert not m.match(True).matched


def test_adapter_accepts_abstract_types_by_isinstance():
    def non_empty(items: Sequence) -> bool:
        return len(items) > 0

    m = matcher(non_empty, "NonEmpty")
    assert m.match([1]).matched
    assert m.match((1,)).matched
    assert not m.match([]).matched
    assert "Could not apply" in str(m.match(5))


def test_adapter_accepts_unions_and_optional():
    def small(n: Union[int, float]) -> bool:
        return n < 10

    def missing(v: Optional[str]) -> bool:
        return v is None

    assert matcher(small, "Small").match(2.5).matched
    assert not matcher(small, "Small").match("2").matched
    assert matcher(missing, "Missing").match(None).matched
    assert not matcher(missing, "Missing").match("x").matched


def test_adapter_pep604_union():
    def short(v: str | bytes) -> bool:
        return len(v) < 3

    m = matcher(short, "Short")
    assert m.match(b"ab").matched
    assert m.match("ab").matched
    assert not m.match(12).matched


def test_adapter_described_bool():
    def check(v: int) -> tuple[bool, str]:
        return v == 4, f"{v} vs 4"

    r = matcher(check, "IsFour").match(5)
    assert not r.matched
    assert str(r) == "5 vs 4"


def test_adapter_described_bool_with_blank_description_uses_default():
    m = matcher(lambda v: (v == 4, ""), "IsFour")
    assert str(m.match(4)) == "Matched"
    assert str(m.match(5)) == "Did not match"


def test_adapter_unannotated_function_interprets_output():
    m = matcher(lambda v: v == 1, "IsOne")
    assert m.match(1).matched
    assert str(m.match(1)) == "Matched"
    assert str(m.match(2)) == "Did not match"


def test_adapter_varargs_function():
    def any_truthy(*args):
        return bool(args[0])

    assert matcher(any_truthy, "Truthy").match(1).matched


def test_adapter_returns_canonical_function_unchanged():
    def canonical(value: Any) -> Result:
        return resultf(True, "ok")

    assert normalize_match_function(canonical) is canonical


def test_adapter_optional_extra_parameters_are_allowed():
    def with_default(value: int, limit: int = 3) -> bool:
        return value < limit

    assert matcher(with_default, "Below").match(2).matched


@pytest.mark.parametrize(
    "fn",
    [
        lambda: True,
        lambda a, b: True,
    ],
)
def test_adapter_rejects_wrong_arity(fn):
    with pytest.raises(MatcherConstructionError, match="must have one input"):
        matcher(fn, "bad")


def test_adapter_rejects_required_keyword_only():
    def needs_key(value, *, key):
        return True

    with pytest.raises(MatcherConstructionError, match="keyword-only"):
        matcher(needs_key, "bad")


def test_adapter_rejects_wrong_return_annotation():
    def returns_int(value: int) -> int:
        return value

    with pytest.raises(MatcherConstructionError, match="must return Result or bool"):
        matcher(returns_int, "bad")
    # MatcherConstructionError is a TypeError
    with pytest.raises(TypeError):
        matcher(returns_int, "bad")


def test_adapter_rejects_non_callable():
    with pytest.raises(MatcherConstructionError, match="not callable"):
        matcher(42, "bad")


def test_inspect_callable_reports_shape():
    def fn(s: str) -> bool:
        return True

    shape = inspect_callable(fn)
    assert shape.concrete == (str,)
    assert shape.abstract == ()
    assert shape.returns == "bool"
    assert not shape.accepts_anything
    assert shape.input_mismatch("ok") is None
    assert shape.input_mismatch(1) is not None


def test_callable_object_is_adapted():
    class Above:
        def __init__(self, floor):
            self.floor = floor

        def __call__(self, n: int) -> bool:
            return n > self.floor

    m = matcher(Above(3), "Above3")
    assert m.match(4).matched
    assert not m.match(2).matched
    assert not m.match("4").matched
