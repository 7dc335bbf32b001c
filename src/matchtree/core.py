"""Primitive matchers, unary decorators and n-ary short-circuit combinators."""

from __future__ import annotations

import weakref
from typing import Any, Callable

from matchtree.base import (
    Matcher,
    Result,
    describe,
    inspect_callable,
    matcherf,
    result,
    resultf,
)


def _always(actual: Any) -> Result:
    return resultf(True, "always matches")


def _match_true(actual: Any) -> Result:
    if isinstance(actual, bool):
        if actual:
            return resultf(True, "was true")
        return resultf(False, "was not true")
    return resultf(False, "[%r] was not bool", actual)


def _match_false(actual: Any) -> Result:
    if isinstance(actual, bool):
        if not actual:
            return resultf(True, "was false")
        return resultf(False, "was not false")
    return resultf(False, "[%r] was not bool", actual)


def _match_matched(actual: Any) -> Result:
    if isinstance(actual, Result):
        if actual.matched:
            return resultf(True, "was a matching result").with_causes(actual)
        return resultf(False, "was a result that did not match").with_causes(actual)
    return resultf(False, "[%r] was not a result", actual)


def _match_did_not_match(actual: Any) -> Result:
    if isinstance(actual, Result):
        if actual.matched:
            return resultf(False, "was a matching result").with_causes(actual)
        return resultf(True, "was a result that did not match").with_causes(actual)
    return resultf(False, "[%r] was not a result", actual)


def is_nil(actual: Any) -> bool:
    """True for None and for a weak reference whose referent is gone."""
    if actual is None:
        return True
    if isinstance(actual, weakref.ref):
        return actual() is None
    return False


def _match_nil(actual: Any) -> Result:
    if is_nil(actual):
        return resultf(True, "was nil")
    return resultf(False, "[%r] was not nil", actual)


def _match_non_nil(actual: Any) -> Result:
    if is_nil(actual):
        return resultf(False, "was nil")
    return resultf(True, "[%r] was not nil", actual)


_ANYTHING = matcherf(_always, "Anything")
_TRUE = matcherf(_match_true, "True")
_FALSE = matcherf(_match_false, "False")
_MATCHED = matcherf(_match_matched, "Matched")
_DID_NOT_MATCH = matcherf(_match_did_not_match, "DidNotMatch")
_NIL = matcherf(_match_nil, "Nil")
_NON_NIL = matcherf(_match_non_nil, "NonNil")


def anything() -> Matcher:
    """Matches any input value."""
    return _ANYTHING


def true_() -> Matcher:
    """Matches the boolean value True (and nothing else)."""
    return _TRUE


def false_() -> Matcher:
    """Matches the boolean value False (and nothing else)."""
    return _FALSE


def matched() -> Matcher:
    """Matches a Result that matched."""
    return _MATCHED


def did_not_match() -> Matcher:
    """Matches a Result that did not match."""
    return _DID_NOT_MATCH


def nil() -> Matcher:
    """Matches None, or a dead weak reference.

    Note that this is *not* equivalent to ``deep_equal_to(None)``.
    """
    return _NIL


def non_nil() -> Matcher:
    return _NON_NIL


def not_(matcher: Matcher) -> Matcher:
    """Matches exactly when ``matcher`` does not."""

    def match(actual: Any) -> Result:
        inner = matcher.match(actual)
        return result(not inner.matched, inner.description).with_causes(inner)

    return matcherf(match, "Not[%s]", matcher)


def is_(matcher: Matcher) -> Matcher:
    """Decorates ``matcher`` for readability, without adding a level of causes."""

    def match(actual: Any) -> Result:
        inner = matcher.match(actual)
        return result(inner.matched, inner.description).with_causes(*inner.causes)

    return matcherf(match, "Is[%s]", matcher)


def deep_equal_to(expected: Any) -> Matcher:
    """Matches values of exactly the same type that compare equal to ``expected``.

    For ``==`` semantics across numeric types, see ``comparison.equal_to``.
    """

    def match(actual: Any) -> Result:
        if type(actual) is type(expected) and actual == expected:
            return resultf(True, "was deeply equal to [%r]", expected)
        return resultf(False, "[%r] was not deeply equal to [%r]", actual, expected)

    return matcherf(match, "DeepEqualTo[%r]", expected)


def _numbered(kind: str, matchers: tuple[Matcher, ...]) -> Any:
    template = " ".join(f"[#{index}: %s]" for index in range(1, len(matchers) + 1))
    return describe(kind + template, *matchers)


def all_of(*matchers: Matcher) -> Matcher:
    """Matches when every matcher matches, stopping at the first that doesn't."""
    total = len(matchers)

    def match(actual: Any) -> Result:
        results: list[Result] = []
        for index, each in enumerate(matchers, start=1):
            outcome = each.match(actual)
            results.append(outcome)
            if not outcome.matched:
                return resultf(
                    False, "Failed matcher %d of %d: [%s]", index, total, each
                ).with_causes(*results)
        return resultf(True, "Matched all %d matchers", total).with_causes(*results)

    return Matcher(_numbered("AllOf", matchers), match)


def any_of(*matchers: Matcher) -> Matcher:
    """Matches when any matcher matches, stopping at the first that does."""
    total = len(matchers)

    def match(actual: Any) -> Result:
        results: list[Result] = []
        for index, each in enumerate(matchers, start=1):
            outcome = each.match(actual)
            results.append(outcome)
            if outcome.matched:
                return resultf(
                    True, "Matched on matcher %d of %d: [%s]", index, total, each
                ).with_causes(*results)
        return resultf(False, "Matched none of the %d matchers", total).with_causes(
            *results
        )

    return Matcher(_numbered("AnyOf", matchers), match)


def applying(function: Callable[..., Any], name: str) -> Callable[[Matcher], Matcher]:
    """Return a decorator that applies ``function`` before matching.

    For example::

        to_length = applying(len, "len")
        has_length_three = to_length(is_(equal_to(3)))
        has_length_three.match("yes").matched  # True
    """
    shape = inspect_callable(function, check_return=False)

    def compose(matcher: Matcher) -> Matcher:
        def match(actual: Any) -> Result:
            mismatch = shape.input_mismatch(actual)
            if mismatch is not None:
                return mismatch
            out = function(actual)
            inner = matcher.match(out)
            return resultf(inner.matched, "%s(%r) = %r", name, actual, out).with_causes(
                inner
            )

        return matcherf(match, "%s[%s]", name, matcher)

    return compose


def panic_when_applying(function_or_matcher: Any, name: str) -> Matcher:
    """Matches values that make the given function (or matcher) raise."""
    if isinstance(function_or_matcher, Matcher):
        shape = None
        apply = function_or_matcher.match
    else:
        shape = inspect_callable(function_or_matcher, check_return=False)
        apply = function_or_matcher

    def match(actual: Any) -> Result:
        if shape is not None:
            mismatch = shape.input_mismatch(actual)
            if mismatch is not None:
                return mismatch
        try:
            apply(actual)
        except Exception as exc:
            return resultf(True, "Panicked: %r", exc)
        return resultf(False, "Did not panic")

    return matcherf(match, "PanicWhenApplying[%s]", name)
