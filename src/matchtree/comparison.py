"""Ordering and equality matchers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from matchtree.base import Description, Matcher, Result, describe, matcherf, result


class Comparison(str, Enum):
    LESS_THAN = "less_than"
    ORDERED_EQUAL_TO = "ordered_equal_to"
    GREATER_THAN = "greater_than"
    UNORDERED_EQUAL_TO = "unordered_equal_to"
    UNORDERED_NOT_EQUAL_TO = "unordered_not_equal_to"
    INCOMPARABLE_TYPES = "incomparable_types"

    def describe(self, x: Any, y: Any) -> Description:
        if self is Comparison.LESS_THAN:
            return describe("%r was less than %r", x, y)
        if self is Comparison.ORDERED_EQUAL_TO:
            return describe("%r was equal to %r", x, y)
        if self is Comparison.GREATER_THAN:
            return describe("%r was greater than %r", x, y)
        if self is Comparison.UNORDERED_EQUAL_TO:
            return describe("%r was (unordered) equal to %r", x, y)
        if self is Comparison.UNORDERED_NOT_EQUAL_TO:
            return describe("%r was (unordered) not equal to %r", x, y)
        return describe(
            "types %s and %s cannot be compared", type(x).__name__, type(y).__name__
        )


def compare(x: Any, y: Any) -> Comparison:
    """Classify how ``x`` relates to ``y``.

    Values without an ordering fall back to ``==`` when they share a type;
    otherwise they are incomparable. NaN compares as unordered-not-equal.
    """
    try:
        if x < y:
            return Comparison.LESS_THAN
        if x > y:
            return Comparison.GREATER_THAN
        if x == y:
            return Comparison.ORDERED_EQUAL_TO
        return Comparison.UNORDERED_NOT_EQUAL_TO
    except TypeError:
        return _compare_unordered(x, y)


def _compare_unordered(x: Any, y: Any) -> Comparison:
    if type(x) is not type(y):
        return Comparison.INCOMPARABLE_TYPES
    if x == y:
        return Comparison.UNORDERED_EQUAL_TO
    return Comparison.UNORDERED_NOT_EQUAL_TO


def _comparing(
    name: str, expected: Any, accepted: frozenset[Comparison]
) -> Matcher:
    def match(actual: Any) -> Result:
        c = compare(actual, expected)
        return result(c in accepted, c.describe(actual, expected))

    return matcherf(match, "%s(%r)", name, expected)


def greater_than(expected: Any) -> Matcher:
    """Matches values greater than ``expected`` (using ``>``)."""
    return _comparing("GreaterThan", expected, frozenset({Comparison.GREATER_THAN}))


def greater_than_or_equal_to(expected: Any) -> Matcher:
    return _comparing(
        "GreaterThanOrEqualTo",
        expected,
        frozenset({Comparison.GREATER_THAN, Comparison.ORDERED_EQUAL_TO}),
    )


def less_than(expected: Any) -> Matcher:
    """Matches values less than ``expected`` (using ``<``)."""
    return _comparing("LessThan", expected, frozenset({Comparison.LESS_THAN}))


def less_than_or_equal_to(expected: Any) -> Matcher:
    return _comparing(
        "LessThanOrEqualTo",
        expected,
        frozenset({Comparison.LESS_THAN, Comparison.ORDERED_EQUAL_TO}),
    )


_EQUAL = frozenset({Comparison.ORDERED_EQUAL_TO, Comparison.UNORDERED_EQUAL_TO})


def equal_to(expected: Any) -> Matcher:
    """Matches values equal to ``expected`` (using ``==``)."""
    return _comparing("EqualTo", expected, _EQUAL)


def not_equal_to(expected: Any) -> Matcher:
    return _comparing("NotEqualTo", expected, frozenset(Comparison) - _EQUAL)
