"""Matchers on the runtime types of values."""

from __future__ import annotations

from typing import Any

from matchtree.base import Matcher, Result, matcherf, resultf
from matchtree.containers import every_element


def to_type(matcher: Matcher) -> Matcher:
    """Applies ``matcher`` to ``type()`` of the input."""

    def match(actual: Any) -> Result:
        actual_type = type(actual)
        outcome = matcher.match(actual_type)
        return resultf(
            outcome.matched, "type() returned %s", actual_type.__name__
        ).with_causes(outcome)

    return matcherf(match, "ToType(%s)", matcher)


def type_of(expected_type: type) -> Matcher:
    """Matches values whose type is exactly ``expected_type`` (no subclasses)."""
    name = expected_type.__name__

    def match(actual: Any) -> Result:
        actual_type = type(actual)
        if actual_type is expected_type:
            return resultf(True, "was of type %s", name)
        return resultf(False, "was a %s, not a %s", actual_type.__name__, name)

    return matcherf(match, "TypeOf[%s]", name)


def same_type_as(example: Any) -> Matcher:
    """Matches any value with exactly the same type as ``example``."""
    return type_of(type(example))


def is_type(expected_type: type) -> Matcher:
    """Matches the type object ``expected_type`` itself."""
    name = expected_type.__name__

    def match(actual: Any) -> Result:
        if actual is expected_type:
            return resultf(True, "was the type %s", name)
        return resultf(False, "[%r] was not the type %s", actual, name)

    return matcherf(match, "IsType[%s]", name)


_BOOL = type_of(bool)
_INT = type_of(int)
_FLOAT = type_of(float)
_COMPLEX = type_of(complex)
_STR = type_of(str)
_BYTES = type_of(bytes)
_NONE_TYPE = type_of(type(None))

_BOOL_TYPE = is_type(bool)
_INT_TYPE = is_type(int)
_FLOAT_TYPE = is_type(float)
_COMPLEX_TYPE = is_type(complex)
_STR_TYPE = is_type(str)
_BYTES_TYPE = is_type(bytes)


def bool_() -> Matcher:
    return _BOOL


def int_() -> Matcher:
    return _INT


def float_() -> Matcher:
    return _FLOAT


def complex_() -> Matcher:
    return _COMPLEX


def str_() -> Matcher:
    return _STR


def bytes_() -> Matcher:
    return _BYTES


def none_type() -> Matcher:
    return _NONE_TYPE


def bool_type() -> Matcher:
    return _BOOL_TYPE


def int_type() -> Matcher:
    return _INT_TYPE


def float_type() -> Matcher:
    return _FLOAT_TYPE


def complex_type() -> Matcher:
    return _COMPLEX_TYPE


def str_type() -> Matcher:
    return _STR_TYPE


def bytes_type() -> Matcher:
    return _BYTES_TYPE


def _container_of(
    container_type: type, element_type_matcher: Matcher, label: str
) -> Matcher:
    elements = every_element(to_type(element_type_matcher))

    def match(actual: Any) -> Result:
        if type(actual) is not container_type:
            return resultf(
                False, "was a %s, not a %s", type(actual).__name__, container_type.__name__
            )
        outcome = elements.match(actual)
        return resultf(
            outcome.matched, "checked element types of %s", container_type.__name__
        ).with_causes(outcome)

    return matcherf(match, "%s[%s]", label, element_type_matcher)


def list_of(element_type_matcher: Matcher) -> Matcher:
    """Matches lists whose elements' types all match ``element_type_matcher``.

    For example ``list_of(int_type())`` matches ``[1, 2]`` but not ``[1, "2"]``.
    """
    return _container_of(list, element_type_matcher, "ListOf")


def tuple_of(element_type_matcher: Matcher) -> Matcher:
    return _container_of(tuple, element_type_matcher, "TupleOf")


def set_of(element_type_matcher: Matcher) -> Matcher:
    return _container_of(set, element_type_matcher, "SetOf")


def dict_of(key_type_matcher: Matcher, value_type_matcher: Matcher) -> Matcher:
    """Matches dicts whose key and value types all match the given matchers."""
    keys = every_element(to_type(key_type_matcher))
    values = every_element(to_type(value_type_matcher))

    def match(actual: Any) -> Result:
        if type(actual) is not dict:
            return resultf(False, "was a %s, not a dict", type(actual).__name__)
        key_outcome = keys.match(list(actual.keys()))
        if not key_outcome.matched:
            return resultf(False, "key types did not match").with_causes(key_outcome)
        value_outcome = values.match(list(actual.values()))
        if not value_outcome.matched:
            return resultf(False, "value types did not match").with_causes(
                key_outcome, value_outcome
            )
        return resultf(True, "key and value types matched").with_causes(
            key_outcome, value_outcome
        )

    return matcherf(match, "DictOf[%s, %s]", key_type_matcher, value_type_matcher)
