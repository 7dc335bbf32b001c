"""Matchers over sequences, sets and mappings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set, Sized
from typing import Any

from matchtree.base import Matcher, Result, matcherf, resultf

_TEXT_TYPES = (str, bytes, bytearray)


def _is_collection(actual: Any) -> bool:
    return isinstance(actual, (Sequence, Set)) and not isinstance(actual, _TEXT_TYPES)


def any_element(matcher: Matcher) -> Matcher:
    """Matches a sequence or set if ``matcher`` matches at least one element.

    Stops at the first matching element. Strings and non-collections never
    match.
    """

    def match(actual: Any) -> Result:
        if not _is_collection(actual):
            return resultf(False, "Was not a sequence: was type %s", type(actual).__name__)
        total = len(actual)
        for index, element in enumerate(actual, start=1):
            outcome = matcher.match(element)
            if outcome.matched:
                return resultf(
                    True, "Matched element %d of %d: %r", index, total, element
                ).with_causes(outcome)
        return resultf(False, "Matched none of the %d elements", total)

    return matcherf(match, "AnyElement[%s]", matcher)


def every_element(matcher: Matcher) -> Matcher:
    """Matches a sequence or set if ``matcher`` matches all of its elements.

    Stops at the first element that does not match.
    """

    def match(actual: Any) -> Result:
        if not _is_collection(actual):
            return resultf(False, "Was not a sequence: was type %s", type(actual).__name__)
        total = len(actual)
        for index, element in enumerate(actual, start=1):
            outcome = matcher.match(element)
            if not outcome.matched:
                return resultf(
                    False, "Failed to match element %d of %d: %r", index, total, element
                ).with_causes(outcome)
        return resultf(True, "Matched all of the %d elements", total)

    return matcherf(match, "EveryElement[%s]", matcher)


def any_map_element(matcher: Matcher) -> Matcher:
    """Matches a mapping if ``matcher`` matches at least one of its values."""

    def match(actual: Any) -> Result:
        if not isinstance(actual, Mapping):
            return resultf(False, "Was not a mapping: was type %s", type(actual).__name__)
        total = len(actual)
        for index, (key, element) in enumerate(actual.items(), start=1):
            outcome = matcher.match(element)
            if outcome.matched:
                return resultf(
                    True,
                    "Matched map element [%d/%d] with key [%r]: %r",
                    index,
                    total,
                    key,
                    element,
                ).with_causes(outcome)
        return resultf(False, "Matched none of the %d map elements", total)

    return matcherf(match, "AnyMapElement[%s]", matcher)


def every_map_element(matcher: Matcher) -> Matcher:
    """Matches a mapping if ``matcher`` matches every one of its values."""

    def match(actual: Any) -> Result:
        if not isinstance(actual, Mapping):
            return resultf(False, "Was not a mapping: was type %s", type(actual).__name__)
        total = len(actual)
        for index, (key, element) in enumerate(actual.items(), start=1):
            outcome = matcher.match(element)
            if not outcome.matched:
                return resultf(
                    False,
                    "Failed to match map element [%d/%d] with key [%r]: %r",
                    index,
                    total,
                    key,
                    element,
                ).with_causes(outcome)
        return resultf(True, "Matched all of the %d map elements", total)

    return matcherf(match, "EveryMapElement[%s]", matcher)


def to_len(matcher: Matcher) -> Matcher:
    """Applies ``matcher`` to ``len()`` of the input."""

    def match(actual: Any) -> Result:
        if not isinstance(actual, Sized):
            return resultf(False, "Can't determine len() for %s", type(actual).__name__)
        length = len(actual)
        outcome = matcher.match(length)
        return resultf(outcome.matched, "len() returned %d", length).with_causes(outcome)

    return matcherf(match, "ToLen[%s]", matcher)


def _match_empty(actual: Any) -> Result:
    if not isinstance(actual, Sized):
        return resultf(False, "Can't determine length of type %s", type(actual).__name__)
    length = len(actual)
    return resultf(length == 0, "len() returned %d", length)


_EMPTY = matcherf(_match_empty, "Empty")


def empty() -> Matcher:
    """Matches any sized input with ``len() == 0``."""
    return _EMPTY
