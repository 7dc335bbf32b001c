"""String matchers.

Matchers that only make sense for text are written as functions of a
``str`` argument, so non-string input is reported as a type mismatch
rather than raising.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from matchtree.base import Matcher, Result, matcherf, resultf

# How much context to show around prefixes, suffixes and substrings.
_EXTRA = 8


def to_string(matcher: Matcher) -> Matcher:
    """Applies ``matcher`` to ``str()`` of the input."""

    def match(actual: Any) -> Result:
        s = str(actual)
        outcome = matcher.match(s)
        return resultf(outcome.matched, "str() returned %r", s).with_causes(outcome)

    return matcherf(match, "ToString(%s)", matcher)


def to_repr(matcher: Matcher) -> Matcher:
    """Applies ``matcher`` to ``repr()`` of the input."""

    def match(actual: Any) -> Result:
        s = repr(actual)
        outcome = matcher.match(s)
        return resultf(outcome.matched, "repr() returned %r", s).with_causes(outcome)

    return matcherf(match, "ToRepr(%s)", matcher)


def to_lower(matcher: Matcher) -> Matcher:
    def match(s: str) -> Result:
        lower = s.lower()
        outcome = matcher.match(lower)
        return resultf(outcome.matched, "lower() is %r", lower).with_causes(outcome)

    return matcherf(match, "ToLower(%s)", matcher)


def to_upper(matcher: Matcher) -> Matcher:
    def match(s: str) -> Result:
        upper = s.upper()
        outcome = matcher.match(upper)
        return resultf(outcome.matched, "upper() is %r", upper).with_causes(outcome)

    return matcherf(match, "ToUpper(%s)", matcher)


def to_len(matcher: Matcher) -> Matcher:
    """Applies ``matcher`` to the length of a string input."""

    def match(s: str) -> Result:
        length = len(s)
        outcome = matcher.match(length)
        return resultf(outcome.matched, "length is %d", length).with_causes(outcome)

    return matcherf(match, "ToLen(%s)", matcher)


def equal_to_ignoring_case(expected: str) -> Matcher:
    folded = expected.casefold()

    def match(actual: str) -> Result:
        if actual.casefold() == folded:
            return resultf(True, "%r matches %r (ignoring case)", actual, expected)
        return resultf(False, "%r differs from %r (ignoring case)", actual, expected)

    return matcherf(match, "EqualToIgnoringCase(%r)", expected)


def has_prefix(prefix: str) -> Matcher:
    """Matches strings that begin with ``prefix``."""
    max_length = len(prefix) + _EXTRA

    def match(s: str) -> Result:
        continued = ""
        if len(s) > max_length:
            s, continued = s[:max_length], "..."
        if s.startswith(prefix):
            return resultf(True, "%r%s starts with %r", s, continued, prefix)
        return resultf(False, "%r%s does not start with %r", s, continued, prefix)

    return matcherf(match, "HasPrefix(%r)", prefix)


def has_suffix(suffix: str) -> Matcher:
    """Matches strings that end with ``suffix``."""
    max_length = len(suffix) + _EXTRA

    def match(s: str) -> Result:
        continued = ""
        if len(s) > max_length:
            continued, s = "...", s[len(s) - max_length :]
        if s.endswith(suffix):
            return resultf(True, "%s%r ends with %r", continued, s, suffix)
        return resultf(False, "%s%r does not end with %r", continued, s, suffix)

    return matcherf(match, "HasSuffix(%r)", suffix)


def contains(substring: str) -> Matcher:
    """Matches strings that contain ``substring``."""

    def match(s: str) -> Result:
        found_start = s.find(substring)
        if found_start < 0:
            return resultf(
                False, "substring %r does not appear in %r", substring, s
            )
        found_end = found_start + len(substring)
        start, end = found_start - _EXTRA, found_end + _EXTRA
        prefix = suffix = ""
        if start <= 0:
            start = 0
        else:
            prefix = "..."
        if end >= len(s):
            end = len(s)
        else:
            suffix = "..."
        return resultf(
            True,
            "substring %r appears in \"%s%s[%s]%s%s\"",
            substring,
            prefix,
            s[start:found_start],
            substring,
            s[found_end:end],
            suffix,
        )

    return matcherf(match, "Contains(%r)", substring)


def has_pattern(pattern: str) -> Matcher:
    """Matches strings in which the regular expression ``pattern`` is found."""
    regex = re.compile(pattern)

    def match(s: str) -> Result:
        found = regex.search(s)
        if found is not None:
            start, end = found.span()
            return resultf(
                True,
                "pattern %r matched substring[%d:%d]=%r",
                pattern,
                start,
                end,
                found.group(0),
            )
        return resultf(False, "pattern %r not found in %r", pattern, s)

    return matcherf(match, "HasPattern[%r]", pattern)


def each_pattern(pattern: str) -> Callable[[Matcher], Matcher]:
    """Applies a matcher to every occurrence of ``pattern``.

    Short-circuits on the first occurrence that fails. For example,
    ``each_pattern("q.")(equal_to("qu"))`` matches ``"quick quack mq"``
    but not ``"quick qs for mq"``.
    """
    return each_pattern_group(pattern, 0)


def each_pattern_group(pattern: str, group: int) -> Callable[[Matcher], Matcher]:
    """Like ``each_pattern``, but applies the matcher to one capture group."""
    regex = re.compile(pattern)
    if group < 0 or group > regex.groups:
        raise ValueError(
            f"Illegal group #{group}: pattern '{pattern}' has only {regex.groups} groups"
        )

    def compose(matcher: Matcher) -> Matcher:
        def match(s: str) -> Result:
            occurrences = list(regex.finditer(s))
            if not occurrences:
                return resultf(True, "No occurrences of pattern %r", pattern)
            total = len(occurrences)
            for index, found in enumerate(occurrences, start=1):
                start, end = found.span(group)
                substring = found.group(group) or ""
                outcome = matcher.match(substring)
                if not outcome.matched:
                    return resultf(
                        False,
                        "did not match substring[%d:%d]=%r, occurrence #%d (of %d) of pattern %r",
                        start,
                        end,
                        substring,
                        index,
                        total,
                        pattern,
                    ).with_causes(outcome)
            if group:
                return resultf(
                    True,
                    "Matched every occurrence (all %d) of pattern %r, group %d",
                    total,
                    pattern,
                    group,
                )
            return resultf(
                True, "Matched every occurrence (all %d) of pattern %r", total, pattern
            )

        if group:
            return matcherf(
                match, "EachPatternGroup[%r, %d][%s]", pattern, group, matcher
            )
        return matcherf(match, "EachPattern[%r][%s]", pattern, matcher)

    return compose


def any_pattern(pattern: str) -> Callable[[Matcher], Matcher]:
    """Applies a matcher to occurrences of ``pattern`` until one matches.

    For example, ``any_pattern("x.")(equal_to("xy"))`` matches
    ``"six sax are sexy"`` but not ``"pox pix are pixelated"``.
    """
    regex = re.compile(pattern)

    def compose(matcher: Matcher) -> Matcher:
        def match(s: str) -> Result:
            occurrences = list(regex.finditer(s))
            if not occurrences:
                return resultf(False, "No occurrences of pattern %r", pattern)
            total = len(occurrences)
            for index, found in enumerate(occurrences, start=1):
                start, end = found.span()
                outcome = matcher.match(found.group(0))
                if outcome.matched:
                    return resultf(
                        True,
                        "matched substring[%d:%d]=%r, occurrence #%d (of %d) of pattern %r",
                        start,
                        end,
                        found.group(0),
                        index,
                        total,
                        pattern,
                    ).with_causes(outcome)
            return resultf(
                False,
                "Did not match any occurrence (of %d) of pattern %r",
                total,
                pattern,
            )

        return matcherf(match, "AnyPattern[%r][%s]", pattern, matcher)

    return compose


def first_instance_of(pattern: str) -> Callable[[Matcher], Matcher]:
    """Applies a matcher to the first occurrence of ``pattern``.

    ``first_instance_of("h.s")(equal_to("his"))`` matches ``"hers and his"``
    but neither ``"just hers"`` nor ``"has chisel"``.
    """
    regex = re.compile(pattern)

    def compose(matcher: Matcher) -> Matcher:
        def match(s: str) -> Result:
            found = regex.search(s)
            if found is None:
                return resultf(False, "No occurrences of pattern %r", pattern)
            start, end = found.span()
            outcome = matcher.match(found.group(0))
            return resultf(
                outcome.matched,
                "Found substring[%d:%d]=%r for pattern %r",
                start,
                end,
                found.group(0),
                pattern,
            ).with_causes(outcome)

        return matcherf(match, "FirstInstanceOf[%r][%s]", pattern, matcher)

    return compose
