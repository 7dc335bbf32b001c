"""Binary logical combinators built with a two-step builder syntax.

Sub-matchers are always evaluated left to right, and the short-circuiting
combinators never evaluate the second matcher when the first decides::

    both(a).and_(b)      # b only if a matched
    either(a).or_(b)     # b only if a did not match
    either(a).xor(b)     # always both
    neither(a).nor(b)    # b only if a did not match
    if_(a).then(b)       # b only if a matched
    iff(a).then(b)       # always both
"""

from __future__ import annotations

from typing import Any

from matchtree.base import Matcher, Result, matcherf, resultf


class BothClause:
    """Intermediate state in the construction of a Both/And matcher."""

    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher

    def and_(self, matcher2: Matcher) -> Matcher:
        matcher1 = self.matcher

        def match(actual: Any) -> Result:
            result1 = matcher1.match(actual)
            if not result1.matched:
                return resultf(
                    False, "first part of 'Both/And' did not match [%r]", actual
                ).with_causes(result1)
            result2 = matcher2.match(actual)
            if not result2.matched:
                return resultf(
                    False, "second part of 'Both/And' did not match [%r]", actual
                ).with_causes(result1, result2)
            return resultf(
                True, "both parts of 'Both/And' matched [%r]", actual
            ).with_causes(result1, result2)

        return matcherf(match, "both [%s] and [%s]", matcher1, matcher2)


class EitherClause:
    """Intermediate state in the construction of an Either/Or or Either/Xor matcher."""

    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher

    def or_(self, matcher2: Matcher) -> Matcher:
        """Matches when either matcher matches; skips the second if the first did."""
        matcher1 = self.matcher

        def match(actual: Any) -> Result:
            result1 = matcher1.match(actual)
            if result1.matched:
                return resultf(
                    True, "first part of 'Either/Or' matched [%r]", actual
                ).with_causes(result1)
            result2 = matcher2.match(actual)
            if result2.matched:
                return resultf(
                    True, "second part of 'Either/Or' matched [%r]", actual
                ).with_causes(result1, result2)
            return resultf(
                False, "neither part of 'Either/Or' matched [%r]", actual
            ).with_causes(result1, result2)

        return matcherf(match, "either [%s] or [%s]", matcher1, matcher2)

    def xor(self, matcher2: Matcher) -> Matcher:
        """Matches when exactly one matcher matches. Never short-circuits."""
        matcher1 = self.matcher

        def match(actual: Any) -> Result:
            result1 = matcher1.match(actual)
            result2 = matcher2.match(actual)
            if result1.matched:
                if result2.matched:
                    return resultf(
                        False, "both parts of 'Either/Xor' matched [%r]", actual
                    ).with_causes(result1, result2)
                return resultf(
                    True, "only the first part of 'Either/Xor' matched [%r]", actual
                ).with_causes(result1, result2)
            if result2.matched:
                return resultf(
                    True, "only the second part of 'Either/Xor' matched [%r]", actual
                ).with_causes(result1, result2)
            return resultf(
                False, "neither part of 'Either/Xor' matched [%r]", actual
            ).with_causes(result1, result2)

        return matcherf(match, "either [%s] xor [%s]", matcher1, matcher2)


class NeitherClause:
    """Intermediate state in the construction of a Neither/Nor matcher."""

    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher

    def nor(self, matcher2: Matcher) -> Matcher:
        """Matches when neither matcher matches.

        Logically equivalent to ``both(not_(a)).and_(not_(b))``.
        """
        matcher1 = self.matcher

        def match(actual: Any) -> Result:
            result1 = matcher1.match(actual)
            if result1.matched:
                return resultf(
                    False, "first part of 'Neither/Nor' matched [%r]", actual
                ).with_causes(result1)
            result2 = matcher2.match(actual)
            if result2.matched:
                return resultf(
                    False, "second part of 'Neither/Nor' matched [%r]", actual
                ).with_causes(result1, result2)
            return resultf(
                True, "neither part of 'Neither/Nor' matched [%r]", actual
            ).with_causes(result1, result2)

        return matcherf(match, "neither [%s] nor [%s]", matcher1, matcher2)


class IfClause:
    """Intermediate state in the construction of an If/Then matcher."""

    def __init__(self, antecedent: Matcher) -> None:
        self.antecedent = antecedent

    def then(self, consequent: Matcher) -> Matcher:
        """Only fails when the antecedent matches and the consequent doesn't.

        Logically equivalent to ``either(not_(a)).or_(b)``.
        """
        antecedent = self.antecedent

        def match(actual: Any) -> Result:
            result1 = antecedent.match(actual)
            if not result1.matched:
                return resultf(
                    True, "'If/Then' matched because antecedent failed on [%r]", actual
                ).with_causes(result1)
            result2 = consequent.match(actual)
            if result2.matched:
                return resultf(
                    True,
                    "'If/Then' matched because consequent matched on [%r]",
                    actual,
                ).with_causes(result1, result2)
            return resultf(False, "'If/Then' failed on [%r]", actual).with_causes(
                result1, result2
            )

        return matcherf(match, "if [%s] then [%s]", antecedent, consequent)


class IffClause:
    """Intermediate state in the construction of an If-and-only-if/Then matcher."""

    def __init__(self, antecedent: Matcher) -> None:
        self.antecedent = antecedent

    def then(self, consequent: Matcher) -> Matcher:
        """Matches when both or neither of the two matchers match."""
        antecedent = self.antecedent

        def match(actual: Any) -> Result:
            result1 = antecedent.match(actual)
            result2 = consequent.match(actual)
            if result1.matched:
                if result2.matched:
                    return resultf(
                        True,
                        "Matched because both parts of 'Iff/Then' matched on [%r]",
                        actual,
                    ).with_causes(result1, result2)
                return resultf(
                    False,
                    "Failed because only the first part of 'Iff/Then' matched on [%r]",
                    actual,
                ).with_causes(result1, result2)
            if result2.matched:
                return resultf(
                    False,
                    "Failed because only the second part of 'Iff/Then' matched on [%r]",
                    actual,
                ).with_causes(result1, result2)
            return resultf(
                True,
                "Matched because neither part of 'Iff/Then' matched on [%r]",
                actual,
            ).with_causes(result1, result2)

        return matcherf(
            match, "if and only if [%s] then [%s]", antecedent, consequent
        )


def both(matcher: Matcher) -> BothClause:
    """First part of ``both(a).and_(b)``."""
    return BothClause(matcher)


def either(matcher: Matcher) -> EitherClause:
    """First part of ``either(a).or_(b)`` or ``either(a).xor(b)``."""
    return EitherClause(matcher)


def neither(matcher: Matcher) -> NeitherClause:
    """First part of ``neither(a).nor(b)``."""
    return NeitherClause(matcher)


def if_(antecedent: Matcher) -> IfClause:
    """First part of ``if_(a).then(b)``."""
    return IfClause(antecedent)


def iff(antecedent: Matcher) -> IffClause:
    """First part of ``iff(a).then(b)``."""
    return IffClause(antecedent)


if_and_only_if = iff
