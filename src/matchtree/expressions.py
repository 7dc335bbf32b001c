"""Build matchers from plain data, as read from a YAML check file.

An expression is either a bare name::

    non_nil

or a mapping with exactly one operator key and an optional ``comment``::

    all_of:
      - {greater_than: 0}
      - {less_than: 10}
    comment: "must be a single digit"

The names ``true`` and ``false`` may be left unquoted, in which case YAML
hands them over as booleans.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from matchtree import comparison, containers, reflection, strings
from matchtree.base import Matcher
from matchtree.core import (
    all_of,
    any_of,
    anything,
    deep_equal_to,
    false_,
    is_,
    nil,
    non_nil,
    not_,
    true_,
)
from matchtree.logic import both, either, if_, iff, neither

_NAMED: dict[str, Callable[[], Matcher]] = {
    "anything": anything,
    "true": true_,
    "false": false_,
    "nil": nil,
    "non_nil": non_nil,
    "empty": containers.empty,
}

# Operators taking a literal value.
_VALUE_OPS: dict[str, Callable[[Any], Matcher]] = {
    "equal_to": comparison.equal_to,
    "not_equal_to": comparison.not_equal_to,
    "greater_than": comparison.greater_than,
    "greater_than_or_equal_to": comparison.greater_than_or_equal_to,
    "less_than": comparison.less_than,
    "less_than_or_equal_to": comparison.less_than_or_equal_to,
    "deep_equal_to": deep_equal_to,
}

# Operators taking a string literal.
_STRING_OPS: dict[str, Callable[[str], Matcher]] = {
    "has_prefix": strings.has_prefix,
    "has_suffix": strings.has_suffix,
    "contains": strings.contains,
    "has_pattern": strings.has_pattern,
    "equal_to_ignoring_case": strings.equal_to_ignoring_case,
}

# Operators wrapping one nested expression.
_UNARY_OPS: dict[str, Callable[[Matcher], Matcher]] = {
    "not": not_,
    "is": is_,
    "to_lower": strings.to_lower,
    "to_upper": strings.to_upper,
    "to_string": strings.to_string,
    "len": containers.to_len,
    "any_element": containers.any_element,
    "every_element": containers.every_element,
    "any_map_element": containers.any_map_element,
    "every_map_element": containers.every_map_element,
}

# Operators combining two nested expressions.
_BINARY_OPS: dict[str, Callable[[Matcher, Matcher], Matcher]] = {
    "both": lambda a, b: both(a).and_(b),
    "either": lambda a, b: either(a).or_(b),
    "xor": lambda a, b: either(a).xor(b),
    "neither": lambda a, b: neither(a).nor(b),
    "if_then": lambda a, b: if_(a).then(b),
    "iff": lambda a, b: iff(a).then(b),
}

_NARY_OPS: dict[str, Callable[..., Matcher]] = {
    "all_of": all_of,
    "any_of": any_of,
}

_TYPE_NAMES: dict[str, type] = {
    "bool": bool,
    "int": int,
    "float": float,
    "complex": complex,
    "str": str,
    "bytes": bytes,
    "list": list,
    "tuple": tuple,
    "dict": dict,
    "set": set,
    "none": type(None),
}


def bare_names() -> list[str]:
    """Every matcher that can be written as a bare name."""
    return sorted(_NAMED)


def operator_names() -> list[str]:
    """Every operator key accepted in a mapping expression."""
    return sorted(
        [*_VALUE_OPS, *_STRING_OPS, *_UNARY_OPS, *_BINARY_OPS, *_NARY_OPS, "type"]
    )


def build_matcher(expr: Any) -> Matcher:
    """Build a matcher from a name or a single-operator mapping.

    Raises ValueError for unknown names or operators and for malformed
    arguments.
    """
    # YAML reads unquoted true/false as booleans.
    if isinstance(expr, bool):
        return true_() if expr else false_()
    if isinstance(expr, str):
        factory = _NAMED.get(expr)
        if factory is None:
            raise ValueError(f"Unknown matcher name: '{expr}'")
        return factory()

    if not isinstance(expr, dict) or not expr:
        raise ValueError(f"Matcher expression must be a name or a mapping, got {expr!r}")

    comments = expr.get("comment", [])
    if isinstance(comments, str):
        comments = [comments]
    if not isinstance(comments, list):
        raise ValueError(f"'comment' must be a string or a list, got {comments!r}")

    ops = [k for k in expr if k != "comment"]
    if len(ops) != 1:
        raise ValueError(
            f"Matcher expression must have exactly one operator, got {ops}"
        )

    op = ops[0]
    built = _build_operator(op, expr[op])
    if comments:
        built = built.comment(*comments)
    return built


def _build_operator(op: str, arg: Any) -> Matcher:
    if op in _VALUE_OPS:
        return _VALUE_OPS[op](arg)
    elif op in _STRING_OPS:
        if not isinstance(arg, str):
            raise ValueError(f"'{op}' expects a string, got {arg!r}")
        try:
            return _STRING_OPS[op](arg)
        except re.error as e:
            raise ValueError(f"Invalid pattern for '{op}': {e}") from e
    elif op in _UNARY_OPS:
        return _UNARY_OPS[op](build_matcher(arg))
    elif op in _BINARY_OPS:
        if not isinstance(arg, list) or len(arg) != 2:
            raise ValueError(f"'{op}' expects a list of two expressions, got {arg!r}")
        return _BINARY_OPS[op](build_matcher(arg[0]), build_matcher(arg[1]))
    elif op in _NARY_OPS:
        if not isinstance(arg, list):
            raise ValueError(f"'{op}' expects a list of expressions, got {arg!r}")
        return _NARY_OPS[op](*(build_matcher(each) for each in arg))
    elif op == "type":
        cls = _TYPE_NAMES.get(arg) if isinstance(arg, str) else None
        if cls is None:
            raise ValueError(
                f"Unknown type name: {arg!r} (expected one of {', '.join(_TYPE_NAMES)})"
            )
        return reflection.type_of(cls)
    raise ValueError(f"Unknown matcher operator: '{op}'")
