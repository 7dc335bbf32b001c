"""Core data structures: descriptions, results and matchers.

Every matcher in the package is built from the three types defined here.
A ``Matcher`` pairs a ``Description`` with a match function; applying it
to a value yields a ``Result`` that explains why it did or did not match,
together with the sub-results that justify that answer.
"""

from __future__ import annotations

import abc
import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TextIO

MatchFunction = Callable[[Any], "Result"]


class MatcherConstructionError(TypeError):
    """Raised when a callable cannot be adapted into a match function."""


# --------------------------------------------------------------------
# Description
# --------------------------------------------------------------------


@dataclass(frozen=True)
class Description:
    """A format template and its arguments, rendered on demand.

    Uses ``%``-style placeholders, like ``logging``. A template without
    arguments is rendered verbatim.
    """

    format: str
    args: tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.format
        return self.format % self.args

    def format_into(self, sink: TextIO) -> None:
        sink.write(str(self))


def describe(format: str, *args: Any) -> Description:
    """Create a lazily rendered description."""
    return Description(format, args)


# --------------------------------------------------------------------
# Result
# --------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Result:
    """Self-describing outcome of applying a matcher to a value.

    Attributes:
        matched: Whether the value met the matcher's criteria.
        description: Why it did (or did not) match.
        matcher: The matcher that produced this result. Attached by
            ``Matcher.match``; None for results that were never dispatched.
        value: The input that produced this result.
        causes: Sub-results consulted while deciding, in evaluation order.
    """

    matched: bool
    description: Any
    matcher: Matcher | None = None
    value: Any = None
    causes: tuple[Result, ...] = ()

    def __post_init__(self) -> None:
        if _is_blank(self.description):
            raise ValueError("Result description must not be empty")

    def __str__(self) -> str:
        return str(self.description)

    def format_into(self, sink: TextIO) -> None:
        sink.write(str(self))

    def with_causes(self, *causes: Result) -> Result:
        """Return a copy of this result whose causes are exactly ``causes``."""
        return dataclasses.replace(self, causes=tuple(causes))

    def with_matcher_and_value(self, matcher: Matcher, value: Any) -> Result:
        """Return a copy of this result attributed to ``matcher`` and ``value``."""
        return dataclasses.replace(self, matcher=matcher, value=value)


def _is_blank(description: Any) -> bool:
    if isinstance(description, Description):
        return not description.format
    return description is None or (isinstance(description, str) and not description)


def result(matched: bool, description: Any) -> Result:
    return Result(matched=bool(matched), description=description)


def resultf(matched: bool, format: str, *args: Any) -> Result:
    return result(matched, describe(format, *args))


# --------------------------------------------------------------------
# Callable inspection
# --------------------------------------------------------------------


class ReturnShape(str, Enum):
    RESULT = "result"
    BOOL = "bool"
    DESCRIBED_BOOL = "described_bool"
    UNKNOWN = "unknown"


# Annotation strings we can still resolve when get_type_hints() fails.
_KNOWN_ANNOTATIONS: dict[str, Any] = {
    "Any": Any,
    "object": object,
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
    "Result": Result,
}


@dataclass(frozen=True)
class CallableShape:
    """What a user-supplied callable expects and returns.

    ``concrete`` types must match the input's type exactly; ``abstract``
    types (ABCs) accept any instance. Both empty means any input is accepted.
    """

    name: str
    concrete: tuple[type, ...] = ()
    abstract: tuple[type, ...] = ()
    returns: ReturnShape = ReturnShape.UNKNOWN

    @property
    def accepts_anything(self) -> bool:
        return not self.concrete and not self.abstract

    def input_mismatch(self, actual: Any) -> Result | None:
        """Return a non-matching result if ``actual`` can't be passed in."""
        if self.accepts_anything:
            return None
        if type(actual) in self.concrete:
            return None
        if any(isinstance(actual, cls) for cls in self.abstract):
            return None
        expected = " | ".join(
            cls.__name__ for cls in (*self.concrete, *self.abstract)
        )
        return resultf(
            False,
            "Could not apply %s to input of type %s: expected %s",
            self.name,
            type(actual).__name__,
            expected,
        )


def _callable_name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _type_hints(fn: Any, signature: inspect.Signature) -> dict[str, Any]:
    source = fn if inspect.isroutine(fn) else getattr(type(fn), "__call__", fn)
    try:
        return typing.get_type_hints(source)
    except Exception:
        # Unresolvable forward references; fall back to what we can read.
        hints: dict[str, Any] = {}
        for name, param in signature.parameters.items():
            hints[name] = _fallback_annotation(param.annotation)
        hints["return"] = _fallback_annotation(signature.return_annotation)
        return hints


def _fallback_annotation(annotation: Any) -> Any:
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        return _KNOWN_ANNOTATIONS.get(annotation)
    return annotation


def _accepted_types(hint: Any) -> tuple[list[type], list[type]] | None:
    """Split an input annotation into (concrete, abstract) types.

    Returns None when the annotation places no constraint on the input.
    """
    if hint is None or hint is Any or hint is object:
        return None
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        concrete: list[type] = []
        abstract: list[type] = []
        for arg in typing.get_args(hint):
            sub = _accepted_types(arg)
            if sub is None:
                return None
            concrete.extend(sub[0])
            abstract.extend(sub[1])
        return concrete, abstract
    if origin is not None:
        hint = origin
    if not isinstance(hint, type):
        return None
    if getattr(hint, "_is_protocol", False):
        return None
    if isinstance(hint, abc.ABCMeta) and inspect.isabstract(hint):
        return [], [hint]
    if hint.__module__ in ("collections.abc", "numbers"):
        return [], [hint]
    return [hint], []


def _return_shape(fn: Any, hint: Any) -> ReturnShape:
    if hint is None:
        return ReturnShape.UNKNOWN
    if hint is Result:
        return ReturnShape.RESULT
    if hint is bool:
        return ReturnShape.BOOL
    if typing.get_origin(hint) is tuple:
        args = typing.get_args(hint)
        if len(args) == 2 and args[0] is bool:
            return ReturnShape.DESCRIBED_BOOL
    raise MatcherConstructionError(
        f"Can't use {_callable_name(fn)} as a matcher function: "
        f"must return Result or bool, was annotated {hint!r}"
    )


def inspect_callable(fn: Any, check_return: bool = True) -> CallableShape:
    """Validate that ``fn`` takes exactly one input and describe its shape.

    Raises MatcherConstructionError for any other shape.
    """
    name = _callable_name(fn)
    if not callable(fn):
        raise MatcherConstructionError(f"Can't use {fn!r} as a matcher: not callable")
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature; assume a single argument.
        return CallableShape(name=name)

    params = list(signature.parameters.values())
    positional = [
        p
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    required = [p for p in positional if p.default is p.empty]
    variadic = next((p for p in params if p.kind is p.VAR_POSITIONAL), None)
    required_keywords = [
        p for p in params if p.kind is p.KEYWORD_ONLY and p.default is p.empty
    ]

    if required_keywords:
        raise MatcherConstructionError(
            f"Can't use {name} as a matcher: keyword-only parameter "
            f"'{required_keywords[0].name}' has no default"
        )
    if len(required) == 1:
        input_param = required[0]
    elif not positional and variadic is not None:
        input_param = variadic
    else:
        raise MatcherConstructionError(
            f"Can't use {name} as a matcher: must have one input, had {len(required)}"
        )

    hints = _type_hints(fn, signature)
    returns = ReturnShape.UNKNOWN
    if check_return:
        returns = _return_shape(fn, hints.get("return"))

    accepted = _accepted_types(hints.get(input_param.name))
    if accepted is None:
        return CallableShape(name=name, returns=returns)
    concrete, abstract = accepted
    return CallableShape(
        name=name,
        concrete=tuple(concrete),
        abstract=tuple(abstract),
        returns=returns,
    )


def _interpret_output(name: str, out: Any) -> Result:
    if isinstance(out, Result):
        return out
    if isinstance(out, bool):
        return resultf(True, "Matched") if out else resultf(False, "Did not match")
    if isinstance(out, tuple) and len(out) == 2 and isinstance(out[0], bool):
        if _is_blank(out[1]):
            return _interpret_output(name, out[0])
        return resultf(out[0], "%s", out[1])
    return resultf(False, "Error: expected Result or bool from %s, got %r", name, out)


def normalize_match_function(fn: Any) -> MatchFunction:
    """Adapt ``fn`` into the canonical ``value -> Result`` form.

    Accepts callables with one input (or a bare ``*args``) returning a
    Result, a bool, or a ``(bool, description)`` pair. Inputs whose type
    doesn't match the parameter annotation produce a non-matching result
    without calling ``fn``.
    """
    shape = inspect_callable(fn)
    if shape.accepts_anything and shape.returns is ReturnShape.RESULT:
        return fn

    def match(actual: Any) -> Result:
        mismatch = shape.input_mismatch(actual)
        if mismatch is not None:
            return mismatch
        return _interpret_output(shape.name, fn(actual))

    return match


# --------------------------------------------------------------------
# Matcher
# --------------------------------------------------------------------


class Matcher:
    """Self-describing criteria that may match (or not match) a value.

    Prefer the ``matcher``/``matcherf`` factories to constructing this
    directly; both accept any callable shape ``normalize_match_function``
    understands.
    """

    __slots__ = ("_description", "_match", "_comments")

    def __init__(self, description: Any, fn: Callable[..., Any]) -> None:
        self._description = description
        self._match = normalize_match_function(fn)
        self._comments: tuple[Any, ...] = ()

    @property
    def description(self) -> Any:
        return self._description

    @property
    def comments(self) -> tuple[Any, ...]:
        return self._comments

    def __str__(self) -> str:
        return str(self._description)

    def __repr__(self) -> str:
        return f"Matcher({str(self)!r})"

    def format_into(self, sink: TextIO) -> None:
        sink.write(str(self))

    def match(self, value: Any) -> Result:
        """Test ``value`` against this matcher's criteria."""
        raw = self._match(value)
        if not isinstance(raw, Result):
            raise TypeError(
                f"match function for [{self}] returned {type(raw).__name__}, not Result"
            )
        return raw.with_matcher_and_value(self, value)

    def comment(self, *comments: Any) -> Matcher:
        """Return a *new* matcher like this one with ``comments`` appended."""
        clone = object.__new__(Matcher)
        clone._description = self._description
        clone._match = self._match
        clone._comments = self._comments + comments
        return clone

    def __invert__(self) -> Matcher:
        from matchtree.core import not_

        return not_(self)

    def __and__(self, other: Matcher) -> Matcher:
        from matchtree.logic import both

        return both(self).and_(other)

    def __or__(self, other: Matcher) -> Matcher:
        from matchtree.logic import either

        return either(self).or_(other)

    def __xor__(self, other: Matcher) -> Matcher:
        from matchtree.logic import either

        return either(self).xor(other)


def matcher(fn: Callable[..., Any], description: Any) -> Matcher:
    return Matcher(description, fn)


def matcherf(fn: Callable[..., Any], format: str, *args: Any) -> Matcher:
    return Matcher(describe(format, *args), fn)
