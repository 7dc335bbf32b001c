"""Applies matchers to values and reports the results to a test logger.

An ``Asserter`` evaluates a matcher behind a guard that turns exceptions
into failing results, renders the result tree when the operation calls
for it, and then marks the test failed (or aborts it) through its
``Logger``. All pass/fail state lives in the logger.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Protocol

from matchtree.base import Matcher, Result, resultf
from matchtree.core import false_, nil, non_nil, true_

_log = logging.getLogger(__name__)


class AssertionAborted(AssertionError):
    """Raised by the default ``fail_now`` hook to abort the current test."""


class Logger(Protocol):
    """What an Asserter needs from a test harness.

    Loggers may also define ``errorf(format, *args)``, used for the tree of
    a failing check, and ``close()``.
    """

    def logf(self, format: str, *args: Any) -> None: ...

    def failed(self) -> bool: ...

    def fail(self) -> None: ...

    def fail_now(self) -> None: ...


def _abort() -> None:
    raise AssertionAborted("Invoked fail_now()")


class WriterLogger:
    """Logger that writes lines to a text or binary stream.

    Binary streams receive UTF-8. ``fail_now`` marks the logger failed and
    then calls the given hook, which raises AssertionAborted by default.
    """

    def __init__(self, writer: Any, fail_now: Callable[[], None] = _abort) -> None:
        self.writer = writer
        self._fail_now = fail_now
        self._failed = False

    def logf(self, format: str, *args: Any) -> None:
        text = format % args if args else format
        if not text.endswith("\n"):
            text += "\n"
        if isinstance(self.writer, (io.RawIOBase, io.BufferedIOBase)):
            self.writer.write(text.encode("utf-8"))
        else:
            self.writer.write(text)
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    def failed(self) -> bool:
        return self._failed

    def fail(self) -> None:
        self._failed = True

    def fail_now(self) -> None:
        self._failed = True
        self._fail_now()

    def close(self) -> None:
        self.writer.close()


class LoggingLogger:
    """Logger that forwards each line to a stdlib ``logging.Logger``.

    Lines go out at ``level`` until the logger has failed, then at ERROR.
    An Asserter writes the tree of a failing check through ``errorf``, so
    the explanation itself is logged at ERROR.
    """

    def __init__(
        self,
        logger: logging.Logger,
        level: int = logging.INFO,
        fail_now: Callable[[], None] | None = None,
    ) -> None:
        self.logger = logger
        self.level = level
        self._fail_now = fail_now or _abort
        self._failed = False

    def logf(self, format: str, *args: Any) -> None:
        level = logging.ERROR if self._failed else self.level
        self.logger.log(level, format, *args)

    def errorf(self, format: str, *args: Any) -> None:
        self.logger.log(logging.ERROR, format, *args)

    def failed(self) -> bool:
        return self._failed

    def fail(self) -> None:
        self._failed = True

    def fail_now(self) -> None:
        self._failed = True
        self._fail_now()


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception as exc:
        return f"<unrepresentable {type(value).__name__}: {exc!r}>"


def _safe_str(obj: Any) -> str:
    try:
        return str(obj)
    except Exception as exc:
        return f"<unrenderable {type(obj).__name__}: {exc!r}>"


def safe_match(value: Any, matcher: Matcher) -> Result:
    """Apply ``matcher`` to ``value``, converting an exception into a failing result."""
    try:
        return matcher.match(value)
    except Exception as exc:
        _log.debug(
            f"Matcher [{_safe_str(matcher)}] raised on {_safe_repr(value)}", exc_info=True
        )
        return resultf(False, "Panic: %r", exc).with_matcher_and_value(matcher, value)


class Asserter:
    """Applies matchers to values, writing explanations to a Logger."""

    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def failed(self) -> bool:
        return self.logger.failed()

    def fail(self) -> None:
        """Mark the test failed and continue."""
        self.logger.fail()

    def fail_now(self) -> None:
        """Mark the test failed and invoke the logger's abort action."""
        self.logger.fail_now()

    def close(self) -> None:
        """Close the logger's sink, if it has one."""
        close = getattr(self.logger, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Asserter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def log_result(self, result: Result, failing: bool = False) -> None:
        """Write ``result`` and its causes to the logger as an indented tree.

        With ``failing`` set, lines go to the logger's ``errorf`` when it
        has one. Values and descriptions that cannot be rendered are shown
        inline instead of raising.
        """
        status = "MATCHED" if result.matched else "FAILURE"
        self._emit(
            failing,
            "%s: [%s] on [%s]",
            status,
            _safe_str(result.matcher),
            _safe_repr(result.value),
        )
        self._log_node(result, 0, failing)

    def _log_node(self, result: Result, depth: int, failing: bool) -> None:
        indent = "\t" * (depth + 1)
        matcher = result.matcher
        if matcher is not None:
            self._emit(failing, "%sMatcher: [%s]", indent, _safe_str(matcher))
            for comment in matcher.comments:
                self._emit(failing, "%sComment: %s", indent, _safe_str(comment))
        self._emit(failing, "%sBecause: [%s]", indent, _safe_str(result))
        for cause in result.causes:
            self._log_node(cause, depth + 1, failing)

    def _emit(self, failing: bool, format: str, *args: Any) -> None:
        errorf = getattr(self.logger, "errorf", None) if failing else None
        if errorf is not None:
            errorf(format, *args)
        else:
            self.logger.logf(format, *args)

    def log_when(self, value: Any, matcher: Matcher) -> Result:
        """Describe the result when ``matcher`` matches ``value``."""
        outcome = safe_match(value, matcher)
        if outcome.matched:
            self.log_result(outcome)
        return outcome

    def log_unless(self, value: Any, matcher: Matcher) -> Result:
        """Describe the result when ``matcher`` does not match ``value``."""
        outcome = safe_match(value, matcher)
        if not outcome.matched:
            self.log_result(outcome)
        return outcome

    def fail_when(self, value: Any, matcher: Matcher) -> Result:
        outcome = safe_match(value, matcher)
        if outcome.matched:
            try:
                self.log_result(outcome, failing=True)
            finally:
                self.fail()
        return outcome

    def fail_unless(self, value: Any, matcher: Matcher) -> Result:
        outcome = safe_match(value, matcher)
        if not outcome.matched:
            try:
                self.log_result(outcome, failing=True)
            finally:
                self.fail()
        return outcome

    def fail_now_when(self, value: Any, matcher: Matcher) -> Result:
        outcome = safe_match(value, matcher)
        if outcome.matched:
            try:
                self.log_result(outcome, failing=True)
            finally:
                self.fail_now()
        return outcome

    def fail_now_unless(self, value: Any, matcher: Matcher) -> Result:
        outcome = safe_match(value, matcher)
        if not outcome.matched:
            try:
                self.log_result(outcome, failing=True)
            finally:
                self.fail_now()
        return outcome

    def check_that(self, value: Any, matcher: Matcher) -> Result:
        """Equivalent to ``fail_unless``."""
        return self.fail_unless(value, matcher)

    def check_true(self, value: Any, *comments: Any) -> Result:
        return self.check_that(value, true_().comment(*comments))

    def check_false(self, value: Any, *comments: Any) -> Result:
        return self.check_that(value, false_().comment(*comments))

    def check_nil(self, value: Any, *comments: Any) -> Result:
        return self.check_that(value, nil().comment(*comments))

    def check_non_nil(self, value: Any, *comments: Any) -> Result:
        return self.check_that(value, non_nil().comment(*comments))

    def assert_that(self, value: Any, matcher: Matcher) -> Result:
        """Equivalent to ``fail_now_unless``."""
        return self.fail_now_unless(value, matcher)

    def assert_true(self, value: Any, *comments: Any) -> Result:
        return self.assert_that(value, true_().comment(*comments))

    def assert_false(self, value: Any, *comments: Any) -> Result:
        return self.assert_that(value, false_().comment(*comments))

    def assert_nil(self, value: Any, *comments: Any) -> Result:
        return self.assert_that(value, nil().comment(*comments))

    def assert_non_nil(self, value: Any, *comments: Any) -> Result:
        return self.assert_that(value, non_nil().comment(*comments))


class NullAsserter:
    """An asserter for which every operation is a no-op.

    Matchers passed to it are never invoked.
    """

    def failed(self) -> bool:
        return False

    def fail(self) -> None:
        pass

    def fail_now(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> NullAsserter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        pass

    def log_result(self, result: Result, failing: bool = False) -> None:
        pass

    def log_when(self, value: Any, matcher: Matcher) -> None:
        pass

    def log_unless(self, value: Any, matcher: Matcher) -> None:
        pass

    def fail_when(self, value: Any, matcher: Matcher) -> None:
        pass

    def fail_unless(self, value: Any, matcher: Matcher) -> None:
        pass

    def fail_now_when(self, value: Any, matcher: Matcher) -> None:
        pass

    def fail_now_unless(self, value: Any, matcher: Matcher) -> None:
        pass

    def check_that(self, value: Any, matcher: Matcher) -> None:
        pass

    def check_true(self, value: Any, *comments: Any) -> None:
        pass

    def check_false(self, value: Any, *comments: Any) -> None:
        pass

    def check_nil(self, value: Any, *comments: Any) -> None:
        pass

    def check_non_nil(self, value: Any, *comments: Any) -> None:
        pass

    def assert_that(self, value: Any, matcher: Matcher) -> None:
        pass

    def assert_true(self, value: Any, *comments: Any) -> None:
        pass

    def assert_false(self, value: Any, *comments: Any) -> None:
        pass

    def assert_nil(self, value: Any, *comments: Any) -> None:
        pass

    def assert_non_nil(self, value: Any, *comments: Any) -> None:
        pass


def using(logger: Logger) -> Asserter:
    """Create an Asserter that reports to ``logger``."""
    return Asserter(logger)


def using_writer(writer: Any) -> Asserter:
    """Create an Asserter over a stream whose ``fail_now`` raises AssertionAborted."""
    return using_writer_and_fail_now(writer, _abort)


def using_writer_and_fail_now(writer: Any, fail_now: Callable[[], None]) -> Asserter:
    return Asserter(WriterLogger(writer, fail_now))


def using_stdout() -> Asserter:
    return using_writer(sys.stdout)


def using_stderr() -> Asserter:
    return using_writer(sys.stderr)


def using_file_named(filename: str | Path) -> Asserter:
    """Create an Asserter that appends to the named file.

    The asserter owns the file: close it with ``close()`` or use it as a
    context manager.
    """
    return using_writer(open(filename, "a", encoding="utf-8"))


def using_logging(logger: logging.Logger | None = None, level: int = logging.INFO) -> Asserter:
    """Create an Asserter that writes through the stdlib logging system."""
    if logger is None:
        logger = logging.getLogger("matchtree")
    return Asserter(LoggingLogger(logger, level=level))


def that_does_nothing() -> NullAsserter:
    return NullAsserter()
