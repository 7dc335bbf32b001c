"""Composable, self-describing matchers with explanation trees."""

from matchtree.asserter import (
    AssertionAborted,
    Asserter,
    Logger,
    LoggingLogger,
    NullAsserter,
    WriterLogger,
    safe_match,
    that_does_nothing,
    using,
    using_file_named,
    using_logging,
    using_stderr,
    using_stdout,
    using_writer,
    using_writer_and_fail_now,
)
from matchtree.base import (
    Description,
    Matcher,
    MatcherConstructionError,
    Result,
    describe,
    matcher,
    matcherf,
    normalize_match_function,
    result,
    resultf,
)
from matchtree.comparison import (
    equal_to,
    greater_than,
    greater_than_or_equal_to,
    less_than,
    less_than_or_equal_to,
    not_equal_to,
)
from matchtree.core import (
    all_of,
    any_of,
    anything,
    applying,
    deep_equal_to,
    did_not_match,
    false_,
    is_,
    matched,
    nil,
    non_nil,
    not_,
    panic_when_applying,
    true_,
)
from matchtree.logic import both, either, if_, if_and_only_if, iff, neither

__all__ = [
    "AssertionAborted",
    "Asserter",
    "Description",
    "Logger",
    "LoggingLogger",
    "Matcher",
    "MatcherConstructionError",
    "NullAsserter",
    "Result",
    "WriterLogger",
    "all_of",
    "any_of",
    "anything",
    "applying",
    "both",
    "deep_equal_to",
    "describe",
    "did_not_match",
    "either",
    "equal_to",
    "false_",
    "greater_than",
    "greater_than_or_equal_to",
    "if_",
    "if_and_only_if",
    "iff",
    "is_",
    "less_than",
    "less_than_or_equal_to",
    "matched",
    "matcher",
    "matcherf",
    "neither",
    "nil",
    "non_nil",
    "normalize_match_function",
    "not_",
    "not_equal_to",
    "panic_when_applying",
    "result",
    "resultf",
    "safe_match",
    "that_does_nothing",
    "true_",
    "using",
    "using_file_named",
    "using_logging",
    "using_stderr",
    "using_stdout",
    "using_writer",
    "using_writer_and_fail_now",
]
