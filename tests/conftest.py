"""Pytest configuration and fixtures."""

import io
import logging

import pytest

from matchtree import Asserter, WriterLogger

pytest_plugins = ["pytester", "matchtree.pytest_plugin"]


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up matchtree loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("matchtree_")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


class RecordingLogger:
    """In-memory Logger that records every line and failure call."""

    def __init__(self):
        self.lines: list[str] = []
        self.fail_calls = 0
        self.fail_now_calls = 0

    def logf(self, format, *args):
        self.lines.append(format % args if args else format)

    def failed(self):
        return self.fail_calls + self.fail_now_calls > 0

    def fail(self):
        self.fail_calls += 1

    def fail_now(self):
        self.fail_now_calls += 1


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def string_asserter(buffer) -> Asserter:
    """Asserter writing to an in-memory buffer; fail_now is recorded, not raised."""
    calls: list[str] = []
    logger = WriterLogger(buffer, fail_now=lambda: calls.append("fail_now"))
    asserter = Asserter(logger)
    asserter.fail_now_calls = calls
    return asserter
