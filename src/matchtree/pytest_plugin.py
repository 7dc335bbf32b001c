"""pytest integration.

Provides an ``asserter`` fixture backed by the running test. ``check_that``
failures are recorded and fail the test once it returns; ``assert_that``
failures stop the test immediately. Either way the explanation tree is the
failure report::

    from matchtree import equal_to

    def test_answer(asserter):
        asserter.check_that(6 * 7, equal_to(42))
"""

from __future__ import annotations

from typing import Any

import pytest

from matchtree.asserter import Asserter


class PytestLogger:
    """Collects asserter output for the current test."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._failed = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def logf(self, format: str, *args: Any) -> None:
        self.lines.append(format % args if args else format)

    def failed(self) -> bool:
        return self._failed

    def fail(self) -> None:
        self._failed = True

    def fail_now(self) -> None:
        self._failed = True
        pytest.fail(self.text or "fail_now() called", pytrace=False)


_LOGGER_KEY = pytest.StashKey[PytestLogger]()


@pytest.fixture
def asserter(request: pytest.FixtureRequest) -> Asserter:
    """An Asserter whose failures fail the requesting test."""
    logger = PytestLogger()
    request.node.stash[_LOGGER_KEY] = logger
    return Asserter(logger)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]):
    outcome = yield
    report = outcome.get_result()
    if call.when != "call" or not report.passed:
        return

    logger = item.stash.get(_LOGGER_KEY, None)
    if logger is None or not logger.failed():
        return

    report.outcome = "failed"
    report.longrepr = logger.text or "asserter marked the test as failed"
