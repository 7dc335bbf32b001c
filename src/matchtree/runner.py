from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from matchtree.asserter import AssertionAborted, using_writer
from matchtree.config import CheckConfig, CheckFile


@dataclass
class CheckOutcome:
    """Result of running one check from a check file.

    Attributes:
        name: The check's name.
        passed: False if the check failed its asserter.
        skipped: True if an earlier ``assert`` check stopped the run.
        output: Everything the asserter logged for this check.
    """

    name: str
    passed: bool
    skipped: bool = False
    output: str = ""


class CheckRunner:
    """Runs every check in a check file through its own Asserter."""

    def __init__(
        self,
        config: CheckFile,
        logger: logging.Logger | None = None,
        check_filter: str | None = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.check_filter = check_filter

    def execute(self) -> list[CheckOutcome]:
        checks = self.config.checks
        if self.check_filter:
            checks = [c for c in checks if c.name == self.check_filter]

        self.logger.debug(f"Running {len(checks)} check(s)")
        outcomes: list[CheckOutcome] = []
        aborted_by: str | None = None

        for check in checks:
            if aborted_by is not None:
                self.logger.info(f"Skipping '{check.name}': '{aborted_by}' failed")
                outcomes.append(CheckOutcome(name=check.name, passed=False, skipped=True))
                continue

            outcome = self._run_check(check)
            outcomes.append(outcome)
            if check.mode == "assert" and not outcome.passed:
                aborted_by = check.name

        passed = sum(1 for o in outcomes if o.passed)
        self.logger.info(f"{passed}/{len(outcomes)} check(s) passed")
        return outcomes

    def _run_check(self, check: CheckConfig) -> CheckOutcome:
        buffer = io.StringIO()
        asserter = using_writer(buffer)
        matcher = check.matcher()
        self.logger.debug(f"Check '{check.name}' ({check.mode}): {matcher}")

        try:
            if check.mode == "assert":
                asserter.assert_that(check.value, matcher)
            elif check.mode == "log":
                asserter.log_unless(check.value, matcher)
            else:
                asserter.check_that(check.value, matcher)
        except AssertionAborted:
            self.logger.debug(f"Check '{check.name}' aborted the run")

        passed = not asserter.failed()
        if passed:
            self.logger.info(f"PASS {check.name}")
        else:
            self.logger.info(f"FAIL {check.name}")
        return CheckOutcome(name=check.name, passed=passed, output=buffer.getvalue())
