from __future__ import annotations

from pathlib import Path

from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from matchtree.runner import CheckOutcome


def write_junit(
    path: Path, outcomes: list[CheckOutcome], suite_name: str = "matchtree"
) -> Path:
    """Write one suite with one test case per check outcome, return path."""
    xml = JUnitXml()
    suite = TestSuite(suite_name)

    for outcome in outcomes:
        case = TestCase(outcome.name)
        case.classname = suite_name
        if outcome.skipped:
            case.result = [Skipped("skipped after an earlier assert failed")]
        elif not outcome.passed:
            first_line = outcome.output.splitlines()[0] if outcome.output else ""
            failure = Failure(first_line)
            failure.text = outcome.output
            case.result = [failure]
        if outcome.output:
            case.system_out = outcome.output
        suite.add_testcase(case)

    # Use append (not +=) to preserve suite attributes
    xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
