"""Tests for the check runner."""

import logging

import pytest

from matchtree.asserter import Asserter
from matchtree.config import CheckFile
from matchtree.runner import CheckOutcome, CheckRunner


@pytest.fixture
def check_file() -> CheckFile:
    return CheckFile(
        checks=[
            {"name": "passes", "value": 3, "expect": {"equal_to": 3}},
            {
                "name": "fails",
                "value": "different",
                "expect": {"equal_to": "expected"},
                "comments": ["should be expected"],
            },
            {"name": "logged", "value": 1, "expect": {"equal_to": 2}, "mode": "log"},
        ]
    )


def test_runner_returns_one_outcome_per_check(check_file):
    outcomes = CheckRunner(check_file).execute()
    assert [o.name for o in outcomes] == ["passes", "fails", "logged"]
    assert [o.passed for o in outcomes] == [True, False, True]
    assert not any(o.skipped for o in outcomes)


def test_runner_captures_failure_tree(check_file):
    outcomes = CheckRunner(check_file).execute()
    assert outcomes[0].output == ""
    failed = outcomes[1].output
    assert failed.startswith("FAILURE: [EqualTo('expected')] on ['different']")
    assert "\tComment: should be expected" in failed


def test_log_mode_records_without_failing(check_file):
    logged = CheckRunner(check_file).execute()[2]
    assert logged.passed
    assert "FAILURE: [EqualTo(2)] on [1]" in logged.output


def test_assert_failure_skips_remaining_checks():
    config = CheckFile(
        checks=[
            {"name": "gate", "value": 0, "expect": {"greater_than": 0}, "mode": "assert"},
            {"name": "after", "value": 1, "expect": "anything"},
        ]
    )
    outcomes = CheckRunner(config).execute()
    assert outcomes[0] == CheckOutcome(
        name="gate", passed=False, output=outcomes[0].output
    )
    assert outcomes[1] == CheckOutcome(name="after", passed=False, skipped=True)


def test_assert_mode_uses_assert_that(mocker):
    spy = mocker.spy(Asserter, "assert_that")
    config = CheckFile(
        checks=[{"name": "gate", "value": 1, "expect": "anything", "mode": "assert"}]
    )
    outcomes = CheckRunner(config).execute()
    assert outcomes[0].passed
    assert spy.call_count == 1


def test_check_filter(check_file):
    outcomes = CheckRunner(check_file, check_filter="fails").execute()
    assert [o.name for o in outcomes] == ["fails"]


def test_runner_logs_progress(check_file, caplog):
    with caplog.at_level(logging.DEBUG, logger="matchtree.runner"):
        CheckRunner(check_file).execute()
    assert "PASS passes" in caplog.text
    assert "FAIL fails" in caplog.text
    assert "2/3 check(s) passed" in caplog.text
