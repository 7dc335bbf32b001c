"""Tests for the pytest ``asserter`` fixture."""

from matchtree.comparison import equal_to
from matchtree.pytest_plugin import PytestLogger


def test_fixture_passes_matching_checks(asserter):
    r = asserter.check_that(42, equal_to(42))
    assert r.matched
    assert not asserter.failed()


def test_pytest_logger_collects_lines():
    logger = PytestLogger()
    logger.logf("a %s", "b")
    logger.logf("100%")
    assert logger.text == "a b\n100%"
    assert not logger.failed()
    logger.fail()
    assert logger.failed()


def test_check_that_failure_fails_the_test(pytester):
    pytester.makepyfile(
        """
        from matchtree import equal_to

        def test_answer(asserter):
            asserter.check_that(41, equal_to(42).comment("off by one"))
            asserter.check_that(1, equal_to(1))
        """
    )
    result = pytester.runpytest("-p", "matchtree.pytest_plugin")
    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines(
        ["*FAILURE: [[]EqualTo(42)[]] on [[]41[]]*", "*Comment: off by one*"]
    )


def test_assert_that_failure_stops_the_test(pytester):
    pytester.makepyfile(
        """
        from matchtree import equal_to

        reached = []

        def test_answer(asserter):
            asserter.assert_that("different", equal_to("expected"))
            reached.append(True)

        def test_not_reached():
            assert reached == []
        """
    )
    result = pytester.runpytest("-p", "matchtree.pytest_plugin")
    result.assert_outcomes(failed=1, passed=1)
    result.stdout.fnmatch_lines(["*FAILURE: [[]EqualTo('expected')[]] on [[]'different'[]]*"])


def test_passing_checks_pass(pytester):
    pytester.makepyfile(
        """
        from matchtree import all_of, greater_than, less_than

        def test_digit(asserter):
            asserter.check_that(5, all_of(greater_than(0), less_than(10)))
            asserter.check_true(True)
        """
    )
    result = pytester.runpytest("-p", "matchtree.pytest_plugin")
    result.assert_outcomes(passed=1)
