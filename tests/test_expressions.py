"""Tests for building matchers from plain data."""

import pytest
import yaml

from matchtree.expressions import build_matcher, operator_names


@pytest.mark.parametrize(
    "expr,value,expected",
    [
        ("anything", object(), True),
        ("true", True, True),
        ("false", True, False),
        ("nil", None, True),
        ("non_nil", None, False),
        ("empty", [], True),
        ({"equal_to": 3}, 3.0, True),
        ({"not_equal_to": 3}, 4, True),
        ({"greater_than": 3}, 4, True),
        ({"less_than_or_equal_to": 3}, 4, False),
        ({"deep_equal_to": [1, 2]}, [1, 2], True),
        ({"deep_equal_to": 1}, 1.0, False),
        ({"has_prefix": "ab"}, "abc", True),
        ({"has_suffix": "bc"}, "abc", True),
        ({"contains": "b"}, "abc", True),
        ({"has_pattern": r"^\d+$"}, "123", True),
        ({"equal_to_ignoring_case": "ABC"}, "abc", True),
        ({"to_lower": {"equal_to": "abc"}}, "ABC", True),
        ({"to_upper": {"equal_to": "ABC"}}, "abc", True),
        ({"to_string": {"equal_to": "12"}}, 12, True),
        ({"len": {"equal_to": 2}}, [1, 2], True),
        ({"any_element": {"equal_to": 2}}, [1, 2], True),
        ({"every_element": {"greater_than": 1}}, [1, 2], False),
        ({"any_map_element": {"equal_to": 2}}, {"a": 2}, True),
        ({"every_map_element": "non_nil"}, {"a": None}, False),
        ({"type": "int"}, 1, True),
        ({"type": "none"}, None, True),
        ({"type": "int"}, True, False),
        ({"not": "nil"}, 1, True),
        ({"is": {"equal_to": 1}}, 1, True),
    ],
)
def test_build_matcher(expr, value, expected):
    assert build_matcher(expr).match(value).matched is expected


@pytest.mark.parametrize(
    "op,left,right,value,expected",
    [
        ("both", {"greater_than": 0}, {"less_than": 10}, 5, True),
        ("both", {"greater_than": 0}, {"less_than": 10}, 50, False),
        ("either", {"equal_to": 1}, {"equal_to": 2}, 2, True),
        ("xor", {"greater_than": 0}, {"greater_than": 1}, 5, False),
        ("neither", {"equal_to": 1}, {"equal_to": 2}, 3, True),
        ("if_then", {"greater_than": 10}, {"less_than": 20}, 5, True),
        ("iff", {"greater_than": 10}, {"greater_than": 20}, 15, False),
    ],
)
def test_binary_operators(op, left, right, value, expected):
    assert build_matcher({op: [left, right]}).match(value).matched is expected


def test_nary_operators_and_descriptions():
    m = build_matcher({"all_of": [{"greater_than": 0}, {"less_than": 10}]})
    assert str(m) == "AllOf[#1: GreaterThan(0)] [#2: LessThan(10)]"
    assert m.match(5).matched
    assert build_matcher({"any_of": ["nil", {"equal_to": 1}]}).match(1).matched


def test_comments_are_attached():
    assert build_matcher({"equal_to": 1, "comment": "one"}).comments == ("one",)
    m = build_matcher({"equal_to": 1, "comment": ["a", "b"]})
    assert m.comments == ("a", "b")


@pytest.mark.parametrize(
    "expr,message",
    [
        ("whatever", "Unknown matcher name"),
        ({"bogus": 1}, "Unknown matcher operator"),
        ({"equal_to": 1, "less_than": 2}, "exactly one operator"),
        ({"comment": "only"}, "exactly one operator"),
        ({}, "must be a name or a mapping"),
        (3, "must be a name or a mapping"),
        ({"both": [{"equal_to": 1}]}, "list of two"),
        ({"all_of": {"equal_to": 1}}, "list of expressions"),
        ({"has_prefix": 1}, "expects a string"),
        ({"has_pattern": "("}, "Invalid pattern"),
        ({"type": "widget"}, "Unknown type name"),
        ({"not": "whatever"}, "Unknown matcher name"),
        ({"equal_to": 1, "comment": 5}, "'comment' must be"),
    ],
)
def test_build_matcher_errors(expr, message):
    with pytest.raises(ValueError, match=message):
        build_matcher(expr)


def test_operator_names():
    names = operator_names()
    assert "all_of" in names
    assert "type" in names
    assert names == sorted(names)


@pytest.mark.parametrize(
    "text,value,expected",
    [("true", True, True), ("false", False, True), ("true", 1, False)],
)
def test_unquoted_yaml_booleans_name_matchers(text, value, expected):
    expr = yaml.safe_load(f"expect: {text}")["expect"]
    assert build_matcher(expr).match(value).matched is expected


def test_unquoted_yaml_boolean_inside_operator():
    expr = yaml.safe_load("expect: {not: false}")["expect"]
    m = build_matcher(expr)
    assert m.match(True).matched
    assert not m.match(False).matched
