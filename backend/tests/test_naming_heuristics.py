"""Tests for the shared test-name heuristics."""

import pytest

from models.analysis import FunctionDescription, TestCase
from utils.naming_heuristics import (
    assess_test_name_expressiveness,
    classify_test_type,
    has_full_given_when_then,
    is_behavior_focused,
    is_edge_case,
    is_implementation_coupled,
    is_mock_related,
    is_poor_name,
    name_ratio,
    ratio_band,
)


def make_description(*cases):
    """Build a description from (name, coverage_type) pairs."""
    return FunctionDescription(
        function_name="subject",
        complexity=5,
        test_cases=tuple(
            TestCase(test_file="subject.test.ts", test_case=name, coverage_type=kind)
            for name, kind in cases
        ),
        branch_coverage=80,
        line_coverage=80,
    )


@pytest.mark.parametrize(
    "name,expected",
    [
        ("test1", True),
        ("divide_test", True),
        ("short", True),
        ("my_test_helper_thing", False),
        ("should return totals", False),
    ],
)
def test_is_poor_name(name, expected):
    """Placeholders, *_test suffixes and names under 10 characters are poor."""
    assert is_poor_name(name) is expected


def test_mock_related_is_broader_than_coupled():
    """A bare "call" substring is mock-related but not implementation coupled."""
    assert is_mock_related("recall the cached value") is True
    assert is_implementation_coupled("recall the cached value") is False
    assert is_implementation_coupled("should call PaymentService.charge") is True
    assert is_implementation_coupled("uses stub gateway") is True


def test_name_checks_are_case_sensitive():
    assert is_mock_related("uses MOCK gateway") is False
    assert is_behavior_focused("SHOULD apply discount") is False
    assert is_behavior_focused("when the cart is empty") is False


@pytest.mark.parametrize(
    "name,expected",
    [
        ("should apply discount", True),
        ("should call DiscountService", False),
        ("When the cart is empty", True),
        ("applies discount", False),
    ],
)
def test_is_behavior_focused(name, expected):
    assert is_behavior_focused(name) is expected


def test_full_given_when_then_needs_all_three_keywords():
    assert has_full_given_when_then("Given a cart, When paying, Then charge") is True
    assert has_full_given_when_then("Given a cart, When paying") is False


def test_edge_case_tokens():
    assert is_edge_case("should reject empty input") is True
    assert is_edge_case("should accept input") is False


def test_name_ratio_on_empty_suite_is_zero():
    """Ratios divide by max(count, 1) so an empty suite is 0.0."""
    assert name_ratio((), is_behavior_focused) == 0.0


@pytest.mark.parametrize(
    "ratio,expected",
    [(1.0, "high"), (0.8, "high"), (0.79, "medium"), (0.5, "medium"), (0.49, "low"), (0.0, "low")],
)
def test_ratio_band(ratio, expected):
    assert ratio_band(ratio) == expected


def test_classify_test_type():
    """Coverage kinds collapse to a single type, or mixed when they differ."""
    assert classify_test_type(make_description()) == "unit"
    assert classify_test_type(make_description(("should a thing", "e2e"))) == "e2e"
    assert classify_test_type(make_description(("should a thing", "integration"))) == "integration"
    assert (
        classify_test_type(make_description(("should a thing", "unit"), ("should b thing", "integration")))
        == "mixed"
    )


def test_one_poor_name_makes_expressiveness_low():
    description = make_description(
        ("should apply premium discount for premium users", "unit"),
        ("divide_test", "unit"),
    )
    assert assess_test_name_expressiveness(description) == "low"


def test_half_expressive_names_is_medium():
    description = make_description(
        ("should apply premium discount for premium users", "unit"),
        ("applies the loyalty discount", "unit"),
    )
    assert assess_test_name_expressiveness(description) == "medium"
