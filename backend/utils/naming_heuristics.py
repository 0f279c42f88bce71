"""Naming heuristics shared by the Khorikov and t-wada evaluators.

These primitives only look at recorded test-case names and coverage kinds. All name
checks are case-sensitive substring tests, and every ratio divides by
max(test_count, 1) so an empty suite never raises.
"""

from typing import Callable, Sequence

from models.analysis import FunctionDescription, TestCase
from utils.pattern_rules import (
    COUPLING_NAME_TOKENS,
    EDGE_CASE_NAME_TOKENS,
    GIVEN_WHEN_THEN_TOKENS,
    MOCK_NAME_TOKENS,
    PLACEHOLDER_TEST_NAMES,
)


def _contains_any(name: str, tokens: Sequence[str]) -> bool:
    return any(token in name for token in tokens)


def is_mock_related(name: str) -> bool:
    """Name suggests verification of internal calls ("call", "mock", "stub")."""
    return _contains_any(name, MOCK_NAME_TOKENS)


def is_implementation_coupled(name: str) -> bool:
    """Name suggests the test is tied to implementation ("should call", "mock", "stub")."""
    return _contains_any(name, COUPLING_NAME_TOKENS)


def is_should_behavior(name: str) -> bool:
    """A "should ..." name that does not describe a call."""
    return "should" in name and "call" not in name


def is_behavior_focused(name: str) -> bool:
    """Behavior-style name: "should" without "call", or any Given/When/Then keyword."""
    return is_should_behavior(name) or _contains_any(name, GIVEN_WHEN_THEN_TOKENS)


def has_full_given_when_then(name: str) -> bool:
    return all(token in name for token in GIVEN_WHEN_THEN_TOKENS)


def is_structured(name: str) -> bool:
    """Name reads as a structured scenario: Given-style, or a long "should" sentence."""
    return "Given" in name or ("should" in name and len(name) > 30)


def is_poor_name(name: str) -> bool:
    """Placeholder, *_test suffix, or too short to describe behavior."""
    return name in PLACEHOLDER_TEST_NAMES or name.endswith("_test") or len(name) < 10


def is_expressive_name(name: str) -> bool:
    return "should" in name or "Given" in name


def is_edge_case(name: str) -> bool:
    return _contains_any(name, EDGE_CASE_NAME_TOKENS)


def name_ratio(tests: Sequence[TestCase], predicate: Callable[[str], bool]) -> float:
    """Fraction of test names satisfying predicate, against max(len(tests), 1)."""
    matching = sum(1 for test in tests if predicate(test.test_case))
    return matching / max(len(tests), 1)


def ratio_band(ratio: float) -> str:
    """Map a ratio to a quality band: >= 0.8 high, >= 0.5 medium, else low."""
    if ratio >= 0.8:
        return "high"
    if ratio >= 0.5:
        return "medium"
    return "low"


def mock_ratio(description: FunctionDescription) -> float:
    return name_ratio(description.test_cases, is_mock_related)


def behavior_ratio(description: FunctionDescription) -> float:
    return name_ratio(description.test_cases, is_behavior_focused)


def evaluate_mock_usage(description: FunctionDescription) -> str:
    """Classify mock usage as "excessive", "insufficient" or "appropriate".

    Returns:
        "excessive" if more than 70% of names are mock-related, "insufficient" if
        fewer than 10% are and complexity exceeds 15, else "appropriate".
    """
    ratio = mock_ratio(description)
    if ratio > 0.7:
        return "excessive"
    if ratio < 0.1 and description.complexity > 15:
        return "insufficient"
    return "appropriate"


def classify_test_type(description: FunctionDescription) -> str:
    """Return "unit", "integration", "e2e" or "mixed" from the recorded coverage kinds."""
    kinds = {test.coverage_type for test in description.test_cases}
    if len(kinds) > 1:
        return "mixed"
    if "e2e" in kinds:
        return "e2e"
    if "integration" in kinds:
        return "integration"
    return "unit"


def assess_test_name_expressiveness(description: FunctionDescription) -> str:
    """Score how well test names describe behavior.

    Any placeholder/short/*_test name drags the score to "low". Otherwise the share of
    "should"/"Given" names decides: >= 0.8 high, >= 0.5 medium, else low.
    """
    tests = description.test_cases
    if any(is_poor_name(test.test_case) for test in tests):
        return "low"
    return ratio_band(name_ratio(tests, is_expressive_name))
