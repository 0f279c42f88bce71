"""Four-pillar test evaluation after Vladimir Khorikov's unit testing principles.

Pillars: protection against regressions, resistance to refactoring, fast feedback and
maintainability. Each pillar is scored independently; the overall score is a vote
over the four pillar scores only.
"""

from models.analysis import FunctionDescription, KhorikovTestEvaluation
from utils.naming_heuristics import (
    assess_test_name_expressiveness,
    classify_test_type,
    evaluate_mock_usage,
    is_implementation_coupled,
    is_should_behavior,
)


def assess_regression_protection(description: FunctionDescription) -> str:
    if not description.test_cases:
        return "critical"
    branch = description.branch_coverage
    line = description.line_coverage
    if branch >= 90 and line >= 90:
        return "high"
    if branch >= 70 and line >= 80:
        return "medium"
    return "low"


def assess_refactoring_resistance(description: FunctionDescription) -> str:
    """Implementation coupling is checked first and wins over behavior-style names."""
    names = [test.test_case for test in description.test_cases]
    if any(is_implementation_coupled(name) for name in names):
        return "low"
    if any(is_should_behavior(name) for name in names):
        return "high"
    return "medium"


def assess_feedback_speed(description: FunctionDescription) -> str:
    kinds = {test.coverage_type for test in description.test_cases}
    if "e2e" in kinds:
        return "low"
    if "integration" in kinds:
        return "medium"
    return "high"


def assess_maintainability(description: FunctionDescription) -> str:
    mock_usage = evaluate_mock_usage(description)
    name_quality = assess_test_name_expressiveness(description)

    if mock_usage == "excessive" or name_quality == "low":
        return "low"
    # Integration suites cost more to maintain even when well named.
    if classify_test_type(description) == "integration":
        return "medium"
    if mock_usage == "appropriate" and name_quality == "high":
        return "high"
    return "medium"


def calculate_overall_score(
    protection_against_regressions: str,
    resistance_to_refactoring: str,
    fast_feedback: str,
    maintainability: str,
) -> str:
    """Aggregate the four pillars.

    >= 2 low/critical -> low; >= 2 high with no low -> high; >= 3 high -> high;
    otherwise medium.
    """
    values = [protection_against_regressions, resistance_to_refactoring, fast_feedback, maintainability]
    low_count = sum(1 for v in values if v in ("low", "critical"))
    high_count = sum(1 for v in values if v == "high")

    if low_count >= 2:
        return "low"
    if high_count >= 2 and low_count == 0:
        return "high"
    if high_count >= 3:
        return "high"
    return "medium"


def evaluate_khorikov(description: FunctionDescription) -> KhorikovTestEvaluation:
    """Evaluate a function's recorded tests against the four pillars.

    Args:
        description: The function description whose test cases are evaluated.

    Returns:
        KhorikovTestEvaluation with the four pillar scores, test type, mock usage
        and overall score.
    """
    protection = assess_regression_protection(description)
    resistance = assess_refactoring_resistance(description)
    feedback = assess_feedback_speed(description)
    maintainability = assess_maintainability(description)

    return KhorikovTestEvaluation(
        protection_against_regressions=protection,
        resistance_to_refactoring=resistance,
        fast_feedback=feedback,
        maintainability=maintainability,
        test_type=classify_test_type(description),
        mock_usage=evaluate_mock_usage(description),
        overall_score=calculate_overall_score(protection, resistance, feedback, maintainability),
    )
