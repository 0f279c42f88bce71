"""Test evaluation after t-wada's "tests are specifications" philosophy.

Five dimensions: specification clarity, behavior focus, Given-When-Then structure,
name expressiveness and edge-case coverage. Shares only the naming primitives with
the Khorikov evaluator.
"""

from models.analysis import FunctionDescription, TwadaTestEvaluation
from utils.naming_heuristics import (
    assess_test_name_expressiveness,
    has_full_given_when_then,
    is_behavior_focused,
    is_edge_case,
    is_structured,
    name_ratio,
    ratio_band,
)


def assess_specification_clarity(description: FunctionDescription) -> str:
    names = [test.test_case for test in description.test_cases]
    if not names:
        return "low"
    if any(has_full_given_when_then(name) for name in names):
        return "high"
    if any("should" in name and len(name) > 20 for name in names):
        return "medium"
    return "low"


def assess_behavior_focus(description: FunctionDescription) -> str:
    return ratio_band(name_ratio(description.test_cases, is_behavior_focused))


def assess_test_structure(description: FunctionDescription) -> str:
    return ratio_band(name_ratio(description.test_cases, is_structured))


def assess_edge_case_coverage(description: FunctionDescription) -> str:
    """Edge-case share of test names, gated by branch coverage."""
    edge_ratio = name_ratio(description.test_cases, is_edge_case)
    branch = description.branch_coverage

    if branch >= 95 and edge_ratio >= 0.3:
        return "high"
    if branch >= 75 and edge_ratio >= 0.1:
        return "medium"
    if branch >= 50:
        return "medium"
    return "low"


def calculate_overall_score(
    specification_clarity: str,
    behavior_focus: str,
    test_structure_clarity: str,
    test_name_expressiveness: str,
    edge_case_coverage: str,
) -> str:
    """Aggregate the five dimensions: >= 3 low/critical -> low, >= 4 high -> high, else medium."""
    values = [
        specification_clarity,
        behavior_focus,
        test_structure_clarity,
        test_name_expressiveness,
        edge_case_coverage,
    ]
    low_count = sum(1 for v in values if v in ("low", "critical"))
    high_count = sum(1 for v in values if v == "high")

    if low_count >= 3:
        return "low"
    if high_count >= 4:
        return "high"
    return "medium"


def evaluate_twada(description: FunctionDescription) -> TwadaTestEvaluation:
    """Evaluate how well a function's tests read as a specification."""
    clarity = assess_specification_clarity(description)
    behavior = assess_behavior_focus(description)
    structure = assess_test_structure(description)
    names = assess_test_name_expressiveness(description)
    edges = assess_edge_case_coverage(description)

    return TwadaTestEvaluation(
        specification_clarity=clarity,
        behavior_focus=behavior,
        test_structure_clarity=structure,
        test_name_expressiveness=names,
        edge_case_coverage=edges,
        overall_score=calculate_overall_score(clarity, behavior, structure, names, edges),
    )
