"""Tests for the analysis engine entry points and the comprehensive composer.

These tests verify input validation at the boundary, how the composer merges the
classifier, rubric and risk records, the recommendation rules, and batch ordering.
"""

import pytest

from models.analysis import ComprehensiveResult, FunctionDescription, InvalidInputError, TestCase
from services.analysis_engine import (
    classify_complexity,
    compose,
    compose_many,
    evaluate_test_philosophy,
    get_batch_max_workers,
    synthesize_risk,
)


def make_payload(name="processPayment", tests=(), complexity=10, branch=85, line=90, source=""):
    """Create a camelCase request payload as the dashboard sends it."""
    return {
        "functionName": name,
        "complexity": complexity,
        "sourceCode": source,
        "testCoverage": [
            {"testFile": "payment.test.ts", "testCase": test_name, "coverageType": "unit", "coveredLines": [1, 2]}
            for test_name in tests
        ],
        "branchCoverage": branch,
        "lineCoverage": line,
    }


GWT_TEST = (
    "Given valid payment request, When processing, "
    "Then should complete successfully and return transaction ID"
)

COUPLED_TESTS = [
    "should call PaymentService.charge",
    "should call InventoryService.reserve",
    "should call EmailService.sendConfirmation",
    "should call OrderRepository.save",
]


def test_compose_merges_every_classifier():
    """Aggregates feed test_quality and specification_quality; the summary names both rubrics."""
    result = compose(make_payload(tests=[GWT_TEST]))

    assert isinstance(result, ComprehensiveResult)
    assert result.test_quality == result.khorikov_evaluation.overall_score
    assert result.specification_quality == result.twada_evaluation.overall_score
    assert result.complexity_category == result.complexity_intent.complexity_category
    assert "Vladimir Khorikov" in result.comprehensive_summary
    assert "T-wada" in result.comprehensive_summary
    assert "processPayment" in result.comprehensive_summary


def test_summary_lists_all_sub_scores():
    result = compose(make_payload(tests=[GWT_TEST]))
    khorikov = result.khorikov_evaluation
    twada = result.twada_evaluation

    assert f"Protection against regressions: {khorikov.protection_against_regressions}" in result.comprehensive_summary
    assert f"Resistance to refactoring: {khorikov.resistance_to_refactoring}" in result.comprehensive_summary
    assert f"Fast feedback: {khorikov.fast_feedback}" in result.comprehensive_summary
    assert f"Maintainability: {khorikov.maintainability}" in result.comprehensive_summary
    assert f"Specification clarity: {twada.specification_clarity}" in result.comprehensive_summary
    assert f"Behavior focus: {twada.behavior_focus}" in result.comprehensive_summary
    assert f"Given-When-Then structure: {twada.test_structure_clarity}" in result.comprehensive_summary
    assert f"Test name expressiveness: {twada.test_name_expressiveness}" in result.comprehensive_summary
    assert f"Edge-case coverage: {twada.edge_case_coverage}" in result.comprehensive_summary


def test_healthy_tests_get_continuous_improvement():
    """With no rule firing the list falls back to continuous improvement."""
    result = compose(make_payload(tests=[GWT_TEST]))

    assert len(result.actionable_recommendations) == 1
    recommendation = result.actionable_recommendations[0]
    assert recommendation.description == "Continue improving test quality"
    assert recommendation.priority == "short-term"
    assert recommendation.category == "test-strategy"


def test_coupled_tests_get_coupling_and_rewrite_recommendations():
    result = compose(make_payload(tests=COUPLED_TESTS))

    descriptions = [rec.description for rec in result.actionable_recommendations]
    assert descriptions == [
        "Reduce implementation coupling in tests",
        "Rewrite tests as behavior specifications",
    ]
    assert result.actionable_recommendations[0].priority == "immediate"
    assert result.actionable_recommendations[0].estimated_effort == "medium"


def test_untested_function_gets_baseline_recommendation():
    """No tests: low behavior focus plus an immediate baseline recommendation."""
    result = compose(make_payload(tests=[], complexity=25, branch=0, line=0))

    priorities = [(rec.description, rec.priority) for rec in result.actionable_recommendations]
    assert priorities == [
        ("Rewrite tests as behavior specifications", "short-term"),
        ("Establish baseline tests", "immediate"),
    ]
    assert result.risk_level == "critical"
    assert result.khorikov_evaluation.protection_against_regressions == "critical"


@pytest.mark.parametrize(
    "tests,complexity,branch",
    [([], 0, 0), ([GWT_TEST], 10, 85), (COUPLED_TESTS, 30, 20), (["test1"], 3, 100)],
)
def test_actionable_recommendations_never_empty(tests, complexity, branch):
    result = compose(make_payload(tests=tests, complexity=complexity, branch=branch, line=branch))
    assert len(result.actionable_recommendations) >= 1


def test_compose_uses_full_classifier_for_complexity_fields():
    """Complexity fields come from the full classifier, empty strings become None."""
    source = "const providers = ['stripe', 'paypal']; await rateLimiter.wait();"
    result = compose(make_payload(name="collectCharges", source=source))

    assert result.complexity_category == "integration"
    assert result.technical_constraints == result.complexity_intent.technical_constraints
    assert result.business_background is None
    assert result.historical_context is None


def test_compose_is_deterministic():
    payload = make_payload(tests=COUPLED_TESTS, source="legacy mainframe Issue #42")

    first = compose(payload)
    second = compose(payload)

    assert first == second
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_snake_case_and_model_input_are_accepted():
    """Entry points accept camelCase, snake_case and model instances alike."""
    model = FunctionDescription(
        function_name="calculateTax",
        complexity=8,
        test_cases=(TestCase(test_file="tax.test.ts", test_case=GWT_TEST, coverage_type="unit"),),
        branch_coverage=85,
        line_coverage=90,
    )
    snake = {
        "function_name": "calculateTax",
        "complexity": 8,
        "test_cases": [{"test_file": "tax.test.ts", "test_case": GWT_TEST, "coverage_type": "unit"}],
        "branch_coverage": 85,
        "line_coverage": 90,
    }

    assert compose(model) == compose(snake)


def test_evaluate_test_philosophy_returns_both_rubrics():
    result = evaluate_test_philosophy(make_payload(tests=COUPLED_TESTS))

    assert result.khorikov.resistance_to_refactoring == "low"
    assert result.twada.behavior_focus == "low"


@pytest.mark.parametrize("entry_point", [classify_complexity, evaluate_test_philosophy, synthesize_risk, compose])
@pytest.mark.parametrize(
    "overrides",
    [
        {"branchCoverage": 150},
        {"lineCoverage": -1},
        {"complexity": -3},
        {"functionName": ""},
    ],
)
def test_invalid_input_is_rejected(entry_point, overrides):
    """Structurally invalid descriptions raise InvalidInputError."""
    payload = make_payload()
    payload.update(overrides)

    with pytest.raises(InvalidInputError):
        entry_point(payload)


def test_unknown_coverage_type_is_rejected():
    payload = make_payload(tests=[GWT_TEST])
    payload["testCoverage"][0]["coverageType"] = "smoke"

    with pytest.raises(InvalidInputError):
        compose(payload)


def test_non_mapping_input_is_rejected():
    with pytest.raises(InvalidInputError):
        compose(["processPayment"])


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        classify_complexity(make_payload(branch=101))


def test_compose_many_preserves_order():
    names = [f"function{i}" for i in range(7)]
    results = compose_many([make_payload(name=name) for name in names], max_workers=3)

    assert [result.behavior_description for result in results] == [
        f"Expected behavior description for {name}" for name in names
    ]


def test_compose_many_matches_compose():
    payloads = [make_payload(tests=COUPLED_TESTS), make_payload(tests=[GWT_TEST])]
    assert compose_many(payloads) == [compose(payload) for payload in payloads]


def test_compose_many_empty_batch():
    assert compose_many([]) == []


def test_compose_many_fails_whole_batch_on_invalid_entry():
    with pytest.raises(InvalidInputError):
        compose_many([make_payload(), make_payload(branch=-5)])


def test_batch_workers_default(monkeypatch):
    """Unset env var returns the default pool size."""
    monkeypatch.delenv("ANALYZER_BATCH_MAX_WORKERS", raising=False)
    assert get_batch_max_workers() == 4


def test_batch_workers_from_env(monkeypatch):
    monkeypatch.setenv("ANALYZER_BATCH_MAX_WORKERS", "8")
    assert get_batch_max_workers() == 8


@pytest.mark.parametrize("value", ["abc", "0", "-2", "   "])
def test_invalid_batch_workers_fall_back(monkeypatch, value):
    """Invalid values fall back to the default without raising."""
    monkeypatch.setenv("ANALYZER_BATCH_MAX_WORKERS", value)
    assert get_batch_max_workers() == 4
