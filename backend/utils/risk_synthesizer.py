"""Risk synthesizer: risk/resilience verdicts and template-selected narratives.

Combines complexity, coverage numbers and test-name heuristics into a risk level, a
change-resilience level and a test philosophy label. All narrative text is picked
from utils.narratives; nothing here generates prose.
"""

from models.analysis import FunctionDescription, NarrativeAnalysisResult
from utils import narratives
from utils.naming_heuristics import is_behavior_focused, is_implementation_coupled
from utils.pattern_rules import NARRATIVE_CATEGORY_RULES, PLACEHOLDER_TEST_NAMES, matches_any


def categorize_complexity(source_code: str) -> str:
    """Simplified two-group classifier: business logic before technical constraints."""
    for category, patterns in NARRATIVE_CATEGORY_RULES:
        if matches_any(patterns, source_code):
            return category
    return "unknown"


def generate_complexity_reason(source_code: str, category: str) -> str:
    if category == "business-logic" and ("b2b" in source_code or "B2B" in source_code):
        return narratives.NARRATIVE_COMPLEXITY_REASON["business-logic:b2b"]
    if category == "technical-constraints" and ("api" in source_code or "API" in source_code):
        return narratives.NARRATIVE_COMPLEXITY_REASON["technical-constraints:api"]
    return narratives.NARRATIVE_COMPLEXITY_REASON.get(
        category, narratives.NARRATIVE_COMPLEXITY_REASON["unknown"]
    )


def assess_risk_level(description: FunctionDescription) -> str:
    """Risk cascade, first match wins."""
    complexity = description.complexity
    branch = description.branch_coverage
    test_count = len(description.test_cases)

    if complexity > 20 and test_count == 0:
        return "critical"
    if complexity > 15 and branch < 50:
        return "high"
    if complexity > 10 and branch < 80:
        return "medium"
    # Well-tested functions are low risk even when complex.
    if branch >= 90 and test_count > 0:
        return "low"
    if complexity > 10 or branch < 80:
        return "medium"
    return "low"


def assess_change_resilience(description: FunctionDescription) -> str:
    branch = description.branch_coverage
    line = description.line_coverage

    if not description.test_cases:
        if description.complexity > 20:
            return "fragile"
        return "brittle"
    if branch > 90 and line > 90:
        return "resilient"
    if branch > 50 or line > 70:
        return "fragile"
    return "brittle"


def evaluate_test_philosophy(description: FunctionDescription) -> str:
    names = [test.test_case for test in description.test_cases]
    if not names:
        return "missing"
    if any(is_implementation_coupled(name) for name in names):
        return "implementation-coupled"
    if any(is_behavior_focused(name) for name in names):
        return "behavior-driven"
    return "coverage-driven"


def assess_test_quality(description: FunctionDescription) -> str:
    if not description.test_cases:
        return "critical"
    if any(is_implementation_coupled(test.test_case) for test in description.test_cases):
        return "low"
    if description.branch_coverage < 50:
        return "low"
    if description.branch_coverage < 80:
        return "medium"
    return "high"


def assess_specification_quality(description: FunctionDescription) -> str:
    if not description.test_cases:
        return "critical"
    return "medium"


def detect_test_smells(description: FunctionDescription) -> tuple[str, ...]:
    names = [test.test_case for test in description.test_cases]
    smells: list[str] = []

    if any("call" in name or "mock" in name for name in names):
        smells.append(narratives.TEST_SMELL_EXCESSIVE_MOCKING)

    if any(
        name in PLACEHOLDER_TEST_NAMES or name.endswith("_test") or "should call" in name
        for name in names
    ):
        smells.append(narratives.TEST_SMELL_INTERNAL_STRUCTURE)

    return tuple(smells)


def generate_behavior_description(description: FunctionDescription) -> str:
    return narratives.BEHAVIOR_DESCRIPTION.format(function_name=description.function_name)


def analyze_complexity_narrative(description: FunctionDescription) -> NarrativeAnalysisResult:
    """Complexity category, reason, risk and resilience for one function."""
    source = description.source_code
    category = categorize_complexity(source)
    risk_level = assess_risk_level(description)

    return NarrativeAnalysisResult(
        complexity_category=category,
        complexity_reason=generate_complexity_reason(source, category),
        business_background=(
            narratives.NARRATIVE_BUSINESS_BACKGROUND if category == "business-logic" else None
        ),
        technical_constraints=(
            narratives.NARRATIVE_TECHNICAL_CONSTRAINTS if category == "technical-constraints" else None
        ),
        test_philosophy="missing",
        test_quality="critical",
        risk_level=risk_level,
        risk_assessment=narratives.RISK_ASSESSMENT[risk_level],
        change_resilience=assess_change_resilience(description),
        behavior_description=generate_behavior_description(description),
        specification_quality="low",
    )


def evaluate_test_strategy(description: FunctionDescription) -> NarrativeAnalysisResult:
    """Test philosophy label, strategy narrative, smells and recommendations."""
    philosophy = evaluate_test_philosophy(description)

    return NarrativeAnalysisResult(
        test_philosophy=philosophy,
        test_strategy=narratives.TEST_STRATEGY[philosophy],
        test_smells=detect_test_smells(description),
        test_quality=assess_test_quality(description),
        strategic_evaluation=narratives.STRATEGIC_EVALUATION_BY_PHILOSOPHY[philosophy],
        change_resilience=assess_change_resilience(description),
        recommendations=narratives.RECOMMENDATIONS_BY_PHILOSOPHY.get(philosophy, ()),
        behavior_description=generate_behavior_description(description),
        specification_quality=assess_specification_quality(description),
    )


def generate_strategic_assessment(description: FunctionDescription) -> NarrativeAnalysisResult:
    """Strategic narrative derived from risk level and resilience alone."""
    risk_level = assess_risk_level(description)

    return NarrativeAnalysisResult(
        test_philosophy="missing",
        test_quality="critical",
        risk_level=risk_level,
        risk_assessment=narratives.RISK_ASSESSMENT[risk_level],
        strategic_evaluation=narratives.STRATEGIC_EVALUATION_BY_RISK[risk_level],
        change_resilience=assess_change_resilience(description),
        recommendations=narratives.STRATEGIC_RECOMMENDATIONS_BY_RISK[risk_level],
        behavior_description=generate_behavior_description(description),
        specification_quality="low",
    )


def synthesize_risk(description: FunctionDescription) -> NarrativeAnalysisResult:
    """Merge the complexity, test-strategy and strategic narratives into one record.

    Complexity fields and the risk verdict come from the complexity narrative, test
    fields from the test-strategy narrative. Recommendations are the test-strategy
    ones followed by any strategic ones not already listed.
    """
    complexity = analyze_complexity_narrative(description)
    strategy = evaluate_test_strategy(description)
    strategic = generate_strategic_assessment(description)

    recommendations = tuple(dict.fromkeys(strategy.recommendations + strategic.recommendations))

    return NarrativeAnalysisResult(
        complexity_category=complexity.complexity_category,
        complexity_reason=complexity.complexity_reason,
        business_background=complexity.business_background,
        technical_constraints=complexity.technical_constraints,
        test_philosophy=strategy.test_philosophy,
        test_strategy=strategy.test_strategy,
        test_smells=strategy.test_smells,
        test_quality=strategy.test_quality,
        risk_level=complexity.risk_level,
        risk_assessment=complexity.risk_assessment,
        strategic_evaluation=strategic.strategic_evaluation,
        change_resilience=complexity.change_resilience,
        recommendations=recommendations,
        behavior_description=complexity.behavior_description,
        specification_quality=strategy.specification_quality,
    )
