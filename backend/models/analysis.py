"""Data models for function complexity and test-quality analysis.

Input: FunctionDescription (one function, its coverage numbers and recorded test cases).
Output: ComplexityIntentResult, KhorikovTestEvaluation, TwadaTestEvaluation,
NarrativeAnalysisResult and ComprehensiveResult.

All models are frozen. Attributes are snake_case in Python; JSON uses the camelCase
names the dashboard already consumes (functionName, testCoverage, branchCoverage, ...).
"""

from typing import Annotated, Any, Literal, Mapping, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)
from pydantic.alias_generators import to_camel

ComplexityCategory = Literal[
    "business-logic",
    "technical-constraints",
    "historical-layers",
    "algorithmic",
    "integration",
    "unknown",
]
QualityLevel = Literal["critical", "low", "medium", "high"]
RiskLevel = Literal["low", "medium", "high", "critical"]
ResilienceLevel = Literal["brittle", "fragile", "resilient"]
TestPhilosophy = Literal[
    "missing",
    "implementation-coupled",
    "behavior-driven",
    "coverage-driven",
    "specification-based",
]
CoverageType = Literal["unit", "integration", "e2e"]
TestType = Literal["unit", "integration", "e2e", "mixed"]
MockUsage = Literal["appropriate", "excessive", "insufficient"]
Severity = Literal["low", "medium", "high", "critical"]
Rating = Literal["low", "medium", "high"]
RecommendationCategory = Literal["test-strategy", "refactoring", "architecture", "documentation"]
RecommendationPriority = Literal["immediate", "short-term", "long-term"]

COMPLEXITY_CATEGORIES: tuple[str, ...] = get_args(ComplexityCategory)

# Input scalars are strict: "18", true or "65" are rejected rather than coerced.
# Strict floats still accept ints.
StrictNonNegativeInt = Annotated[StrictInt, Field(ge=0)]
Percentage = Annotated[StrictFloat, Field(ge=0, le=100)]


class InvalidInputError(ValueError):
    """Raised when a function description is structurally invalid."""


class AnalysisModel(BaseModel):
    """Base for every analysis record: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TestCase(AnalysisModel):
    """A single recorded test case that exercises the function."""

    __test__ = False  # keep pytest from collecting this model

    test_file: StrictStr
    test_case: StrictStr  # test name/description, the main signal for all name heuristics
    coverage_type: CoverageType
    covered_lines: tuple[StrictNonNegativeInt, ...] = ()


class FunctionDescription(AnalysisModel):
    """Structured description of one function supplied by the coverage collector."""

    function_name: StrictStr = Field(min_length=1)
    complexity: StrictNonNegativeInt  # cyclomatic-complexity-like score
    source_code: StrictStr = ""  # opaque text, never parsed
    test_cases: tuple[TestCase, ...] = Field(default=(), alias="testCoverage")
    branch_coverage: Percentage
    line_coverage: Percentage


class ComplexityIntentResult(AnalysisModel):
    """Why a function is complex, with derived business/technical attributes."""

    complexity_category: ComplexityCategory
    secondary_categories: tuple[ComplexityCategory, ...] = ()
    business_background: str = ""
    technical_constraints: str = ""
    complexity_reason: str = ""
    historical_context: str = ""
    intentional_complexity: bool = False
    business_value: Severity = "medium"
    security_implications: Severity = "low"
    migration_complexity: Rating = "low"
    technical_debt: Rating = "low"
    integration_complexity: Rating = "low"
    refactoring_priority: Rating = "low"
    external_dependencies: tuple[str, ...] = ()
    algorithmic_purpose: str = ""
    performance_considerations: str = ""
    algorithmic_complexity: str = ""  # Big-O hint, e.g. "O(n*m)"
    mixed_complexity_reason: str = ""


class KhorikovTestEvaluation(AnalysisModel):
    """Four-pillar evaluation (regressions, refactoring, feedback, maintainability)."""

    protection_against_regressions: QualityLevel
    resistance_to_refactoring: QualityLevel
    fast_feedback: QualityLevel
    maintainability: QualityLevel
    test_type: TestType
    mock_usage: MockUsage
    overall_score: QualityLevel


class TwadaTestEvaluation(AnalysisModel):
    """Five-dimension evaluation of tests as executable specifications."""

    specification_clarity: QualityLevel
    behavior_focus: QualityLevel
    test_structure_clarity: QualityLevel
    test_name_expressiveness: QualityLevel
    edge_case_coverage: QualityLevel
    overall_score: QualityLevel


class TestPhilosophyEvaluation(AnalysisModel):
    """Both rubric evaluations for one function."""

    __test__ = False

    khorikov: KhorikovTestEvaluation
    twada: TwadaTestEvaluation


class NarrativeAnalysisResult(AnalysisModel):
    """Risk/resilience verdict plus template-selected narrative text."""

    complexity_category: ComplexityCategory = "unknown"
    complexity_reason: str = ""
    business_background: str | None = None
    technical_constraints: str | None = None
    historical_context: str | None = None

    test_philosophy: TestPhilosophy = "missing"
    test_strategy: str = ""
    test_smells: tuple[str, ...] = ()
    test_quality: QualityLevel = "critical"

    risk_level: RiskLevel = "medium"
    risk_assessment: str = ""
    strategic_evaluation: str = ""
    change_resilience: ResilienceLevel = "brittle"
    recommendations: tuple[str, ...] = ()

    behavior_description: str = ""
    specification_quality: QualityLevel = "low"


class ActionableRecommendation(AnalysisModel):
    """A concrete, prioritized improvement step."""

    category: RecommendationCategory
    priority: RecommendationPriority
    description: str
    rationale: str
    estimated_effort: Rating


class ComprehensiveResult(NarrativeAnalysisResult):
    """Narrative analysis merged with the classifier and both rubric evaluations."""

    complexity_intent: ComplexityIntentResult
    khorikov_evaluation: KhorikovTestEvaluation
    twada_evaluation: TwadaTestEvaluation
    comprehensive_summary: str
    actionable_recommendations: tuple[ActionableRecommendation, ...]


def parse_function_description(data: FunctionDescription | Mapping[str, Any]) -> FunctionDescription:
    """Validate raw input into a FunctionDescription.

    Args:
        data: A FunctionDescription (returned as-is) or a mapping using either
            camelCase aliases or snake_case attribute names.

    Returns:
        FunctionDescription: The validated, immutable description.

    Raises:
        InvalidInputError: If the input is structurally invalid (negative complexity,
            coverage outside 0-100, empty function name, unknown coverage type, a
            string or boolean where a number is expected, ...). Values are never coerced.
    """
    if isinstance(data, FunctionDescription):
        return data
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            f"function description must be a mapping, got {type(data).__name__}"
        )
    try:
        return FunctionDescription.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidInputError(f"invalid function description: {exc}") from exc
