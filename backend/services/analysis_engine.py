"""Analysis engine: public entry points and the comprehensive composer.

This module validates input at the boundary and delegates to the classifiers in
utils/. The composer runs the complexity classifier, both test rubrics and the risk
synthesizer, then merges their records into one ComprehensiveResult with a summary
and prioritized recommendations.

Every entry point is a pure function of its input, so batches can be evaluated on a
thread pool without coordination.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Mapping, Union

from models.analysis import (
    ActionableRecommendation,
    ComplexityIntentResult,
    ComprehensiveResult,
    FunctionDescription,
    KhorikovTestEvaluation,
    NarrativeAnalysisResult,
    TestPhilosophyEvaluation,
    TwadaTestEvaluation,
    parse_function_description,
)
from utils import complexity_classifier, narratives, risk_synthesizer
from utils.khorikov_evaluator import evaluate_khorikov
from utils.twada_evaluator import evaluate_twada

logger = logging.getLogger(__name__)

FunctionInput = Union[FunctionDescription, Mapping[str, Any]]

DEFAULT_BATCH_MAX_WORKERS = 4


def get_batch_max_workers() -> int:
    """Get the default batch pool size from ANALYZER_BATCH_MAX_WORKERS.

    Returns:
        A positive worker count. Defaults to 4 if unset or invalid.
    """
    raw = os.getenv("ANALYZER_BATCH_MAX_WORKERS", "").strip()
    if raw == "":
        return DEFAULT_BATCH_MAX_WORKERS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Invalid ANALYZER_BATCH_MAX_WORKERS value '%s'. Falling back to %d.",
            raw,
            DEFAULT_BATCH_MAX_WORKERS,
        )
        return DEFAULT_BATCH_MAX_WORKERS
    return value


# ============================================================================
# ENTRY POINTS
# ============================================================================


def classify_complexity(description: FunctionInput) -> ComplexityIntentResult:
    """Classify why a function is complex.

    Raises:
        InvalidInputError: If the description is structurally invalid.
    """
    return complexity_classifier.classify_complexity(parse_function_description(description))


def evaluate_test_philosophy(description: FunctionInput) -> TestPhilosophyEvaluation:
    """Score the recorded tests against both rubrics independently.

    Raises:
        InvalidInputError: If the description is structurally invalid.
    """
    parsed = parse_function_description(description)
    return TestPhilosophyEvaluation(khorikov=evaluate_khorikov(parsed), twada=evaluate_twada(parsed))


def synthesize_risk(description: FunctionInput) -> NarrativeAnalysisResult:
    """Derive risk, resilience, test philosophy and narrative text.

    Raises:
        InvalidInputError: If the description is structurally invalid.
    """
    return risk_synthesizer.synthesize_risk(parse_function_description(description))


# ============================================================================
# COMPOSER
# ============================================================================


def generate_comprehensive_summary(
    function_name: str,
    khorikov: KhorikovTestEvaluation,
    twada: TwadaTestEvaluation,
) -> str:
    """Render the summary listing all nine sub-scores and both aggregates."""
    return narratives.COMPREHENSIVE_SUMMARY.format(
        function_name=function_name,
        protection_against_regressions=khorikov.protection_against_regressions,
        resistance_to_refactoring=khorikov.resistance_to_refactoring,
        fast_feedback=khorikov.fast_feedback,
        maintainability=khorikov.maintainability,
        khorikov_overall=khorikov.overall_score,
        specification_clarity=twada.specification_clarity,
        behavior_focus=twada.behavior_focus,
        test_structure_clarity=twada.test_structure_clarity,
        test_name_expressiveness=twada.test_name_expressiveness,
        edge_case_coverage=twada.edge_case_coverage,
        twada_overall=twada.overall_score,
    )


def generate_actionable_recommendations(
    description: FunctionDescription,
    khorikov: KhorikovTestEvaluation,
    twada: TwadaTestEvaluation,
) -> tuple[ActionableRecommendation, ...]:
    """Build the ordered recommendation list; never empty."""
    keys: List[str] = []

    if khorikov.resistance_to_refactoring == "low":
        keys.append("reduce-implementation-coupling")
    if twada.behavior_focus == "low":
        keys.append("rewrite-as-behavior-specifications")
    if not description.test_cases:
        keys.append("establish-baseline-tests")
    if not keys:
        keys.append("continuous-improvement")

    return tuple(
        ActionableRecommendation(**narratives.ACTIONABLE_RECOMMENDATIONS[key]) for key in keys
    )


def compose(description: FunctionInput) -> ComprehensiveResult:
    """Run every classifier on one function and merge the results.

    Args:
        description: A FunctionDescription or a mapping accepted by
            parse_function_description().

    Returns:
        ComprehensiveResult: complexity fields from the complexity classifier, narrative
        fields from the risk synthesizer, test_quality from the Khorikov aggregate and
        specification_quality from the t-wada aggregate.

    Raises:
        InvalidInputError: If the description is structurally invalid.
    """
    parsed = parse_function_description(description)

    intent = complexity_classifier.classify_complexity(parsed)
    khorikov = evaluate_khorikov(parsed)
    twada = evaluate_twada(parsed)
    narrative = risk_synthesizer.synthesize_risk(parsed)

    logger.debug(
        "Compose: %s category=%s risk=%s khorikov=%s twada=%s",
        parsed.function_name,
        intent.complexity_category,
        narrative.risk_level,
        khorikov.overall_score,
        twada.overall_score,
    )

    return ComprehensiveResult(
        complexity_category=intent.complexity_category,
        complexity_reason=intent.complexity_reason,
        business_background=intent.business_background or None,
        technical_constraints=intent.technical_constraints or None,
        historical_context=intent.historical_context or None,
        test_philosophy=narrative.test_philosophy,
        test_strategy=narrative.test_strategy,
        test_smells=narrative.test_smells,
        test_quality=khorikov.overall_score,
        risk_level=narrative.risk_level,
        risk_assessment=narrative.risk_assessment,
        strategic_evaluation=narrative.strategic_evaluation,
        change_resilience=narrative.change_resilience,
        recommendations=narrative.recommendations,
        behavior_description=narrative.behavior_description,
        specification_quality=twada.overall_score,
        complexity_intent=intent,
        khorikov_evaluation=khorikov,
        twada_evaluation=twada,
        comprehensive_summary=generate_comprehensive_summary(parsed.function_name, khorikov, twada),
        actionable_recommendations=generate_actionable_recommendations(parsed, khorikov, twada),
    )


def compose_many(
    descriptions: Iterable[FunctionInput],
    max_workers: int | None = None,
) -> list[ComprehensiveResult]:
    """Compose a batch of functions on a thread pool.

    All inputs are validated before any work is scheduled, so one invalid entry fails
    the whole batch without partial results.

    Args:
        descriptions: Function descriptions (models or mappings).
        max_workers: Pool size. If None, uses ANALYZER_BATCH_MAX_WORKERS (default 4).

    Returns:
        list[ComprehensiveResult] in input order.

    Raises:
        InvalidInputError: If any description is structurally invalid.
    """
    parsed = [parse_function_description(description) for description in descriptions]
    if not parsed:
        return []

    workers = max_workers if max_workers is not None and max_workers > 0 else get_batch_max_workers()
    with ThreadPoolExecutor(max_workers=min(workers, len(parsed))) as executor:
        return list(executor.map(compose, parsed))
