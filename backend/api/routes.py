"""API route definitions for the coverage intent analyzer."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

from fastapi import APIRouter, HTTPException

from models.analysis import (
    AnalysisModel,
    ComplexityIntentResult,
    ComprehensiveResult,
    FunctionDescription,
    InvalidInputError,
    NarrativeAnalysisResult,
    TestPhilosophyEvaluation,
)
from services.analysis_engine import (
    classify_complexity,
    compose,
    compose_many,
    evaluate_test_philosophy,
    synthesize_risk,
)
from utils.rules_config import get_active_pinned_examples

router = APIRouter()

# Thread pool for batch evaluation
executor = ThreadPoolExecutor(max_workers=2)


@router.get("/health")
async def health_check() -> dict:
    """
    Lightweight endpoint for uptime checks.

    Returns:
        dict: Health status payload.
    """
    return {"status": "healthy"}


# ============================================================================
# SINGLE-FUNCTION ENDPOINTS
# ============================================================================


@router.post("/analyze/complexity", response_model=ComplexityIntentResult)
async def analyze_complexity(payload: FunctionDescription) -> ComplexityIntentResult:
    """
    Classify why a function is complex.

    Returns:
        ComplexityIntentResult: Primary/secondary categories and derived attributes.
    """
    return classify_complexity(payload)


@router.post("/analyze/test-philosophy", response_model=TestPhilosophyEvaluation)
async def analyze_test_philosophy(payload: FunctionDescription) -> TestPhilosophyEvaluation:
    """
    Score a function's recorded tests against the Khorikov and t-wada rubrics.

    Returns:
        TestPhilosophyEvaluation: Both rubric evaluations.
    """
    return evaluate_test_philosophy(payload)


@router.post("/analyze/risk", response_model=NarrativeAnalysisResult)
async def analyze_risk(payload: FunctionDescription) -> NarrativeAnalysisResult:
    """
    Derive the risk level, change resilience and narrative recommendations.

    Returns:
        NarrativeAnalysisResult: Risk verdict plus template-selected narrative text.
    """
    return synthesize_risk(payload)


@router.post("/analyze/comprehensive", response_model=ComprehensiveResult)
async def analyze_comprehensive(payload: FunctionDescription) -> ComprehensiveResult:
    """
    Run every classifier and merge the results.

    Request body (camelCase):
        {
            "functionName": "calculatePricing",
            "complexity": 18,
            "sourceCode": "...",
            "testCoverage": [
                {"testFile": "pricing.test.ts", "testCase": "should ...",
                 "coverageType": "unit", "coveredLines": [1, 2]}
            ],
            "branchCoverage": 65,
            "lineCoverage": 70
        }

    Returns:
        ComprehensiveResult: Merged analysis with summary and recommendations.
    """
    return compose(payload)


# ============================================================================
# BATCH ENDPOINT
# ============================================================================


class BatchAnalyzeRequest(AnalysisModel):
    """Request model for the batch endpoint (camelCase: functions, maxWorkers)."""

    functions: list[dict]
    max_workers: int | None = None  # None uses ANALYZER_BATCH_MAX_WORKERS


@router.post("/analyze/batch", response_model=list[ComprehensiveResult])
async def analyze_batch(payload: BatchAnalyzeRequest) -> list[ComprehensiveResult]:
    """
    Compose a batch of function descriptions.

    Returns:
        list[ComprehensiveResult]: Results in request order.

    Raises:
        HTTPException: 422 if any function description is invalid.
    """
    try:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            executor,
            lambda: compose_many(payload.functions, max_workers=payload.max_workers),
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ============================================================================
# RULES ENDPOINTS
# ============================================================================


@router.get("/rules/pinned-examples")
async def list_pinned_examples() -> dict:
    """
    Return the pinned function-name overrides the classifier is applying.

    Served from the same loaded configuration the classifier uses, so edits to the
    file on disk only show up after reset_pinned_examples().

    Returns:
        dict: {"version": str, "pinned_examples": [{"function_name", "category"}]}

    Raises:
        HTTPException: 500 if the rules configuration failed to load (overrides disabled).
    """
    active = get_active_pinned_examples()
    if active.error is not None:
        raise HTTPException(status_code=500, detail=active.error)
    return {
        "version": active.version,
        "pinned_examples": [
            {"function_name": function_name, "category": category}
            for function_name, category in active.mapping.items()
        ],
    }
