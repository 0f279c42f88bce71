"""Complexity intent classifier.

Infers why a function is complex (business rules, technical constraints, historical
patching, algorithmic work, external integration) from its name and opaque source
text, then derives business/technical attributes from the same text. Source code is
never parsed; every signal is a text pattern from utils.pattern_rules.
"""

import logging
from typing import Mapping, Optional

from models.analysis import ComplexityIntentResult, FunctionDescription
from utils import narratives
from utils.pattern_rules import (
    ALGORITHMIC_PATTERNS,
    CATEGORY_RULES,
    DATE_STAMP_PATTERN,
    EXTERNAL_DEPENDENCY_PATTERNS,
    INTEGRATION_TOKEN_PATTERN,
    ISSUE_REFERENCE_PATTERN,
    LOOP_KEYWORD_PATTERN,
    SECONDARY_CATEGORY_RULES,
    SECURITY_PATTERNS,
    TECHNICAL_DEBT_PATTERNS,
    matches_any,
)
from utils.rules_config import get_pinned_examples

logger = logging.getLogger(__name__)


def categorize_complexity(
    function_name: str,
    source_code: str,
    pinned_examples: Mapping[str, str],
) -> str:
    """Pick the single primary complexity category.

    Order: pinned example by exact function name, then the first rule group in
    CATEGORY_RULES with any match, else "unknown".
    """
    pinned = pinned_examples.get(function_name)
    if pinned is not None:
        return pinned

    for category, patterns in CATEGORY_RULES:
        if matches_any(patterns, source_code):
            return category
    return "unknown"


def identify_secondary_categories(source_code: str, primary: str) -> tuple[str, ...]:
    """Re-run the secondary rule groups independently; the primary is never repeated."""
    return tuple(
        category
        for category, patterns in SECONDARY_CATEGORY_RULES
        if category != primary and matches_any(patterns, source_code)
    )


def extract_business_background(source_code: str, category: str) -> str:
    if category != "business-logic":
        return ""
    if "enterprise" in source_code and "smb" in source_code:
        return narratives.BUSINESS_BACKGROUND["multi-segment-pricing"]
    if "permission" in source_code and "tenant" in source_code:
        return narratives.BUSINESS_BACKGROUND["multi-tenant-access"]
    return narratives.BUSINESS_BACKGROUND["generic"]


def extract_technical_constraints(source_code: str, category: str) -> str:
    if category == "technical-constraints":
        if "legacy" in source_code or "mainframe" in source_code:
            return narratives.TECHNICAL_CONSTRAINTS["legacy"]
        return narratives.TECHNICAL_CONSTRAINTS["external-system"]
    if category == "integration":
        return narratives.TECHNICAL_CONSTRAINTS["integration"]
    return ""


def generate_complexity_reason(source_code: str, category: str) -> str:
    if category == "business-logic":
        if "tenant" in source_code and "permission" in source_code:
            return narratives.COMPLEXITY_REASON["business-logic:tenant-permission"]
        if "enterprise" in source_code and "pricing" in source_code:
            return narratives.COMPLEXITY_REASON["business-logic:segment-pricing"]
    if category == "technical-constraints":
        if "legacy" in source_code or "mainframe" in source_code:
            return narratives.COMPLEXITY_REASON["technical-constraints:legacy"]
    return narratives.COMPLEXITY_REASON.get(category, narratives.COMPLEXITY_REASON["unknown"])


def is_intentional_complexity(category: str) -> bool:
    """Business rules and algorithms are earned complexity, not debt."""
    return category in ("business-logic", "algorithmic")


def assess_business_value(source_code: str, category: str) -> str:
    if category == "business-logic":
        if any(token in source_code for token in ("security", "payment", "access")):
            return "critical"
        return "high"
    if category == "algorithmic":
        return "high"
    return "medium"


def assess_security_implications(source_code: str) -> str:
    if matches_any(SECURITY_PATTERNS, source_code):
        return "critical"
    return "low"


def assess_migration_complexity(source_code: str) -> str:
    if "legacy" in source_code or "compatibility" in source_code:
        return "high"
    return "low"


def assess_technical_debt(source_code: str) -> str:
    if matches_any(TECHNICAL_DEBT_PATTERNS, source_code):
        return "high"
    return "low"


def assess_integration_complexity(source_code: str) -> str:
    integration_count = len(INTEGRATION_TOKEN_PATTERN.findall(source_code))
    if integration_count > 3:
        return "high"
    if integration_count > 1:
        return "medium"
    return "low"


def extract_external_dependencies(source_code: str) -> tuple[str, ...]:
    """Matched provider names, API clients and external services, deduplicated in order."""
    dependencies: list[str] = []
    for pattern in EXTERNAL_DEPENDENCY_PATTERNS:
        dependencies.extend(match.group(0) for match in pattern.finditer(source_code))
    return tuple(dict.fromkeys(dependencies))


def _has_ranking_vocabulary(source_code: str) -> bool:
    return "similarity" in source_code and "ranking" in source_code


def extract_algorithmic_purpose(source_code: str) -> str:
    if _has_ranking_vocabulary(source_code):
        return narratives.ALGORITHMIC_PURPOSE
    return ""


def extract_performance_considerations(source_code: str) -> str:
    if _has_ranking_vocabulary(source_code):
        return narratives.PERFORMANCE_CONSIDERATIONS
    return ""


def estimate_algorithmic_complexity(source_code: str) -> str:
    """Best-effort Big-O hint: a loop over a documents-like collection reads as O(n*m).

    This is a text heuristic, not an asymptotic analysis.
    """
    if LOOP_KEYWORD_PATTERN.search(source_code) and "documents" in source_code:
        return "O(n*m)"
    return ""


def extract_historical_context(source_code: str) -> str:
    parts: list[str] = []

    issues = ISSUE_REFERENCE_PATTERN.findall(source_code)
    if issues:
        parts.append(narratives.HISTORICAL_ISSUES.format(issues=", ".join(issues)))

    dates = DATE_STAMP_PATTERN.findall(source_code)
    if dates:
        parts.append(narratives.HISTORICAL_DATES.format(dates=", ".join(dates)))

    if "Safari" in source_code:
        parts.append(narratives.HISTORICAL_SAFARI)

    if "leap year" in source_code or "うるう年" in source_code:
        parts.append(narratives.HISTORICAL_LEAP_YEAR)

    return narratives.HISTORICAL_SEPARATOR.join(parts)


def assess_refactoring_priority(technical_debt: str, complexity: int) -> str:
    if technical_debt == "high" and complexity > 20:
        return "high"
    if technical_debt == "high" or complexity > 25:
        return "medium"
    return "low"


def classify_complexity(
    description: FunctionDescription,
    pinned_examples: Optional[Mapping[str, str]] = None,
) -> ComplexityIntentResult:
    """Classify the cause of a function's complexity and derive its attributes.

    Args:
        description: The function to classify.
        pinned_examples: Optional function-name -> category overrides. If None, the
            configured pinned examples are used.

    Returns:
        ComplexityIntentResult. Never raises for a valid description; absent signals
        resolve to "", "unknown" or "low".
    """
    if pinned_examples is None:
        pinned_examples = get_pinned_examples()

    source = description.source_code
    category = categorize_complexity(description.function_name, source, pinned_examples)
    secondary = identify_secondary_categories(source, category)
    technical_debt = assess_technical_debt(source)

    logger.debug(
        "Complexity: %s classified as %s (secondary=%s)",
        description.function_name,
        category,
        list(secondary),
    )

    return ComplexityIntentResult(
        complexity_category=category,
        secondary_categories=secondary,
        business_background=extract_business_background(source, category),
        technical_constraints=extract_technical_constraints(source, category),
        complexity_reason=generate_complexity_reason(source, category),
        historical_context=extract_historical_context(source),
        intentional_complexity=is_intentional_complexity(category),
        business_value=assess_business_value(source, category),
        security_implications=assess_security_implications(source),
        migration_complexity=assess_migration_complexity(source),
        technical_debt=technical_debt,
        integration_complexity=assess_integration_complexity(source),
        refactoring_priority=assess_refactoring_priority(technical_debt, description.complexity),
        external_dependencies=extract_external_dependencies(source),
        algorithmic_purpose=extract_algorithmic_purpose(source),
        performance_considerations=extract_performance_considerations(source),
        algorithmic_complexity=estimate_algorithmic_complexity(source),
        mixed_complexity_reason=narratives.MIXED_COMPLEXITY_REASON if secondary else "",
    )
