"""Narrative templates for the classifiers.

Pure lookup tables from enum values to display text. Presentation layers treat every
string as opaque display text. Wording can change here without touching any
classification rule.
"""

from types import MappingProxyType

# ============================================================================
# COMPLEXITY CLASSIFIER
# ============================================================================

BUSINESS_BACKGROUND = MappingProxyType({
    "multi-segment-pricing": (
        "Pricing strategy serving several customer segments "
        "(Enterprise, SMB and individual customers)"
    ),
    "multi-tenant-access": (
        "Security and access control across a multi-tenant environment"
    ),
    "generic": (
        "Business requirements call for multiple user types and conditional branches"
    ),
})

TECHNICAL_CONSTRAINTS = MappingProxyType({
    "legacy": (
        "Fixed-width field conversion kept for compatibility with legacy systems "
        "(COBOL, mainframe)"
    ),
    "external-system": "Technical constraints imposed by integration with external systems",
    "integration": "External APIs, rate limiting and differing data formats must all be handled",
})

COMPLEXITY_REASON = MappingProxyType({
    "business-logic": "Pricing rules that differ per customer segment drive the branching",
    "business-logic:tenant-permission": (
        "Tenant isolation and hierarchical permission management drive the branching"
    ),
    "business-logic:segment-pricing": (
        "Pricing rules that differ per customer segment drive the branching"
    ),
    "technical-constraints": (
        "Backward compatibility and external system integration requirements add complexity"
    ),
    "technical-constraints:legacy": (
        "Backward compatibility with legacy systems and external system integration "
        "requirements add complexity"
    ),
    "integration": "Differing data formats and coordination with external services add complexity",
    "algorithmic": (
        "TF-IDF and cosine similarity calculations for search accuracy add complexity"
    ),
    "historical-layers": (
        "Accumulated bug fixes and browser compatibility workarounds add complexity"
    ),
    "unknown": "Complexity drivers are still being identified",
})

ALGORITHMIC_PURPOSE = (
    "TF-IDF, cosine similarity and ranking algorithms for search accuracy"
)
PERFORMANCE_CONSIDERATIONS = "Balance between computational cost and memory efficiency"
MIXED_COMPLEXITY_REASON = (
    "Compound complexity from several drivers combined "
    "(business logic, technical constraints, historical layers)"
)

HISTORICAL_ISSUES = "{issues} fix history"
HISTORICAL_DATES = "changes dated {dates}"
HISTORICAL_SAFARI = "Safari browser compatibility handling"
HISTORICAL_LEAP_YEAR = "leap year handling fix"
HISTORICAL_SEPARATOR = "; "

# ============================================================================
# RISK SYNTHESIZER
# ============================================================================

NARRATIVE_COMPLEXITY_REASON = MappingProxyType({
    "business-logic": (
        "Business requirements need many conditional branches, so the complexity is "
        "inherent to the specification"
    ),
    "business-logic:b2b": "B2B/B2C user permission structures drive the branching",
    "technical-constraints": (
        "Compatibility with external systems and technical constraints require complex "
        "conversion and handling logic"
    ),
    "technical-constraints:api": (
        "Integration with external APIs and compatibility with existing assets require "
        "complex conversion and handling logic"
    ),
    "unknown": "Complexity drivers are still being identified",
})

NARRATIVE_BUSINESS_BACKGROUND = (
    "Designed around business requirements that need multiple user types and conditional branches"
)
NARRATIVE_TECHNICAL_CONSTRAINTS = "Technical constraints from external system integration requirements"

RISK_ASSESSMENT = MappingProxyType({
    "critical": "[High risk] Missing tests make unexpected side effects on change likely",
    "high": "High complexity with only partial test coverage; changes carry real risk",
    "medium": "Moderate complexity or coverage gaps; review changes carefully",
    "low": "Well tested; the risk of changing this function is low",
})

STRATEGIC_EVALUATION_BY_RISK = MappingProxyType({
    "critical": (
        "Building tests is the top priority. Incremental refactoring backed by "
        "integration tests is strongly recommended"
    ),
    "high": "Raise branch coverage before restructuring this function",
    "medium": "Improve test quality before making structural changes",
    "low": "Adequately safeguarded. Keep the current implementation and test strategy",
})

STRATEGIC_RECOMMENDATIONS_BY_RISK = MappingProxyType({
    "critical": ("incremental refactoring", "add integration tests"),
    "high": ("improve test quality",),
    "medium": ("improve test quality",),
    "low": (),
})

TEST_STRATEGY = MappingProxyType({
    "behavior-driven": (
        "Tests are written in terms of behavior and cover the happy path and boundary values"
    ),
    "implementation-coupled": (
        "Test design is coupled to implementation details; move toward behavior-based tests"
    ),
    "missing": "No tests exist; behavior-based tests are urgently needed",
    "coverage-driven": (
        "Tests exercise code paths without describing behavior; rewrite them as specifications"
    ),
    "specification-based": "Tests read as executable specifications",
})

STRATEGIC_EVALUATION_BY_PHILOSOPHY = MappingProxyType({
    "behavior-driven": "Tests read as a specification; the test design is strategically sound",
    "implementation-coupled": (
        "Tests are pulled too far into implementation details; resistance to refactoring is low"
    ),
    "missing": "Without tests, every change relies on manual verification",
    "coverage-driven": "Coverage numbers are met but the tests do not document intent",
    "specification-based": "Tests document intent and protect observable behavior",
})

RECOMMENDATIONS_BY_PHILOSOPHY = MappingProxyType({
    "implementation-coupled": ("behavior-based tests", "reduce mock usage"),
    "missing": ("incremental refactoring", "add integration tests"),
})

TEST_SMELL_EXCESSIVE_MOCKING = "excessive mocking"
TEST_SMELL_INTERNAL_STRUCTURE = "internal-structure dependency"

BEHAVIOR_DESCRIPTION = "Expected behavior description for {function_name}"

# ============================================================================
# COMPREHENSIVE COMPOSER
# ============================================================================

COMPREHENSIVE_SUMMARY = """\
## Comprehensive Test Evaluation Summary

### Vladimir Khorikov: Four Pillars
- Protection against regressions: {protection_against_regressions}
- Resistance to refactoring: {resistance_to_refactoring}
- Fast feedback: {fast_feedback}
- Maintainability: {maintainability}
- Overall: {khorikov_overall}

### T-wada: Tests as Specifications
- Specification clarity: {specification_clarity}
- Behavior focus: {behavior_focus}
- Given-When-Then structure: {test_structure_clarity}
- Test name expressiveness: {test_name_expressiveness}
- Edge-case coverage: {edge_case_coverage}
- Overall: {twada_overall}

From both perspectives, the tests for {function_name} are rated {khorikov_overall} quality."""

ACTIONABLE_RECOMMENDATIONS = MappingProxyType({
    "reduce-implementation-coupling": MappingProxyType({
        "category": "test-strategy",
        "priority": "immediate",
        "description": "Reduce implementation coupling in tests",
        "rationale": "Improves resistance to refactoring",
        "estimated_effort": "medium",
    }),
    "rewrite-as-behavior-specifications": MappingProxyType({
        "category": "test-strategy",
        "priority": "short-term",
        "description": "Rewrite tests as behavior specifications",
        "rationale": "Follows the principle that tests are specifications",
        "estimated_effort": "high",
    }),
    "establish-baseline-tests": MappingProxyType({
        "category": "test-strategy",
        "priority": "immediate",
        "description": "Establish baseline tests",
        "rationale": "Lays the foundation for code quality",
        "estimated_effort": "high",
    }),
    "continuous-improvement": MappingProxyType({
        "category": "test-strategy",
        "priority": "short-term",
        "description": "Continue improving test quality",
        "rationale": "Keeps long-term maintainability improving",
        "estimated_effort": "medium",
    }),
})
