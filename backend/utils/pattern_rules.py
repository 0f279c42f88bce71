"""Static pattern rule tables shared by the classifiers.

Every table is a tuple of compiled, case-insensitive regular expressions. The ordered
category table makes classification priority explicit: the first group with any match
wins. Nothing here is mutated after import.
"""

import re


def _compile(*patterns: str, flags: int = re.IGNORECASE) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, flags) for pattern in patterns)


def matches_any(patterns: tuple[re.Pattern, ...], text: str) -> bool:
    """Return True if any pattern matches somewhere in text."""
    return any(pattern.search(text) for pattern in patterns)


# ============================================================================
# COMPLEXITY CATEGORY PATTERNS
# ============================================================================

BUSINESS_LOGIC_PATTERNS = _compile(
    r"user\.type|userType|accountType",
    r"enterprise|smb|b2b|b2c|individual",
    r"subscription|premium|basic|plan",
    r"pricing|discount|fee|cost",
    r"role|permission|access|auth",
    r"tenant|organization|department",
    r"contract|tier|loyalty",
    r"customer|client|user",
    r"calculatePricing|validateUserPermissions",
    r"checkResourceAccess|processUserSubscription",
    r"admin|super_admin",
    r"platinum|gold|silver",
)

TECHNICAL_CONSTRAINT_PATTERNS = _compile(
    r"legacy|mainframe|cobol",
    r"compatibility|backward",
    r"fixed.*width|pad.*start|pad.*end",
    r"fallback|retry|error.*handling",
    r"format.*conversion|transform",
    r"syncCustomerData|syncWithExternalAPI",
    r"legacyApiTransform|normalizeResponse",
    r"modernApiClient|legacySystemClient",
)

# Narrow on purpose: generic loops and sorts must not be read as algorithmic work.
ALGORITHMIC_PATTERNS = _compile(
    r"similarity.*cosine",
    r"tf.*idf.*vector",
    r"ranking.*algorithm",
    r"levenshtein.*score",
)

INTEGRATION_PATTERNS = _compile(
    r"api.*client|external.*api",
    r"rate.*limit|throttle",
    r"stripe|paypal|square|braintree",
    r"response.*format|different.*format",
    r"aggregatePaymentProviders",
    r"providers.*=.*\[",
    r"await.*client\.",
)

HISTORICAL_PATTERNS = (
    *_compile(
        r"fix.*for.*issue|issue.*#\d+",
        r"bug.*fix|workaround",
        r"safari|browser.*compatibility",
    ),
    *_compile(r"\d{4}-\d{2}-\d{2}|\d{4}/\d{2}/\d{2}", flags=0),
    *_compile(r"legacy.*implementation|old.*implementation"),
)

# Priority order for the primary category.
CATEGORY_RULES: tuple[tuple[str, tuple[re.Pattern, ...]], ...] = (
    ("business-logic", BUSINESS_LOGIC_PATTERNS),
    ("technical-constraints", TECHNICAL_CONSTRAINT_PATTERNS),
    ("algorithmic", ALGORITHMIC_PATTERNS),
    ("integration", INTEGRATION_PATTERNS),
    ("historical-layers", HISTORICAL_PATTERNS),
)

# Re-run regardless of the primary category to detect mixed complexity.
SECONDARY_CATEGORY_RULES: tuple[tuple[str, tuple[re.Pattern, ...]], ...] = (
    ("technical-constraints", TECHNICAL_CONSTRAINT_PATTERNS),
    ("historical-layers", HISTORICAL_PATTERNS),
    ("integration", INTEGRATION_PATTERNS),
)

# ============================================================================
# ENRICHMENT PATTERNS
# ============================================================================

SECURITY_PATTERNS = _compile(
    r"permission|access|auth",
    r"tenant|security",
    r"password|token|credential",
)

TECHNICAL_DEBT_PATTERNS = _compile(
    r"workaround|hack|fix.*for",
    r"legacy|compatibility",
    r"issue.*#\d+",
)

INTEGRATION_TOKEN_PATTERN = re.compile(r"client|service|provider", re.IGNORECASE)

EXTERNAL_DEPENDENCY_PATTERNS = _compile(
    r"stripe|paypal|square|braintree",
    r"api.*client",
    r"external.*service",
)

ISSUE_REFERENCE_PATTERN = re.compile(r"Issue #\d+", re.IGNORECASE)
DATE_STAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
LOOP_KEYWORD_PATTERN = re.compile(r"\b(?:for|while)\b")

# ============================================================================
# NARRATIVE (TWO-GROUP) PATTERNS
# ============================================================================

NARRATIVE_BUSINESS_PATTERNS = _compile(
    r"user\.type|userType",
    r"accountType|account\.type",
    r"subscription|pricing|discount",
    r"role|permission|access",
    r"b2b|b2c|enterprise|smb",
)

NARRATIVE_TECHNICAL_PATTERNS = _compile(
    r"legacy|mainframe|cobol",
    r"api.*client|external.*api",
    r"compatibility|backward",
    r"rate.*limit|throttle",
)

NARRATIVE_CATEGORY_RULES: tuple[tuple[str, tuple[re.Pattern, ...]], ...] = (
    ("business-logic", NARRATIVE_BUSINESS_PATTERNS),
    ("technical-constraints", NARRATIVE_TECHNICAL_PATTERNS),
)

# ============================================================================
# TEST NAME TOKENS (case-sensitive substring checks)
# ============================================================================

MOCK_NAME_TOKENS = ("call", "mock", "stub")
COUPLING_NAME_TOKENS = ("should call", "mock", "stub")
GIVEN_WHEN_THEN_TOKENS = ("Given", "When", "Then")
EDGE_CASE_NAME_TOKENS = (
    "boundary",
    "edge",
    "negative",
    "zero",
    "null",
    "empty",
    "invalid",
    "error",
    "exception",
)
PLACEHOLDER_TEST_NAMES = ("test1",)
