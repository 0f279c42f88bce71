"""Pinned example configuration loader and validator.

Pinned examples map a literal function name straight to a complexity category,
bypassing the general pattern rules. They live in a versioned JSON file:

    {
        "version": "1.0",
        "pinned_examples": [
            {"function_name": "syncCustomerData", "category": "technical-constraints"}
        ]
    }

The packaged file sits in utils/rules/. Set ANALYZER_RULES_DIR to load it from
another directory.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from models.analysis import COMPLEXITY_CATEGORIES

logger = logging.getLogger(__name__)

PINNED_EXAMPLES_FILE = "pinned_examples.json"


@dataclass(frozen=True)
class PinnedExample:
    """A literal function name pinned to a category."""

    function_name: str
    category: str


@dataclass(frozen=True)
class PinnedExamplesConfig:
    """Complete pinned example configuration."""

    version: str
    examples: tuple[PinnedExample, ...]

    def as_mapping(self) -> Mapping[str, str]:
        """Return a read-only function-name -> category mapping."""
        return MappingProxyType({ex.function_name: ex.category for ex in self.examples})


def _get_default_config_dir() -> Path:
    """Get the rules config directory, honoring ANALYZER_RULES_DIR."""
    override = os.getenv("ANALYZER_RULES_DIR", "").strip()
    if override:
        return Path(override)
    return Path(__file__).resolve().parent / "rules"


def _load_json_file(file_path: Path, file_name: str) -> dict:
    """Load and parse a JSON file.

    Raises:
        ValueError: If file is missing or contains invalid JSON.
    """
    if not file_path.exists():
        raise ValueError(
            f"Missing configuration file '{file_name}' at expected path: {file_path}"
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in '{file_name}': {e.msg} at line {e.lineno}, column {e.colno}"
        ) from e


def _validate_pinned_examples(data: dict, file_name: str) -> PinnedExamplesConfig:
    """Validate and parse pinned_examples.json structure.

    Raises:
        ValueError: If structure is invalid.
    """
    if not isinstance(data, dict):
        raise ValueError(f"'{file_name}': root must be an object, got {type(data).__name__}")

    if "version" not in data:
        raise ValueError(f"'{file_name}': missing required key 'version'")
    if not isinstance(data["version"], str):
        raise ValueError(
            f"'{file_name}': 'version' must be a string, got {type(data['version']).__name__}"
        )
    version = data["version"]

    if "pinned_examples" not in data:
        raise ValueError(f"'{file_name}': missing required key 'pinned_examples'")
    if not isinstance(data["pinned_examples"], list):
        raise ValueError(
            f"'{file_name}': 'pinned_examples' must be a list, got {type(data['pinned_examples']).__name__}"
        )

    examples: list[PinnedExample] = []
    seen_names: set[str] = set()
    for i, entry in enumerate(data["pinned_examples"]):
        if not isinstance(entry, dict):
            raise ValueError(
                f"'{file_name}': 'pinned_examples'[{i}] must be an object, got {type(entry).__name__}"
            )

        for key in ("function_name", "category"):
            if key not in entry:
                raise ValueError(f"'{file_name}': 'pinned_examples'[{i}] missing required key '{key}'")
            if not isinstance(entry[key], str):
                raise ValueError(
                    f"'{file_name}': 'pinned_examples'[{i}]['{key}'] must be a string, got {type(entry[key]).__name__}"
                )
            if not entry[key]:
                raise ValueError(f"'{file_name}': 'pinned_examples'[{i}]['{key}'] must be non-empty")

        function_name = entry["function_name"]
        category = entry["category"]
        if category not in COMPLEXITY_CATEGORIES:
            raise ValueError(
                f"'{file_name}': 'pinned_examples'[{i}]['category'] references unknown category '{category}'. "
                f"Known categories: {sorted(COMPLEXITY_CATEGORIES)}"
            )
        if function_name in seen_names:
            raise ValueError(
                f"'{file_name}': duplicate function_name '{function_name}' in 'pinned_examples' list"
            )
        seen_names.add(function_name)

        examples.append(PinnedExample(function_name=function_name, category=category))

    return PinnedExamplesConfig(version=version, examples=tuple(examples))


def load_pinned_examples(config_dir: Optional[Path] = None) -> PinnedExamplesConfig:
    """Load and validate the pinned example configuration.

    Args:
        config_dir: Optional directory containing pinned_examples.json. If None, uses
            ANALYZER_RULES_DIR or the packaged utils/rules directory.

    Returns:
        PinnedExamplesConfig with all loaded and validated entries.

    Raises:
        ValueError: If the file is missing, contains invalid JSON, or has invalid structure.
    """
    if config_dir is None:
        config_dir = _get_default_config_dir()

    data = _load_json_file(config_dir / PINNED_EXAMPLES_FILE, PINNED_EXAMPLES_FILE)
    return _validate_pinned_examples(data, PINNED_EXAMPLES_FILE)


@dataclass(frozen=True)
class ActivePinnedExamples:
    """Pinned examples the classifier applies in this process.

    error is set when the configuration could not be loaded; mapping is then empty.
    """

    version: Optional[str]
    mapping: Mapping[str, str]
    error: Optional[str] = None


# Loaded on first use and shared by the classifier and the rules endpoint.
# reset_pinned_examples() clears it so the next access reloads from disk.
_ACTIVE_PINNED_EXAMPLES: ActivePinnedExamples | None = None


def get_active_pinned_examples() -> ActivePinnedExamples:
    """Return the pinned examples in effect, loading them on first use.

    Falls back to an empty mapping (general rules only) if the config cannot be loaded.
    """
    global _ACTIVE_PINNED_EXAMPLES
    if _ACTIVE_PINNED_EXAMPLES is not None:
        return _ACTIVE_PINNED_EXAMPLES

    try:
        config = load_pinned_examples()
    except ValueError as exc:
        logger.warning("Rules: failed to load pinned examples, overrides disabled: %s", exc)
        _ACTIVE_PINNED_EXAMPLES = ActivePinnedExamples(
            version=None, mapping=MappingProxyType({}), error=str(exc)
        )
    else:
        logger.debug("Rules: loaded %d pinned examples (version %s)", len(config.examples), config.version)
        _ACTIVE_PINNED_EXAMPLES = ActivePinnedExamples(version=config.version, mapping=config.as_mapping())
    return _ACTIVE_PINNED_EXAMPLES


def get_pinned_examples() -> Mapping[str, str]:
    """Return the read-only function-name -> category mapping in effect."""
    return get_active_pinned_examples().mapping


def reset_pinned_examples() -> None:
    """Forget the loaded pinned examples; the next access reloads the config."""
    global _ACTIVE_PINNED_EXAMPLES
    _ACTIVE_PINNED_EXAMPLES = None
