"""Tests for the pinned example configuration loader and validator.

These tests verify that load_pinned_examples() loads and validates pinned_examples.json
with clear errors, and that get_pinned_examples() falls back to no overrides.
"""

import json
from pathlib import Path

import pytest

from utils.rules_config import (
    PinnedExamplesConfig,
    get_active_pinned_examples,
    get_pinned_examples,
    load_pinned_examples,
    reset_pinned_examples,
)


@pytest.fixture(autouse=True)
def fresh_pinned_examples():
    """Forget loaded pinned examples around every test."""
    reset_pinned_examples()
    yield
    reset_pinned_examples()


def write_pinned_examples(tmp_path: Path, data) -> Path:
    """Write pinned_examples.json with the given content."""
    file_path = tmp_path / "pinned_examples.json"
    file_path.write_text(json.dumps(data, indent=2))
    return file_path


def test_packaged_config_loads():
    """The packaged rules file holds the five pinned examples."""
    config = load_pinned_examples()

    assert isinstance(config, PinnedExamplesConfig)
    assert config.version == "1.0"
    mapping = config.as_mapping()
    assert mapping == {
        "syncCustomerData": "technical-constraints",
        "aggregatePaymentProviders": "integration",
        "fuzzySearchWithRanking": "algorithmic",
        "dateTimeParser": "historical-layers",
        "processUserSubscription": "business-logic",
    }


def test_load_valid_config(tmp_path):
    write_pinned_examples(
        tmp_path,
        {"version": "2.0", "pinned_examples": [{"function_name": "legacyBridge", "category": "integration"}]},
    )

    config = load_pinned_examples(tmp_path)

    assert config.version == "2.0"
    assert config.examples[0].function_name == "legacyBridge"
    assert config.examples[0].category == "integration"


def test_mapping_is_read_only(tmp_path):
    write_pinned_examples(tmp_path, {"version": "1.0", "pinned_examples": []})
    mapping = load_pinned_examples(tmp_path).as_mapping()

    with pytest.raises(TypeError):
        mapping["newName"] = "algorithmic"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ValueError, match="Missing configuration file 'pinned_examples.json'"):
        load_pinned_examples(tmp_path)


def test_invalid_json_raises(tmp_path):
    (tmp_path / "pinned_examples.json").write_text("{not json")

    with pytest.raises(ValueError, match="Invalid JSON in 'pinned_examples.json'"):
        load_pinned_examples(tmp_path)


@pytest.mark.parametrize(
    "data,message",
    [
        ([], "root must be an object"),
        ({"pinned_examples": []}, "missing required key 'version'"),
        ({"version": 1, "pinned_examples": []}, "'version' must be a string"),
        ({"version": "1.0"}, "missing required key 'pinned_examples'"),
        ({"version": "1.0", "pinned_examples": {}}, "'pinned_examples' must be a list"),
        ({"version": "1.0", "pinned_examples": ["syncCustomerData"]}, "must be an object"),
        (
            {"version": "1.0", "pinned_examples": [{"function_name": "syncCustomerData"}]},
            "missing required key 'category'",
        ),
        (
            {"version": "1.0", "pinned_examples": [{"function_name": "", "category": "integration"}]},
            "must be non-empty",
        ),
        (
            {"version": "1.0", "pinned_examples": [{"function_name": "x", "category": "performance"}]},
            "unknown category 'performance'",
        ),
        (
            {
                "version": "1.0",
                "pinned_examples": [
                    {"function_name": "x", "category": "integration"},
                    {"function_name": "x", "category": "algorithmic"},
                ],
            },
            "duplicate function_name 'x'",
        ),
    ],
)
def test_invalid_structure_raises(tmp_path, data, message):
    """Every structural problem is reported as a ValueError naming the file."""
    write_pinned_examples(tmp_path, data)

    with pytest.raises(ValueError, match=message):
        load_pinned_examples(tmp_path)


def test_env_override_directory(monkeypatch, tmp_path):
    """ANALYZER_RULES_DIR points the loader at another directory."""
    write_pinned_examples(
        tmp_path,
        {"version": "1.0", "pinned_examples": [{"function_name": "rankDocuments", "category": "algorithmic"}]},
    )
    monkeypatch.setenv("ANALYZER_RULES_DIR", str(tmp_path))

    assert dict(get_pinned_examples()) == {"rankDocuments": "algorithmic"}


def test_broken_config_falls_back_to_no_overrides(monkeypatch, tmp_path):
    """A missing or invalid file disables overrides instead of raising."""
    monkeypatch.setenv("ANALYZER_RULES_DIR", str(tmp_path / "does-not-exist"))

    assert dict(get_pinned_examples()) == {}
    assert get_active_pinned_examples().error is not None


def test_loaded_examples_are_kept_until_reset(monkeypatch, tmp_path):
    """Edits on disk take effect only after reset_pinned_examples()."""
    write_pinned_examples(
        tmp_path,
        {"version": "1.0", "pinned_examples": [{"function_name": "rankDocuments", "category": "algorithmic"}]},
    )
    monkeypatch.setenv("ANALYZER_RULES_DIR", str(tmp_path))
    assert dict(get_pinned_examples()) == {"rankDocuments": "algorithmic"}

    write_pinned_examples(tmp_path, {"version": "1.1", "pinned_examples": []})
    assert dict(get_pinned_examples()) == {"rankDocuments": "algorithmic"}
    assert get_active_pinned_examples().version == "1.0"

    reset_pinned_examples()
    assert dict(get_pinned_examples()) == {}
    assert get_active_pinned_examples().version == "1.1"
    assert get_active_pinned_examples().error is None
