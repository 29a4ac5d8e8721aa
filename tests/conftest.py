"""
Shared test fixtures for tagstring tests.
Patches the config module so no test reads the real .env, catalog, or autosave.
"""

import copy
import json

import pytest

SAMPLE_CATALOG = {
    "separator": ", ",
    "alternativeSeparator": "; ",
    "characterLimit": 80,
    "reference": "Pick one subject first.",
    "categories": [
        {
            "name": "Subject",
            "type": "single",
            "requirement": "atLeastOne",
            "tags": [
                {"name": "Portrait", "alternative": "close-up of a face", "main": True},
                {"name": "Landscape", "alternative": "wide scenery", "knownAs": ["Scenery"]},
            ],
        },
        {
            "name": "Mood",
            "type": "standard",
            "description": "Overall feeling",
            "tags": [
                {"name": ["Bright", "Luminous"], "alternative": "well-lit"},
                {"name": "Dark", "alternative": "low-key", "requiredTag": "Moody"},
                {"name": "Moody", "alternative": "Low-Key "},
                {"name": "Versus", "knownAs": ["vs"]},
            ],
        },
        {
            "name": "Style",
            "type": "ordered",
            "requirement": "atLeastOneMain",
            "overrideRequirementText": "Pick a main style",
            "tags": [
                {"name": "Oil/Acrylic Paint", "main": True, "alternative": "painting"},
                {"name": "Sketch", "alternative": "drawing", "requiredTag": ["Ink", "Missing"]},
                {"name": "Ink", "subgroup": "Media"},
                {"name": "Watercolor", "main": True, "subgroup": "Media"},
            ],
        },
    ],
}


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or touching a real autosave."""
    from tagstring import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "CATALOG_PATH", str(tmp_path / "tags.json"))
    monkeypatch.setattr(config, "AUTOSAVE_PATH", str(tmp_path / ".tagstring_autosave.json"))
    monkeypatch.setattr(config, "LIMIT_ENABLED", True)
    monkeypatch.setattr(config, "DEDUP_ALTERNATIVES", False)
    monkeypatch.setattr(config, "ENGINE_LOG_ENABLED", False)
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")
    monkeypatch.setattr(config, "MAX_INPUT_CHARS", 20_000)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)


@pytest.fixture
def catalog_data():
    """A fresh, mutable copy of the sample catalog."""
    return copy.deepcopy(SAMPLE_CATALOG)


@pytest.fixture
def index(catalog_data):
    from tagstring.catalog import build_index

    return build_index(catalog_data)


@pytest.fixture
def engine(catalog_data):
    from tagstring.engine import TagsEngine

    return TagsEngine(catalog_data)


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    """Write the sample catalog as the default tags.json and return its path."""
    path = tmp_path / "tags.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path
