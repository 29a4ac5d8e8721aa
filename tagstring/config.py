"""
tagstring shared configuration, constants, and module-level state.
Standalone module — no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys that may also come from the process environment (containers, CI).
_ENVIRON_KEYS = (
    "TAGSTRING_CATALOG",
    "TAGSTRING_LIMIT_ENABLED",
    "TAGSTRING_DEDUP_ALTERNATIVES",
    "TAGSTRING_AUTOSAVE_PATH",
    "TAGSTRING_LOG",
    "TAGSTRING_MCP_RESPONSE_MODE",
    "TAGSTRING_MAX_INPUT_CHARS",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in _ENVIRON_KEYS:
        if key not in env and key in os.environ:
            env[key] = os.environ[key]
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"
CONTRACT_SCHEMA_VERSION = "1.0"

VALID_CATEGORY_TYPES = ("standard", "ordered", "single")
VALID_REQUIREMENTS = ("none", "atLeastOne", "atLeastOneMain")
VALID_RESPONSE_MODES = {"legacy", "envelope"}

DEFAULT_CATALOG_NAME = "tags.json"
DEFAULT_SEPARATOR = ", "

REQUIREMENT_TEXTS = {
    "atLeastOne": "At least one tag must be selected",
    "atLeastOneMain": "At least one main tag must be selected",
}

LIMIT_FLASH_TEXT = "LIMIT!"

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

CATALOG_PATH = env.get("TAGSTRING_CATALOG", DEFAULT_CATALOG_NAME)
LIMIT_ENABLED = _env_bool("TAGSTRING_LIMIT_ENABLED", True)
DEDUP_ALTERNATIVES = _env_bool("TAGSTRING_DEDUP_ALTERNATIVES", False)
AUTOSAVE_PATH = env.get(
    "TAGSTRING_AUTOSAVE_PATH", os.path.join(_PROJECT_ROOT, ".tagstring_autosave.json")
)
ENGINE_LOG_ENABLED = _env_bool("TAGSTRING_LOG", False)
MAX_INPUT_CHARS = max(1, _env_int("TAGSTRING_MAX_INPUT_CHARS", 20_000))

MCP_RESPONSE_MODE = env.get("TAGSTRING_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in VALID_RESPONSE_MODES:
    MCP_RESPONSE_MODE = "legacy"

# ---------------------------------------------------------------------------
# Runtime flags (set by the CLI entry point)
# ---------------------------------------------------------------------------

RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
