"""
Shared pure-utility functions for tagstring.

These helpers have no business logic. The only side effect is the opt-in
structured event line written to stderr by _log_engine_event.
"""

import json
import sys

from tagstring import config


def _log_engine_event(**fields):
    """Emit structured engine logs to stderr when enabled."""
    if not config.ENGINE_LOG_ENABLED:
        return
    print("[ENGINE] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def collapse_whitespace(text):
    """Trim, lower-case and collapse internal whitespace runs to one space."""
    return " ".join(text.lower().split())


def _dedupe_preserve_order(items):
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
