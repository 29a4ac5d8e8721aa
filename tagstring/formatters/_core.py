"""Core output dispatchers."""

import json
import sys

from tagstring import config


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        pretty_print(data)


def warn(message):
    """Print a [WARN] line to stderr unless --quiet is active."""
    if config.RUNTIME_QUIET:
        return
    print(f"[WARN] {message}", file=sys.stderr)


def state_warnings(state):
    """Return the user-facing warnings carried by a state dict."""
    warnings = []
    if state.get("unrecognized"):
        warnings.append(f"Unrecognized: {', '.join(state['unrecognized'])}")
    for req in state.get("requirements", []):
        if req["unmet"]:
            warnings.append(f"{req['category']}: {req['message']}")
    limit = state.get("limit") or {}
    if limit.get("exceeded"):
        warnings.append(f"Character limit exceeded ({limit['display']})")
    return warnings
