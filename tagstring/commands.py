"""
Command implementations for tagstring.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in engine.py (TagsEngine). These thin wrappers handle
argparse → keyword args, autosave hydration, format selection, and
formatter dispatch.
"""

import sys

from tagstring import config
from tagstring.engine import TagsEngine
from tagstring.exceptions import TagstringError
from tagstring.formatters import (
    format_buttons_table,
    format_catalog_table,
    format_click_table,
    format_state_table,
    output,
    state_warnings,
    warn,
)
from tagstring.loader import clear_autosave, load_autosave, save_autosave

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_text_arg(text):
    """Return *text*, reading stdin when it is "-"."""
    if text == "-":
        text = sys.stdin.read().rstrip("\n")
    if len(text) > config.MAX_INPUT_CHARS:
        raise TagstringError(
            f"[ERROR] Input text is {len(text)} chars; the maximum is {config.MAX_INPUT_CHARS}."
        )
    return text


def _build_engine(ns):
    return TagsEngine.from_file(
        getattr(ns, "catalog", None),
        limit_enabled=getattr(ns, "limit_enabled", None),
        dedup_alternatives=getattr(ns, "dedup", None),
    )


def _hydrate_from_autosave(engine):
    """Restore the autosaved selection. Returns the Autosave or None."""
    saved = load_autosave(engine.catalog_digest)
    if saved is None:
        return None
    if saved.stale:
        warn("Autosave was made with a different catalog; some tags may not resolve.")
    engine.hydrate(saved.text)
    return saved


def _emit_state_warnings(state):
    for w in state_warnings(state):
        warn(w)


def _maybe_save(ns, engine):
    if getattr(ns, "save", False):
        save_autosave(engine.canonical_string(), engine.catalog_digest)


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def cmd_catalog(ns):
    engine = _build_engine(ns)
    output(engine.catalog_summary(), format_catalog_table, ns.format)


def cmd_state(ns):
    engine = _build_engine(ns)
    if _hydrate_from_autosave(engine) is None and not config.RUNTIME_QUIET:
        print("No saved selection.", file=sys.stderr)
    if ns.buttons:
        output(engine.button_states(ns.category), format_buttons_table, ns.format)
        return
    state = engine.state()
    _emit_state_warnings(state)
    output(state, format_state_table, ns.format)


def cmd_alt(ns):
    engine = _build_engine(ns)
    engine.parse_text(_read_text_arg(ns.text))
    if engine.unrecognized:
        warn(f"Unrecognized: {', '.join(engine.unrecognized)}")
    output(
        {"alternative": engine.alternative_string(), "dedup": engine.dedup_alternatives},
        lambda d: d["alternative"],
        ns.format,
    )


# ---------------------------------------------------------------------------
# Mutation commands
# ---------------------------------------------------------------------------


def cmd_parse(ns):
    engine = _build_engine(ns)
    state = engine.parse_text(_read_text_arg(ns.text), reformat=ns.reformat)
    _emit_state_warnings(state)
    _maybe_save(ns, engine)
    output(state, format_state_table, ns.format)


def cmd_click(ns):
    engine = _build_engine(ns)
    if ns.text is not None:
        engine.hydrate(_read_text_arg(ns.text))
    else:
        _hydrate_from_autosave(engine)

    clicks = []
    for tag in ns.tags:
        result = engine.click(ns.category, tag)
        if not result["accepted"]:
            warn(f"Click on '{tag}' rejected: character limit exceeded.")
        clicks.append({k: v for k, v in result.items() if k != "state"})

    state = engine.state()
    _emit_state_warnings(state)
    _maybe_save(ns, engine)
    output({"clicks": clicks, "state": state}, format_click_table, ns.format)


def cmd_clear(ns):
    removed = clear_autosave()
    output(
        {"cleared": removed},
        lambda d: "Saved selection cleared." if d["cleared"] else "Nothing to clear.",
        ns.format,
    )
