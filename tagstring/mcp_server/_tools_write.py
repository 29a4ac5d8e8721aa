"""Write tools: catalog loading and selection mutations (5 tools)."""

from __future__ import annotations

from tagstring.exceptions import CatalogError, TagstringError
from tagstring.mcp_server import _core
from tagstring.mcp_server._core import _call, _contract_error, _finalize_tool_result, _validate_text


def load_catalog(conf: str | None = None) -> dict:
    """Load a catalog file and start an empty selection.

    Args:
        conf: Catalog file path or name ("dark" means dark.json). Falls back
            to tags.json when the file cannot be read.
    """
    try:
        engine = _core._load_engine(conf)
    except CatalogError as e:
        return _finalize_tool_result(_contract_error(str(e), "catalog"))
    summary = engine.catalog_summary()
    return _finalize_tool_result(
        {
            "loaded": True,
            "categories": [c["name"] for c in summary["categories"]],
            "character_limit": summary["character_limit"],
        }
    )


def parse_text(text: str, reformat: bool = False) -> dict:
    """Replace the selection with the tags found in free text.

    Never blocked by the character limit; unknown tokens are reported in
    'unrecognized'.

    Args:
        text: Tag string, split on the catalog separator.
        reformat: Publish the canonical string as the text.
    """
    try:
        text = _validate_text(text)
    except TagstringError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("parse_text", text=text, reformat=reformat))


def toggle_tag(category: str, tag: str) -> dict:
    """Click a tag button. Rejected (and rolled back) if the result exceeds the limit.

    Returns:
        Dict with accepted, selected, limit_exceeded, pulse, state.
    """
    try:
        category = _validate_text(category, "category")
        tag = _validate_text(tag, "tag")
    except TagstringError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("click", category=category, tag=tag))


def clear_selection() -> dict:
    """Deselect everything."""
    return _finalize_tool_result(_call("clear"))


def set_options(limit_enabled: bool | None = None, dedup_alternatives: bool | None = None) -> dict:
    """Toggle character-limit enforcement and alternative de-duplication."""
    try:
        engine = _core._get_engine()
    except TagstringError as e:
        return _finalize_tool_result(_contract_error(str(e), "catalog"))
    if limit_enabled is not None:
        engine.limit_enabled = limit_enabled
    if dedup_alternatives is not None:
        engine.dedup_alternatives = dedup_alternatives
    return _finalize_tool_result(
        {
            "limit_enabled": engine.limit_enabled,
            "dedup_alternatives": engine.dedup_alternatives,
            "limit": engine.limit_status(),
        }
    )


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(load_catalog)
    mcp.tool()(parse_text)
    mcp.tool()(toggle_tag)
    mcp.tool()(clear_selection)
    mcp.tool()(set_options)
