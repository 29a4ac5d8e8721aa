"""Read tools: catalog listing and selection queries (5 tools)."""

from __future__ import annotations

from tagstring.mcp_server._core import _call, _finalize_tool_result


def get_catalog() -> dict:
    """Get the loaded catalog: separators, character limit, categories and tags.

    Returns:
        Dict with separator, alternative_separator, character_limit,
        reference, categories (each with subgroups of tags).
    """
    return _finalize_tool_result(_call("catalog_summary"))


def get_state() -> dict:
    """Get the current selection with both output strings and all warnings.

    Returns:
        Dict with text, canonical, alternative, alternative_visible,
        unrecognized, selection, requirements, limit.
    """
    return _finalize_tool_result(_call("state"))


def get_alternative(dedup: bool | None = None) -> dict:
    """Get the alternative string of the current selection.

    Args:
        dedup: Drop repeated alternatives (case/whitespace-insensitive).
            Defaults to the engine setting.
    """
    result = _call("alternative_string", dedup=dedup)
    if isinstance(result, dict):
        return _finalize_tool_result(result)
    return _finalize_tool_result({"alternative": result})


def get_buttons(category: str | None = None) -> dict:
    """Get selected/ordered flags for every tag name, optionally for one category."""
    result = _call("button_states", category=category)
    if isinstance(result, dict):
        return _finalize_tool_result(result)
    return _finalize_tool_result({"buttons": result})


def get_requirements(unmet_only: bool = False) -> dict:
    """Get per-category requirement status (atLeastOne / atLeastOneMain)."""
    result = _call("requirement_warnings", unmet_only=unmet_only)
    if isinstance(result, dict):
        return _finalize_tool_result(result)
    return _finalize_tool_result({"requirements": result})


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(get_catalog)
    mcp.tool()(get_state)
    mcp.tool()(get_alternative)
    mcp.tool()(get_buttons)
    mcp.tool()(get_requirements)
