"""MCP server exposing TagsEngine as tools.

Package structure:
  __init__.py      — FastMCP init, register() calls, re-exports
  __main__.py      — ``python -m tagstring.mcp_server`` entry point
  _core.py         — Engine caching, _call dispatcher, response contract, validation
  _tools_read.py   — 5 catalog/selection query tools
  _tools_write.py  — 5 loading/mutation tools

Run: python -m tagstring.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from tagstring.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "tagstring",
    instructions=(
        "Tag string builder over a declarative tag catalog. "
        "Call get_catalog first to learn category and tag names. "
        "toggle_tag behaves like clicking a button and is rejected when the "
        "result would exceed the character limit; parse_text replaces the "
        "whole selection from free text and is never rejected."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from tagstring.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_engine,
    _validate_text,
)
from tagstring.mcp_server._tools_read import (  # noqa: E402, F401
    get_alternative,
    get_buttons,
    get_catalog,
    get_requirements,
    get_state,
)
from tagstring.mcp_server._tools_write import (  # noqa: E402, F401
    clear_selection,
    load_catalog,
    parse_text,
    set_options,
    toggle_tag,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
