"""Allow ``python -m tagstring.mcp_server``."""

from tagstring.mcp_server import main

main()
