# =============================================================================
# hamibot_mcp
# =============================================================================
# MCP tool server for Hamibot remote device automation.
#
# LAYOUT:
#   core/   → settings, errors, argument schemas, and the HTTP client.
#             Nothing in core/ imports FastMCP.
#   tools/  → the FastMCP server that exposes core/ as MCP tools.
#
# Run with:  python -m hamibot_mcp   (or the hamibot-mcp console script)
# =============================================================================

__version__ = "1.0.0"
