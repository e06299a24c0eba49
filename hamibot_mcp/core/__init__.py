# =============================================================================
# core/__init__.py
# =============================================================================
# Framework-agnostic pieces: configuration, the error taxonomy, argument
# schemas, and the Hamibot HTTP client.
#
# Nothing here imports FastMCP.  The client can be driven from a plain
# asyncio REPL, and every module is testable without an MCP session.
# =============================================================================
