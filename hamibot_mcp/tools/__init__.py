# =============================================================================
# tools/__init__.py
# =============================================================================
# The FastMCP "translation layer" between MCP callers and core/.
#
# WHAT TOOLS DO:
#   - Declare each operation's name, description, and argument schema
#   - Call exactly one HamibotClient method per invocation
#   - Encode the outcome (or the error) as a single JSON text block
#
# WHAT TOOLS DO NOT DO:
#   - Talk HTTP themselves (that's core/client.py)
#   - Retry, cache, or reshape upstream data
# =============================================================================
