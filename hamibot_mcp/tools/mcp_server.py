# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the four Hamibot tools.  Each tool is a thin wrapper around a
#   HamibotClient method. It handles input validation (via the Annotated
#   schemas), output formatting, and error shaping.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g., "run-script")
#   2. FastMCP validates the arguments against the schema in core/schemas.py;
#      bad arguments never reach the handler and never hit the network
#   3. The handler calls one HamibotClient method (= one HTTP request)
#   4. The result is JSON-encoded into a single text content block
#
# THE REPLY CONTRACT:
#   Every call produces exactly one reply:
#       {"content": [{"type": "text", "text": "<JSON>"}]}
#   The JSON is either the upstream envelope, unchanged, or
#       {"error": "<prefix>: <message>"}
#   Upstream failures (bad token, unknown script, device offline) are data,
#   not protocol faults, and the MCP session keeps going.
#
#   Tools are registered with output_schema=None so FastMCP sends only the
#   text block and no structuredContent.
# =============================================================================

import json
import logging
import time
from typing import Any, Awaitable, Callable

from fastmcp import FastMCP

from hamibot_mcp import __version__
from hamibot_mcp.core.client import HamibotClient
from hamibot_mcp.core.errors import GatewayError, describe_error
from hamibot_mcp.core.schemas import (
    CodeArg,
    ExecuteDevicesArg,
    ExecuteVarsArg,
    RunDevicesArg,
    RunVarsArg,
    ScriptIdArg,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "hamibot"
SERVER_INSTRUCTIONS = "Hamibot MCP Server"

# =============================================================================
# Logging helpers
# =============================================================================
# Logs go to STDERR (configured in __main__).  STDOUT is the MCP transport;
# anything printed there would corrupt the JSON-RPC stream.
#
#   CYAN   → incoming tool call + parameters
#   YELLOW → intermediate status
#   GREEN  → the reply text
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the reply text in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return text


def server_version() -> str:
    """Package version plus the startup timestamp, e.g. "1.0.0.1760865600"."""
    return f"{__version__}.{int(time.time())}"


def _encode(value: Any) -> str:
    # Compact separators; non-ASCII text is kept as-is.  NaN is refused so
    # the reply is always strict JSON.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


async def _reply(tool_name: str, error_prefix: str, call: Callable[[], Awaitable[Any]]) -> str:
    """Run one client call and shape the outcome into reply text.

    A GatewayError becomes {"error": "<error_prefix>: <message>"}; anything
    else the client returns is encoded as-is.
    """
    try:
        envelope = await call()
    except GatewayError as e:
        _log_status(f"Upstream call failed: {describe_error(e)}")
        return _log_response(tool_name, _encode({"error": f"{error_prefix}: {describe_error(e)}"}))
    return _log_response(tool_name, _encode(envelope))


# =============================================================================
# Server factory
# =============================================================================
# The client is passed in rather than created here so tests can hand the
# server a HamibotClient backed by an httpx.MockTransport.
# =============================================================================
def create_server(client: HamibotClient) -> FastMCP:
    """Build the FastMCP server with all four Hamibot tools registered."""
    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=server_version())

    # -------------------------------------------------------------------------
    # TOOL 1: list-devices
    # -------------------------------------------------------------------------
    @mcp.tool(name="list-devices", description="List all connected devices", output_schema=None)
    async def list_devices() -> str:
        _log_request("list-devices")
        return await _reply("list-devices", "Failed to get device list", client.list_devices)

    # -------------------------------------------------------------------------
    # TOOL 2: list-scripts
    # -------------------------------------------------------------------------
    @mcp.tool(name="list-scripts", description="List all available automation scripts", output_schema=None)
    async def list_scripts() -> str:
        _log_request("list-scripts")
        return await _reply("list-scripts", "Failed to get script list", client.list_scripts)

    # -------------------------------------------------------------------------
    # TOOL 3: run-script
    # -------------------------------------------------------------------------
    # Parameter names are camelCase because they ARE the wire names MCP
    # clients send; FastMCP maps arguments to parameters by name.
    # -------------------------------------------------------------------------
    @mcp.tool(name="run-script", description="Run an automation script on specified devices", output_schema=None)
    async def run_script(
        scriptId: ScriptIdArg,
        devices: RunDevicesArg,
        vars: RunVarsArg = None,
    ) -> str:
        _log_request("run-script", scriptId=scriptId, devices=[d.id for d in devices],
                     vars=sorted(vars) if vars else None)
        return await _reply(
            "run-script",
            "Failed to run script",
            lambda: client.run_script(scriptId, devices, vars),
        )

    # -------------------------------------------------------------------------
    # TOOL 4: execute
    # -------------------------------------------------------------------------
    # The code itself is not logged, only its size: scripts can be long and
    # may embed credentials.
    # -------------------------------------------------------------------------
    @mcp.tool(name="execute", description="Execute custom JavaScript code on specified devices", output_schema=None)
    async def execute(
        code: CodeArg,
        devices: ExecuteDevicesArg,
        vars: ExecuteVarsArg = None,
    ) -> str:
        _log_request("execute", code=f"<{len(code)} chars>", devices=[d.id for d in devices],
                     vars=sorted(vars) if vars else None)
        return await _reply(
            "execute",
            "Failed to execute script",
            lambda: client.execute(code, devices, vars),
        )

    return mcp
