# =============================================================================
# __main__.py  —  Entry Point for the Hamibot MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python -m hamibot_mcp
#   (or the installed console script: hamibot-mcp)
#
# WHAT HAPPENS:
#   1. Loads .env and reads settings (core/config.py)
#   2. Configures logging to STDERR
#   3. Builds one HamibotClient and the FastMCP server (tools/mcp_server.py)
#   4. Serves MCP over stdio until the client disconnects
#
# A missing HAMIBOT_PERSONAL_ACCESS_TOKEN is fatal: the cause is logged and
# the process exits with status 1 before the server starts.
# =============================================================================

import logging
import sys

from hamibot_mcp.core.client import HamibotClient
from hamibot_mcp.core.config import DEFAULT_LOG_LEVEL, load_settings
from hamibot_mcp.core.errors import ConfigurationError
from hamibot_mcp.tools.mcp_server import create_server

logger = logging.getLogger("hamibot_mcp")


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send all log output to STDERR; STDOUT belongs to the MCP transport.

    level is a name from config.LOG_LEVELS, already checked by load_settings.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Fatal error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)

    client = HamibotClient(settings.token, base_url=settings.base_url, timeout=settings.timeout)
    mcp = create_server(client)

    logger.info(f"Hamibot MCP Server running on stdio ({settings.base_url})")
    mcp.run(transport="stdio", show_banner=False)


if __name__ == "__main__":
    main()
