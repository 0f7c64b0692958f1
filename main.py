# =============================================================================
# main.py  —  Entry Point for the CHGIS Gazetteer MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (CHGIS_BASE_URL, CHGIS_LOG_LEVEL)
#   2. Imports the FastMCP server from tools/mcp_server.py, which reads those
#      settings once and builds its dispatcher
#   3. Serves the three gazetteer tools over stdio until the client
#      disconnects
# =============================================================================

import logging

from dotenv import load_dotenv

# Must run BEFORE tools.mcp_server is imported: settings are read at import.
load_dotenv()

from tools.mcp_server import mcp, settings  # noqa: E402


def main() -> None:
    logging.info(f"CHGIS MCP Server running on stdio (upstream: {settings.base_url})")
    mcp.run()


if __name__ == "__main__":
    main()
