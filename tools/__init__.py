# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and the
#   gazetteer/ package.  Each tool here:
#     1. Declares its parameters (the schema MCP clients discover)
#     2. Hands the arguments to gazetteer.dispatcher.ToolDispatcher
#     3. Returns the rendered markdown, or converts a GazetteerError into
#        a ToolError carrying the error code
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate, fetch, parse or render (that's gazetteer/)
#   - They do NOT keep state between calls
# =============================================================================
