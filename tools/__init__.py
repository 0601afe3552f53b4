# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server that publishes the Data.gov
# catalog operations as MCP tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and datagov/:
#     1. It registers one FastMCP tool per catalog operation
#     2. It forwards the caller's arguments to the Dispatcher
#     3. It maps Dispatcher results and errors onto MCP results and errors
#     4. It owns the process lifecycle (stdio transport, signals, shutdown)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments or talk HTTP (that's datagov/)
#   - They do NOT know about Google ADK (that's agent/)
# =============================================================================
