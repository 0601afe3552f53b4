# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains a Google ADK assistant that answers questions about
# the Data.gov catalog using the MCP server in tools/.
#
# ARCHITECTURAL ROLE:
#   The agent is the "automated client" the server was built for.  It:
#     1. Receives a user's question ("Is there open data on wildfires?")
#     2. Decides which catalog tools to call, and with which arguments
#     3. Reads the raw CKAN JSON the tools return
#     4. Summarizes the relevant datasets for the user
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the catalog logic (that's in datagov/)
#   - It is NOT the tool implementations (that's in tools/)
# =============================================================================
