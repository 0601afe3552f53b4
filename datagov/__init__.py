# =============================================================================
# datagov/__init__.py
# =============================================================================
# This package contains ALL the catalog logic for the Data.gov MCP server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or Google ADK.  The only
#   third-party imports are httpx (outbound HTTP) and python-dotenv
#   (configuration).  The tools/ layer wraps the Dispatcher below as MCP
#   tools; the agent/ layer talks to those tools over stdio.
# =============================================================================

from datagov.dispatcher import Dispatcher
from datagov.errors import (
    DataGovError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ResourceFetchError,
)
from datagov.models import ResponseEnvelope

__all__ = [
    "DataGovError",
    "Dispatcher",
    "InvalidParamsError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "ProtocolError",
    "ResourceFetchError",
    "ResponseEnvelope",
]
