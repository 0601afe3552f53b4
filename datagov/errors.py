# =============================================================================
# datagov/errors.py - Error types
# =============================================================================
#
# TWO CHANNELS:
#   1. ProtocolError and its subclasses are raised BEFORE any network call
#      (bad arguments, unknown tool, malformed resource URI).  The MCP layer
#      turns them into JSON-RPC errors using the codes below.
#   2. Remote failures of the four query tools are NOT exceptions at all:
#      they come back as a ResponseEnvelope with is_error=True.
#
#   The resource reader is the one exception to (2): it summarizes the
#   failure the same way but raises ResourceFetchError.
# =============================================================================

# JSON-RPC 2.0 error codes used by MCP
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class DataGovError(Exception):
    """Base class for every error raised by this package."""


class ProtocolError(DataGovError):
    """A request rejected before any I/O, carrying its JSON-RPC code."""

    code: int = INVALID_REQUEST

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidParamsError(ProtocolError):
    code = INVALID_PARAMS


class MethodNotFoundError(ProtocolError):
    code = METHOD_NOT_FOUND


class InvalidRequestError(ProtocolError):
    code = INVALID_REQUEST


class ResourceFetchError(DataGovError):
    """A resource read failed; the message is the failure summary."""


class ConfigError(DataGovError):
    """An environment variable holds a value that cannot be used."""
