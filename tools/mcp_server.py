# =============================================================================
# tools/mcp_server.py - FastMCP Server for the Data.gov catalog
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Dispatcher (datagov/dispatcher.py) over MCP.  Each MCP request
#   handler passes the raw request values to the Dispatcher and translates
#   the outcome into MCP terms.
#
# HOW OUTCOMES MAP TO MCP:
#   Dispatcher outcome               →  MCP result
#   ------------------------------------------------------------------------
#   envelope, is_error=False         →  text content (pretty-printed JSON)
#   envelope, is_error=True          →  isError: true + summary text
#   InvalidParamsError               →  McpError -32602
#   MethodNotFoundError              →  McpError -32601
#   InvalidRequestError              →  McpError -32600
#   ResourceFetchError               →  McpError -32603 (resource reads only)
#
# TOOLS:
#   package_search, package_show, group_list, tag_list
#
# RESOURCES:
#   datagov://resource/{url}  →  the raw body at <url> as a base64 data: URI
#
# RUNNING THIS SERVER:
#   a) Standalone:      python -m tools.mcp_server   (or: datagov-mcp-server)
#   b) From the agent:  agent/datagov_agent.py launches it over stdio
# =============================================================================

import asyncio
import logging
import signal
import sys
from typing import Any, Awaitable, Callable, Mapping, Optional

from fastmcp import FastMCP
from mcp import types
from mcp.shared.exceptions import McpError

from datagov.config import SERVER_NAME, SERVER_VERSION, Settings, load_settings
from datagov.dispatcher import Dispatcher
from datagov.errors import INTERNAL_ERROR, ProtocolError, ResourceFetchError

logger = logging.getLogger("datagov.mcp")

# =============================================================================
# Logging Setup
# =============================================================================
# All logging goes to STDERR.  STDOUT is the MCP transport, and any stray
# line written there would corrupt the JSON-RPC stream.
#
# Colour coding in the terminal:
#   CYAN   → incoming tool calls (name + arguments)
#   GREEN  → responses
#   YELLOW → status messages
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, arguments: Mapping[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str, is_error: bool) -> None:
    # Bodies can be megabytes of JSON; the size is enough for the log.
    status = "error" if is_error else "ok"
    logger.info(f"{_GREEN}  ← {tool_name} response: {status}, {len(text)} chars{_RESET}")


def _mcp_error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


# =============================================================================
# Dispatcher → MCP translation
# =============================================================================
# One coroutine per MCP request.  Each takes the raw request values, asks the
# Dispatcher, and returns the MCP result model.  Arguments are passed through
# untouched: the Dispatcher is the only place they are checked.
# =============================================================================
async def list_tools(dispatcher: Dispatcher) -> types.ListToolsResult:
    return types.ListToolsResult(tools=[types.Tool(**op.to_dict()) for op in dispatcher.list_operations()])


async def call_tool(
    dispatcher: Dispatcher, name: str, arguments: Optional[Mapping[str, Any]]
) -> types.CallToolResult:
    """Invoke one operation and return its MCP result.

    Raises:
        McpError: The tool is unknown or the arguments do not fit its schema.
    """
    _log_request(name, arguments or {})
    try:
        envelope = await dispatcher.invoke(name, arguments)
    except ProtocolError as exc:
        logger.warning("[MCP Error] %s", exc.message)
        raise _mcp_error(exc.code, exc.message) from exc

    _log_response(name, envelope.text, envelope.is_error)
    return types.CallToolResult.model_validate(envelope.to_dict())


async def list_resource_templates(dispatcher: Dispatcher) -> types.ListResourceTemplatesResult:
    return types.ListResourceTemplatesResult(
        resourceTemplates=[
            types.ResourceTemplate(uriTemplate=t.uri_template, name=t.name, description=t.description)
            for t in dispatcher.list_resource_templates()
        ]
    )


async def read_resource(dispatcher: Dispatcher, uri: str) -> types.ReadResourceResult:
    """Read one ``datagov://resource/...`` URI.

    Raises:
        McpError: -32600 for a malformed URI, -32603 carrying the failure
            summary when the fetch fails.
    """
    _log_status(f"reading resource {uri}")
    try:
        contents = await dispatcher.read_resource(uri)
    except ProtocolError as exc:
        logger.warning("[MCP Error] %s", exc.message)
        raise _mcp_error(exc.code, exc.message) from exc
    except ResourceFetchError as exc:
        logger.warning("[MCP Error] %s", str(exc).replace("\n", " | "))
        raise _mcp_error(INTERNAL_ERROR, str(exc)) from exc

    return types.ReadResourceResult(
        contents=[types.TextResourceContents(uri=contents.uri, text=contents.text, mimeType=contents.mime_type)]
    )


# =============================================================================
# Server construction
# =============================================================================
# The handlers below replace FastMCP's tools/list, tools/call, resource
# template and resources/read handlers on the low-level server.  Tool
# arguments reach the Dispatcher uncoerced, and an McpError raised here
# reaches the client as a JSON-RPC error with its code.
# =============================================================================
def _respond(produce: Callable[[Any], Awaitable[Any]]):
    async def handler(req: Any) -> types.ServerResult:
        return types.ServerResult(await produce(req))

    return handler


def build_server(dispatcher: Dispatcher) -> FastMCP:
    """Create the FastMCP server with every MCP request bound to ``dispatcher``."""
    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Query the Data.gov catalog (CKAN). Search datasets with package_search, "
            "fetch one with package_show, and browse group_list / tag_list. "
            "Raw files can be read through datagov://resource/{url}."
        ),
    )

    server = mcp._mcp_server
    server.version = SERVER_VERSION
    server.request_handlers.update(
        {
            types.ListToolsRequest: _respond(lambda req: list_tools(dispatcher)),
            types.CallToolRequest: _respond(
                lambda req: call_tool(dispatcher, req.params.name, req.params.arguments)
            ),
            types.ListResourceTemplatesRequest: _respond(lambda req: list_resource_templates(dispatcher)),
            types.ReadResourceRequest: _respond(lambda req: read_resource(dispatcher, str(req.params.uri))),
        }
    )
    return mcp


# =============================================================================
# Lifecycle: construct → run → shutdown
# =============================================================================
async def serve(settings: Optional[Settings] = None) -> None:
    """Run the server on stdio until the client disconnects or a signal arrives."""
    settings = settings or load_settings()
    dispatcher = Dispatcher(settings=settings)
    mcp = build_server(dispatcher)

    task = asyncio.current_task()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, task.cancel)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support signal handlers.
            pass

    logger.info("Data.gov MCP server running on stdio (%s)", settings.base_url)
    try:
        await mcp.run_async(transport="stdio")
    except asyncio.CancelledError:
        logger.info("shutdown requested, closing")
    finally:
        await dispatcher.aclose()
        logger.info("Data.gov MCP server stopped")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
