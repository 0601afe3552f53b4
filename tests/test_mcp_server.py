import asyncio
import base64
import json

import pytest
from fastmcp import Client, FastMCP
from mcp.shared.exceptions import McpError

from datagov.errors import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND
from datagov.operations import list_operations
from tools.mcp_server import build_server


def _with_client(dispatcher, scenario):
    """Run ``scenario(client)`` against an in-memory server bound to ``dispatcher``."""

    async def run():
        async with Client(build_server(dispatcher)) as client:
            return await scenario(client)

    return asyncio.run(run())


def test_build_server_returns_a_fastmcp_instance(dispatcher):
    server = build_server(dispatcher)

    assert isinstance(server, FastMCP)
    assert server.name == "datagov-mcp-server"


def test_listed_tools_are_the_operation_catalog(dispatcher):
    tools = _with_client(dispatcher, lambda client: client.list_tools())

    listed = [tool.model_dump(include={"name", "description", "inputSchema"}) for tool in tools]
    assert listed == [op.to_dict() for op in list_operations()]


def test_success_is_one_text_block_of_pretty_json(dispatcher, ckan):
    body = {"success": True, "result": ["fire", "water"]}
    ckan.reply("/api/3/action/tag_list", json_body=body)

    result = _with_client(dispatcher, lambda client: client.call_tool_mcp("tag_list", {}))

    assert result.isError is False
    (block,) = result.content
    assert block.type == "text"
    assert json.loads(block.text) == body
    assert dict(ckan.requests[0].url.params) == {}


def test_remote_failure_is_an_error_result_with_summary(dispatcher, ckan):
    ckan.reply("/api/3/action/package_show", 404, json_body={"success": False, "error": {"message": "Not found"}})

    result = _with_client(dispatcher, lambda client: client.call_tool_mcp("package_show", {"id": "missing"}))

    assert result.isError is True
    (block,) = result.content
    assert "Status: 404" in block.text
    assert "Message: Not found" in block.text


def test_unknown_tool_is_method_not_found(dispatcher, ckan):
    with pytest.raises(McpError) as info:
        _with_client(dispatcher, lambda client: client.call_tool_mcp("does_not_exist", {}))

    assert info.value.error.code == METHOD_NOT_FOUND
    assert info.value.error.message == "Unknown tool: does_not_exist"
    assert ckan.requests == []


@pytest.mark.parametrize(
    "name, arguments",
    [
        ("package_show", {}),
        ("package_search", {"rows": True}),
        ("package_search", {"rows": "10"}),
        ("group_list", {"all_fields": "yes"}),
        ("tag_list", {"limit": 5}),
    ],
)
def test_bad_arguments_are_invalid_params_without_a_request(dispatcher, ckan, name, arguments):
    with pytest.raises(McpError) as info:
        _with_client(dispatcher, lambda client: client.call_tool_mcp(name, arguments))

    assert info.value.error.code == INVALID_PARAMS
    assert info.value.error.message.startswith(f"Invalid {name} arguments: ")
    assert ckan.requests == []


def test_resource_template_is_listed(dispatcher):
    templates = _with_client(dispatcher, lambda client: client.list_resource_templates())

    (template,) = templates
    assert template.uriTemplate == "datagov://resource/{url}"
    assert template.name == "Data.gov Resource"


def test_resource_read_returns_a_data_uri(dispatcher, ckan):
    ckan.reply("https://example.com/file.csv", content=b"a,b\n", headers={"content-type": "text/csv"})

    contents = _with_client(
        dispatcher,
        lambda client: client.read_resource("datagov://resource/https%3A%2F%2Fexample.com%2Ffile.csv"),
    )

    (item,) = contents
    assert item.text == "data:text/csv;base64," + base64.b64encode(b"a,b\n").decode()
    assert str(ckan.requests[0].url) == "https://example.com/file.csv"


def test_bad_resource_uri_is_invalid_request(dispatcher, ckan):
    with pytest.raises(McpError) as info:
        _with_client(dispatcher, lambda client: client.read_resource("other://resource/x"))

    assert info.value.error.code == INVALID_REQUEST
    assert info.value.error.message == "Invalid URI format: other://resource/x"
    assert ckan.requests == []


def test_resource_fetch_failure_is_an_internal_error_with_summary(dispatcher, ckan):
    with pytest.raises(McpError) as info:
        _with_client(
            dispatcher,
            lambda client: client.read_resource("datagov://resource/https%3A%2F%2Fexample.com%2Fnope"),
        )

    assert info.value.error.code == INTERNAL_ERROR
    assert "Status: 404" in info.value.error.message
