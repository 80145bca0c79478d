"""Tests for the MCP stdio transport handlers"""

import mcp.types as types
import pytest

from poly_observability_mcp.adapters.function import FunctionAdapter
from poly_observability_mcp.mcp_server import SERVER_NAME, create_mcp_server
from poly_observability_mcp.models.tool import StringParam
from poly_observability_mcp.services.gateway import Gateway

from .conftest import make_tool


@pytest.fixture
def gateway():
    return Gateway(
        [
            FunctionAdapter("A", [make_tool("x", {"value": 42}, params={"q": StringParam(required=True)})]),
            FunctionAdapter("B", [make_tool("y", error=RuntimeError("backend down"))]),
        ]
    )


async def _call(server, name, arguments=None):
    handler = server.request_handlers[types.CallToolRequest]
    result = await handler(
        types.CallToolRequest(
            method="tools/call", params=types.CallToolRequestParams(name=name, arguments=arguments)
        )
    )
    return result.root


class TestMcpServer:
    def test_capabilities(self, gateway):
        server = create_mcp_server(gateway)
        options = server.create_initialization_options()

        assert options.server_name == SERVER_NAME
        assert options.capabilities.tools is not None

    @pytest.mark.asyncio
    async def test_list_tools(self, gateway):
        await gateway.start()
        server = create_mcp_server(gateway)

        result = await server.request_handlers[types.ListToolsRequest](
            types.ListToolsRequest(method="tools/list")
        )

        tools = result.root.tools
        assert [t.name for t in tools] == ["x", "y"]
        assert tools[0].inputSchema["required"] == ["q"]
        await gateway.stop()

    @pytest.mark.asyncio
    async def test_call_tool(self, gateway):
        await gateway.start()
        server = create_mcp_server(gateway)

        ok = await _call(server, "x", {"q": "up"})
        assert ok.isError is False
        assert ok.content[0].text == '{\n  "value": 42\n}'

        failed = await _call(server, "y", {})
        assert failed.isError is True
        assert failed.content[0].text == "Error: backend down"

        unknown = await _call(server, "z")
        assert unknown.isError is True
        assert unknown.content[0].text == "Unknown tool: z"
        await gateway.stop()

    def test_sdk_tool_schema_field(self):
        # tools/list and downstream discovery both read and write Tool.inputSchema
        assert "inputSchema" in types.Tool.model_fields
