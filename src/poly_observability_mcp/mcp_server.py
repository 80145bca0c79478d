"""
MCP stdio transport for the gateway

Maps the protocol's ``tools/list`` and ``tools/call`` requests onto the
gateway registry and dispatcher. Only protocol frames are written to
stdout; diagnostics go through logging to stderr.
"""

import logging

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .services.gateway import Gateway

logger = logging.getLogger(__name__)

SERVER_NAME = "poly-observability-mcp"


def create_mcp_server(gateway: Gateway) -> Server:
    """Build a low-level MCP server bound to a gateway."""
    server = Server(SERVER_NAME, version=__version__)

    async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        tools = [
            types.Tool(name=t.name, description=t.description, inputSchema=t.inputSchema)
            for t in gateway.list_tools()
        ]
        return types.ServerResult(types.ListToolsResult(tools=tools))

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        response = await gateway.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=item.text) for item in response.content],
                isError=response.isError,
            )
        )

    # Registered directly so the gateway's envelope (including isError) is
    # returned as-is instead of being rebuilt by the SDK decorators.
    server.request_handlers[types.ListToolsRequest] = list_tools
    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def run_stdio(gateway: Gateway) -> None:
    """Start the gateway and serve MCP over stdin/stdout until EOF."""
    server = create_mcp_server(gateway)
    async with gateway:
        logger.info(
            f"{SERVER_NAME} v{__version__} (STDIO mode): "
            f"{len(gateway.registry.adapters())} adapter(s), {len(gateway.registry)} tools"
        )
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
