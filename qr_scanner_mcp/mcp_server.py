import asyncio
import logging
from typing import List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from qr_scanner_mcp.api.models import ToolDescriptor, ToolResponse
from qr_scanner_mcp.config import SERVER_NAME, SERVER_VERSION
from qr_scanner_mcp.orchestration.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=dict(descriptor.inputSchema),
    )


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=response.text)],
        isError=response.is_error,
    )


def build_server(dispatcher: Optional[ToolDispatcher] = None) -> Server:
    """
    MCP server wired to the dispatcher.

    tools/call is registered directly on request_handlers rather than through
    @server.call_tool(): the dispatcher already builds the full envelope
    (content + isError) and the SDK must not re-validate or re-wrap it.
    """
    dispatcher = dispatcher or ToolDispatcher()
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(d) for d in dispatcher.list_tools()]

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        # decoding/fetching blocks, keep the event loop free for other requests
        response = await asyncio.to_thread(
            dispatcher.call_tool, req.params.name, req.params.arguments or {}
        )
        return types.ServerResult(to_call_tool_result(response))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def run_stdio(server: Optional[Server] = None) -> None:
    server = server or build_server()
    async with stdio_server() as (read_stream, write_stream):
        logger.info("QR Code Scanner MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
