"""Adapter that fronts a downstream MCP server over stdio."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from ..models.tool import ToolDescriptor, params_from_json_schema
from ..services.errors import AdapterConnectError, ToolExecutionError
from .base import Adapter

logger = logging.getLogger(__name__)


class McpBackendAdapter(Adapter):
    """Exposes the tools of a stdio MCP server (e.g. a vendor observability server).

    The client session lives in a dedicated task so the stdio context is
    entered and exited by the same task, whichever task calls
    :meth:`connect` and :meth:`disconnect`. Tools are discovered once on
    connect; their JSON schemas are converted to typed parameters then.
    """

    def __init__(
        self,
        name: str,
        command: str,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
        tool_prefix: Optional[str] = None,
    ):
        super().__init__(name)
        self.command = command
        self.args = list(args or [])
        self.env = dict(env or {})
        self.tool_prefix = tool_prefix or ""
        self._tools: tuple[ToolDescriptor, ...] = ()
        self._session: Optional[ClientSession] = None
        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        return self._tools

    async def connect(self) -> None:
        loop = asyncio.get_running_loop()
        ready: asyncio.Future = loop.create_future()
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self._run(ready), name=f"mcp-backend-{self.name}")
        try:
            await ready
        except asyncio.CancelledError:
            self._task.cancel()
            raise
        except Exception as e:
            raise AdapterConnectError(
                f"Failed to start MCP server for {self.name}: {e}",
                {"adapter": self.name, "command": self.command},
            ) from e

    async def disconnect(self) -> None:
        if self._task is None:
            return
        self._stop.set()
        await self._task
        self._task = None

    async def _run(self, ready: asyncio.Future) -> None:
        params = StdioServerParameters(command=self.command, args=self.args, env=self.env or None)
        try:
            async with stdio_client(params) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    listing = await session.list_tools()
                    self._tools = tuple(self._describe(tool) for tool in listing.tools)
                    self._session = session
                    logger.info(f"Discovered {len(self._tools)} tools from {self.name}")
                    ready.set_result(None)
                    await self._stop.wait()
        except Exception as e:
            if not ready.done():
                ready.set_exception(e)
            else:
                logger.error(f"MCP session for {self.name} ended with error: {e}")
        finally:
            self._session = None

    def _describe(self, tool: Any) -> ToolDescriptor:
        remote_name = tool.name

        async def handler(arguments: Dict[str, Any]) -> Any:
            return await self.call_remote(remote_name, arguments)

        return ToolDescriptor(
            name=f"{self.tool_prefix}{remote_name}",
            description=tool.description or "",
            params=params_from_json_schema(tool.inputSchema),
            handler=handler,
        )

    async def call_remote(self, tool_name: str, arguments: Dict[str, Any]) -> Any:
        """Forward a call to the downstream server and unwrap its result."""
        if self._session is None:
            raise ToolExecutionError(f"Adapter {self.name} is not connected")

        result = await self._session.call_tool(tool_name, arguments)
        texts = [item.text for item in result.content if getattr(item, "type", None) == "text"]
        if result.isError:
            raise ToolExecutionError(
                "\n".join(texts) or f"{tool_name} failed on {self.name}",
                {"adapter": self.name, "tool": tool_name},
            )

        structured = getattr(result, "structuredContent", None)
        if structured is not None:
            return structured
        return [item.model_dump(mode="json", exclude_none=True) for item in result.content]
