"""In-process adapter assembled from plain async functions."""

from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from ..models.tool import ParamSpec, ToolDescriptor, ToolHandler
from .base import Adapter

LifecycleHook = Callable[[], Awaitable[None]]


class FunctionAdapter(Adapter):
    """Adapter whose tools are local coroutines.

    Tools can be passed in directly or added with the :meth:`tool` decorator::

        demo = FunctionAdapter("demo")

        @demo.tool("demo_echo", "Echo the message back",
                   params={"message": StringParam(required=True)})
        async def echo(args):
            return {"message": args["message"]}
    """

    def __init__(
        self,
        name: str,
        tools: Optional[Sequence[ToolDescriptor]] = None,
        on_connect: Optional[LifecycleHook] = None,
        on_disconnect: Optional[LifecycleHook] = None,
    ):
        super().__init__(name)
        self._tools: List[ToolDescriptor] = list(tools or [])
        self._on_connect = on_connect
        self._on_disconnect = on_disconnect

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        return tuple(self._tools)

    def add_tool(self, descriptor: ToolDescriptor) -> None:
        self._tools.append(descriptor)

    def tool(
        self,
        name: str,
        description: str = "",
        params: Optional[Dict[str, ParamSpec]] = None,
        timeout: Optional[float] = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Register the decorated coroutine as a tool of this adapter."""

        def decorator(func: ToolHandler) -> ToolHandler:
            self.add_tool(
                ToolDescriptor(
                    name=name,
                    description=description or (func.__doc__ or "").strip(),
                    params=params or {},
                    handler=func,
                    timeout=timeout,
                )
            )
            return func

        return decorator

    async def connect(self) -> None:
        if self._on_connect is not None:
            await self._on_connect()

    async def disconnect(self) -> None:
        if self._on_disconnect is not None:
            await self._on_disconnect()
