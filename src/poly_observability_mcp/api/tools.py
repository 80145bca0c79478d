# Tool API - HTTP transport for the gateway
# Lists tools, dispatches calls and reports adapter status

from fastapi import APIRouter, Depends, HTTPException, Request

from ..models.config import AdapterStatus
from ..models.tool import ToolCallRequest, ToolListResponse, ToolResponse
from ..services.gateway import Gateway

router = APIRouter(prefix="/api", tags=["tools"])


def get_gateway(request: Request) -> Gateway:
    """Gateway owned by the running application."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None or not gateway.started:
        raise HTTPException(status_code=503, detail="Gateway not initialized")
    return gateway


@router.get("/tools", response_model=ToolListResponse, operation_id="list_tools")
async def list_tools(gateway: Gateway = Depends(get_gateway)) -> ToolListResponse:  # noqa: B008
    """List every tool exposed by the connected adapters."""
    return ToolListResponse(tools=gateway.list_tools())


@router.post("/tools/call", response_model=ToolResponse, operation_id="call_tool")
async def call_tool(
    request: ToolCallRequest,
    gateway: Gateway = Depends(get_gateway),  # noqa: B008
) -> ToolResponse:
    """Call a tool by name.

    Failures are reported inside the envelope (``isError``), so this
    endpoint answers 200 for unknown tools and failed handlers alike.
    """
    return await gateway.call_tool(request.name, request.arguments)


@router.get("/adapters", response_model=list[AdapterStatus], operation_id="list_adapters")
async def list_adapters(gateway: Gateway = Depends(get_gateway)) -> list[AdapterStatus]:  # noqa: B008
    """Connection state of every configured adapter."""
    return gateway.status()
