"""HTTP backend adapter with a readiness probe on connect."""

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from ..models.tool import ToolDescriptor
from ..services.errors import AdapterConnectError, ToolExecutionError
from .base import Adapter

logger = logging.getLogger(__name__)


class HttpBackendAdapter(Adapter):
    """Adapter for an observability backend reachable over HTTP.

    ``connect()`` opens a pooled ``httpx.AsyncClient`` and probes
    ``health_path``; a transport error or non-2xx answer fails the connect.
    The adapter exposes a single ``<name>_health`` tool. Backend specific
    query tools are expected to subclass this and reuse :attr:`client`.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        health_path: str = "/",
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(name)
        self.base_url = base_url.rstrip("/")
        self.health_path = health_path
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._tools = (
            ToolDescriptor(
                name=f"{name}_health",
                description=f"Check whether the {name} backend at {self.base_url} is ready",
                handler=self._health_tool,
            ),
        )

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        return self._tools

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ToolExecutionError(f"Adapter {self.name} is not connected")
        return self._client

    async def connect(self) -> None:
        client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self._transport,
        )
        try:
            response = await client.get(self.health_path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            await client.aclose()
            raise AdapterConnectError(
                f"{self.name} backend at {self.base_url} is not reachable: {e}",
                {"adapter": self.name, "url": self.base_url},
            ) from e

        self._client = client
        logger.info(f"Connected to {self.name} backend at {self.base_url}")

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def probe(self) -> Dict[str, Any]:
        """Query the health endpoint and summarize the answer."""
        try:
            response = await self.client.get(self.health_path)
        except httpx.HTTPError as e:
            raise ToolExecutionError(
                f"{self.name} backend request failed: {e}", {"adapter": self.name}
            ) from e
        return {
            "adapter": self.name,
            "url": f"{self.base_url}{self.health_path}",
            "status_code": response.status_code,
            "healthy": response.is_success,
        }

    async def _health_tool(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return await self.probe()
