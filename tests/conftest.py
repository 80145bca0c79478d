"""
Test configuration and shared fixtures for poly-observability-mcp tests.

Adapters here are in-process FunctionAdapters with AsyncMock handlers, so
tests can assert exactly which handlers ran without any backend.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from poly_observability_mcp.adapters.function import FunctionAdapter
from poly_observability_mcp.models.config import GatewaySettings
from poly_observability_mcp.models.tool import (
    EnumParam,
    IntegerParam,
    ParamSpec,
    StringParam,
    ToolDescriptor,
)


def make_tool(
    name: str,
    result: Any = None,
    params: Optional[Dict[str, ParamSpec]] = None,
    error: Optional[Exception] = None,
    timeout: Optional[float] = None,
) -> ToolDescriptor:
    """Tool whose handler is an AsyncMock returning ``result`` or raising ``error``."""
    handler = AsyncMock(return_value=result, side_effect=error)
    return ToolDescriptor(
        name=name,
        description=f"{name} test tool",
        params=params or {},
        handler=handler,
        timeout=timeout,
    )


class FailingAdapter(FunctionAdapter):
    """Adapter whose connect() always raises."""

    def __init__(self, name: str, tools: List[ToolDescriptor], error: Exception):
        super().__init__(name, tools)
        self.error = error
        self.disconnect_calls = 0

    async def connect(self) -> None:
        raise self.error

    async def disconnect(self) -> None:
        self.disconnect_calls += 1


class RecordingAdapter(FunctionAdapter):
    """Adapter that appends lifecycle events to a shared journal."""

    def __init__(self, name: str, tools: List[ToolDescriptor], journal: List[str]):
        super().__init__(name, tools)
        self.journal = journal

    async def connect(self) -> None:
        self.journal.append(f"connect:{self.name}")

    async def disconnect(self) -> None:
        self.journal.append(f"disconnect:{self.name}")


@pytest.fixture
def journal() -> List[str]:
    return []


@pytest.fixture
def query_params() -> Dict[str, ParamSpec]:
    """Parameter set representing a typical metrics query tool"""
    return {
        "query": StringParam(description="Query expression", required=True),
        "limit": IntegerParam(description="Maximum series"),
        "step": EnumParam(values=("1m", "5m", "1h"), description="Resolution"),
    }


@pytest.fixture
def metrics_adapter(query_params) -> FunctionAdapter:
    return FunctionAdapter(
        "prometheus",
        [
            make_tool("prometheus_query", {"series": []}, params=query_params),
            make_tool("prometheus_targets", {"targets": 3}),
        ],
    )


@pytest.fixture
def logs_adapter() -> FunctionAdapter:
    return FunctionAdapter(
        "loki",
        [make_tool("loki_query", {"streams": []}, params={"query": StringParam(required=True)})],
    )


@pytest.fixture
def fast_settings() -> GatewaySettings:
    """Settings with short timeouts for tests"""
    return GatewaySettings(tool_timeout=1.0, connect_timeout=1.0)
