# Adapters package
# Backend integrations plugged into the gateway

from .base import Adapter
from .function import FunctionAdapter
from .http import HttpBackendAdapter
from .mcp_backend import McpBackendAdapter

__all__ = [
    "Adapter",
    "FunctionAdapter",
    "HttpBackendAdapter",
    "McpBackendAdapter",
]
