# Services package
# Contains the registry, dispatcher and adapter lifecycle of the gateway

from .config_manager import ConfigManager
from .dispatcher import Dispatcher
from .gateway import Gateway
from .lifecycle import AdapterLifecycleManager, AdapterState, ConnectResult
from .registry import ToolRegistry

__all__ = [
    "AdapterLifecycleManager",
    "AdapterState",
    "ConfigManager",
    "ConnectResult",
    "Dispatcher",
    "Gateway",
    "ToolRegistry",
]
