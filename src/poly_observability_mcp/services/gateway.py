"""Gateway: one running server instance's registry, dispatcher and adapters"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..adapters.base import Adapter
from ..models.config import AdapterStatus, GatewaySettings
from ..models.tool import MCPTool, ToolResponse
from .config_manager import ConfigManager
from .dispatcher import Dispatcher
from .errors import DuplicateToolNameError
from .lifecycle import AdapterLifecycleManager, ConnectResult
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


class Gateway:
    """Owns the tool namespace of a single server instance.

    ``start()`` connects the configured adapters and registers the ones that
    connected; transports then call :meth:`list_tools` and :meth:`call_tool`.
    Nothing is shared between instances.
    """

    def __init__(self, adapters: Sequence[Adapter], settings: Optional[GatewaySettings] = None):
        self.settings = settings or GatewaySettings()
        self.adapters = list(adapters)
        self.registry = ToolRegistry()
        self.dispatcher = Dispatcher(self.registry, default_timeout=self.settings.tool_timeout)
        self.lifecycle = AdapterLifecycleManager(
            connect_timeout=self.settings.connect_timeout,
            parallel=self.settings.parallel_connect,
        )
        self.connect_failures: Dict[str, Exception] = {}
        self.skipped: Dict[str, DuplicateToolNameError] = {}
        self._state = "new"

    @classmethod
    def from_config_file(cls, config_path: str) -> "Gateway":
        """Build a gateway from a YAML/JSON configuration file."""
        manager = ConfigManager(config_path)
        config = manager.load_config()
        return cls(manager.build_adapters(config), config.gateway)

    @property
    def started(self) -> bool:
        return self._state == "running"

    @property
    def stopped(self) -> bool:
        return self._state == "stopped"

    async def start(self) -> ConnectResult:
        """Connect adapters and build the registry.

        Raises:
            DuplicateToolNameError: If tool names collide and the duplicate
                policy is ``error``; connected adapters are disconnected first
        """
        if self._state != "new":
            raise RuntimeError(f"Gateway cannot be started from state {self._state}")

        result = await self.lifecycle.connect_all(self.adapters)
        self.connect_failures = dict(result.failures)

        for adapter in result.connected:
            try:
                self.registry.register(adapter)
            except DuplicateToolNameError as e:
                if self.settings.duplicate_tools == "error":
                    logger.error(f"Tool registration failed: {e}")
                    await self.lifecycle.disconnect_all()
                    self._state = "stopped"
                    raise
                logger.warning(f"Skipping adapter {adapter.name}: {e}")
                self.skipped[adapter.name] = e
                await self.lifecycle.disconnect(adapter)

        self._state = "running"
        logger.info(
            f"{len(self.registry.adapters())} adapter(s), {len(self.registry)} tools"
        )
        return result

    async def stop(self) -> None:
        await self.lifecycle.disconnect_all()
        self._state = "stopped"

    def list_tools(self) -> List[MCPTool]:
        return self.registry.list()

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        return await self.dispatcher.dispatch(name, arguments)

    def status(self) -> List[AdapterStatus]:
        return self.lifecycle.status()

    async def __aenter__(self) -> "Gateway":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
