"""Tool Registry aggregating the tools of every registered adapter"""

import logging
from typing import Dict, List, NamedTuple, Optional

from ..adapters.base import Adapter
from ..models.tool import MCPTool, ToolDescriptor
from .errors import DuplicateToolNameError

logger = logging.getLogger(__name__)


class RegistryEntry(NamedTuple):
    descriptor: ToolDescriptor
    adapter: Adapter


class ToolRegistry:
    """Single namespace of tools, keyed by exact name.

    Entries keep insertion order, so listing order is adapter registration
    order followed by each adapter's own tool order. The registry is filled
    during startup and only read afterwards.
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}
        self._adapters: List[Adapter] = []

    def register(self, adapter: Adapter) -> None:
        """Add all tools of an adapter.

        Registration is all-or-nothing per adapter: every name is checked
        before anything is inserted.

        Args:
            adapter: Connected adapter whose tools should be exposed

        Raises:
            DuplicateToolNameError: If a name is already registered or is
                repeated within the adapter
        """
        tools = list(adapter.tools)
        seen: set[str] = set()
        for descriptor in tools:
            existing = self._entries.get(descriptor.name)
            if existing is not None:
                raise DuplicateToolNameError(
                    descriptor.name, adapter.name, existing.adapter.name
                )
            if descriptor.name in seen:
                raise DuplicateToolNameError(descriptor.name, adapter.name)
            seen.add(descriptor.name)

        for descriptor in tools:
            self._entries[descriptor.name] = RegistryEntry(descriptor, adapter)
        self._adapters.append(adapter)
        logger.info(f"Registered {len(tools)} tools from adapter {adapter.name}")

    def list(self) -> List[MCPTool]:
        """Snapshot of all tools for discovery, in registration order."""
        return [entry.descriptor.to_mcp() for entry in self._entries.values()]

    def lookup(self, name: str) -> Optional[ToolDescriptor]:
        entry = self._entries.get(name)
        return entry.descriptor if entry else None

    def owner(self, name: str) -> Optional[Adapter]:
        """Adapter that contributed the named tool."""
        entry = self._entries.get(name)
        return entry.adapter if entry else None

    def adapters(self) -> List[Adapter]:
        return list(self._adapters)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries
