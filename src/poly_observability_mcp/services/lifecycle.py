"""Adapter Lifecycle Manager: connects adapters and tracks their state"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..adapters.base import Adapter
from ..models.config import AdapterStatus
from .errors import AdapterConnectError, ConfigurationError
from .timeouts import DeadlineExceeded, run_with_deadline

logger = logging.getLogger(__name__)


class AdapterState(str, Enum):
    UNCONNECTED = "unconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"
    DISCONNECTED = "disconnected"


@dataclass
class ConnectResult:
    """Outcome of :meth:`AdapterLifecycleManager.connect_all`."""

    connected: List[Adapter] = field(default_factory=list)
    failures: Dict[str, Exception] = field(default_factory=dict)


class AdapterLifecycleManager:
    """Connects configured adapters, isolating failures per adapter.

    State per adapter: unconnected -> connecting -> connected | failed, and
    connected -> disconnected on shutdown. Failed adapters are not retried.
    """

    def __init__(self, connect_timeout: Optional[float] = None, parallel: bool = False):
        self.connect_timeout = connect_timeout
        self.parallel = parallel
        self._adapters: Dict[str, Adapter] = {}
        self._states: Dict[str, AdapterState] = {}
        self._errors: Dict[str, Exception] = {}
        self._changed: Dict[str, str] = {}

    def _set_state(self, name: str, state: AdapterState) -> None:
        self._states[name] = state
        self._changed[name] = datetime.now(timezone.utc).isoformat()

    def state(self, name: str) -> AdapterState:
        return self._states.get(name, AdapterState.UNCONNECTED)

    async def connect_all(self, adapters: Sequence[Adapter]) -> ConnectResult:
        """Connect every adapter, continuing past individual failures.

        Args:
            adapters: Adapters in configuration order

        Returns:
            Connected adapters (configuration order) and failures by name

        Raises:
            ConfigurationError: If two adapters share a name
        """
        names = [adapter.name for adapter in adapters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate adapter names: {', '.join(duplicates)}")

        for adapter in adapters:
            self._adapters[adapter.name] = adapter
            self._set_state(adapter.name, AdapterState.UNCONNECTED)

        if self.parallel:
            outcomes = await asyncio.gather(*(self._connect_one(a) for a in adapters))
        else:
            outcomes = [await self._connect_one(a) for a in adapters]

        result = ConnectResult()
        for adapter, error in zip(adapters, outcomes):
            if error is None:
                result.connected.append(adapter)
            else:
                result.failures[adapter.name] = error

        logger.info(
            f"{len(result.connected)} adapter(s) connected, {len(result.failures)} failed"
        )
        return result

    async def _connect_one(self, adapter: Adapter) -> Optional[Exception]:
        self._set_state(adapter.name, AdapterState.CONNECTING)
        logger.info(f"Connecting adapter: {adapter.name}")
        try:
            if self.connect_timeout is None:
                await adapter.connect()
            else:
                await run_with_deadline(adapter.connect(), self.connect_timeout)
        except DeadlineExceeded:
            error: Exception = AdapterConnectError(
                f"Timed out after {self.connect_timeout:g}s connecting {adapter.name}",
                {"adapter": adapter.name},
            )
        except Exception as e:
            error = e
        else:
            self._set_state(adapter.name, AdapterState.CONNECTED)
            logger.info(f"Successfully connected to {adapter.name}")
            return None

        self._errors[adapter.name] = error
        self._set_state(adapter.name, AdapterState.FAILED)
        logger.error(f"Failed to connect {adapter.name}: {error}")
        return error

    async def disconnect(self, adapter: Adapter) -> None:
        """Disconnect one connected adapter; errors are logged, not raised."""
        if self.state(adapter.name) != AdapterState.CONNECTED:
            return
        try:
            await adapter.disconnect()
        except Exception as e:
            logger.error(f"Error disconnecting {adapter.name}: {e}")
            self._errors[adapter.name] = e
        self._set_state(adapter.name, AdapterState.DISCONNECTED)
        logger.info(f"Disconnected adapter: {adapter.name}")

    async def disconnect_all(self) -> None:
        """Disconnect connected adapters in reverse connection order."""
        for adapter in reversed(list(self._adapters.values())):
            await self.disconnect(adapter)

    def status(self) -> List[AdapterStatus]:
        statuses = []
        for name, adapter in self._adapters.items():
            state = self.state(name)
            error = self._errors.get(name)
            statuses.append(
                AdapterStatus(
                    name=name,
                    state=state.value,
                    tool_count=len(adapter.tools) if state == AdapterState.CONNECTED else 0,
                    error_message=str(error) if error else None,
                    last_change=self._changed.get(name),
                )
            )
        return statuses
