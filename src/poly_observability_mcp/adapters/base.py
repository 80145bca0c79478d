"""Adapter capability interface shared by every backend integration."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models.tool import ToolDescriptor


class Adapter(ABC):
    """A named bundle of tools with an optional connection lifecycle.

    Subclasses provide :attr:`tools` and override :meth:`connect` /
    :meth:`disconnect` when the backend needs an upstream session. The
    defaults are no-ops, so an adapter without a session is always
    connected.
    """

    def __init__(self, name: str):
        if not name or not name.strip():
            raise ValueError("Adapter name cannot be empty")
        self.name = name

    @property
    @abstractmethod
    def tools(self) -> Sequence[ToolDescriptor]:
        """Tools owned by this adapter, in the order they should be listed."""

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
