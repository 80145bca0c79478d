"""Dispatcher routing call-by-name requests to tool handlers"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from ..models.tool import ToolDescriptor, ToolResponse
from .errors import ToolTimeoutError, ToolValidationError, UnknownToolError
from .registry import ToolRegistry
from .timeouts import DeadlineExceeded, run_with_deadline

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def serialize_result(result: Any) -> str:
    """Canonical text form of a handler result: sorted keys, 2-space indent."""
    return json.dumps(
        result, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False, default=_json_default
    )


def _first_violation(tool_name: str, error: ValidationError) -> ToolValidationError:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "arguments"
    return ToolValidationError(tool_name, f"{location}: {first['msg']}")


class Dispatcher:
    """Executes tool calls under a uniform error boundary.

    Every outcome, including unknown tools, invalid arguments, handler
    failures and timeouts, is returned as a :class:`ToolResponse`; nothing
    raised by a handler reaches the transport.
    """

    def __init__(self, registry: ToolRegistry, default_timeout: Optional[float] = None):
        self.registry = registry
        self.default_timeout = default_timeout

    async def dispatch(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """Route a call to its tool and normalize the outcome.

        Args:
            tool_name: Exact name of the registered tool
            arguments: Raw call arguments from the transport

        Returns:
            Response envelope, with ``isError`` set on any failure
        """
        descriptor = self.registry.lookup(tool_name)
        if descriptor is None:
            error = UnknownToolError(tool_name)
            logger.info(error.message)
            return ToolResponse.from_text(error.message, is_error=True)

        try:
            validated = descriptor.validate_arguments(arguments)
        except ValidationError as e:
            error = _first_violation(tool_name, e)
            logger.info(error.message)
            return ToolResponse.from_text(error.message, is_error=True)

        try:
            result = await self._execute(descriptor, validated)
        except Exception as e:
            logger.warning(f"Tool {tool_name} failed: {type(e).__name__}: {e}")
            return ToolResponse.from_text(f"Error: {e}", is_error=True)

        try:
            text = serialize_result(result)
        except (TypeError, ValueError) as e:
            logger.warning(f"Result of {tool_name} is not serializable: {e}")
            return ToolResponse.from_text(f"Error: result is not serializable: {e}", is_error=True)
        return ToolResponse.from_text(text)

    async def _execute(self, descriptor: ToolDescriptor, arguments: Dict[str, Any]) -> Any:
        timeout = descriptor.timeout or self.default_timeout
        if timeout is None:
            return await descriptor.invoke(arguments)
        try:
            return await run_with_deadline(descriptor.invoke(arguments), timeout)
        except DeadlineExceeded:
            raise ToolTimeoutError(descriptor.name, timeout) from None
