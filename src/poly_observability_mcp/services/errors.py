"""Error taxonomy for the observability gateway."""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base exception class for gateway errors."""
    def __init__(self, message: str, error_code: str = "GATEWAY_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(GatewayError):
    """Exception for configuration-related errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIG_ERROR", details)


class RegistrationError(GatewayError):
    """Exception for tool registration errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "REGISTRATION_ERROR", details)


class DuplicateToolNameError(RegistrationError):
    """Two tools claim the same name in the aggregated namespace."""
    def __init__(self, tool_name: str, adapter_name: str, existing_adapter: Optional[str] = None):
        if existing_adapter is None or existing_adapter == adapter_name:
            message = f"Duplicate tool name '{tool_name}' in adapter '{adapter_name}'"
        else:
            message = (
                f"Duplicate tool name '{tool_name}': adapter '{adapter_name}' "
                f"collides with adapter '{existing_adapter}'"
            )
        super().__init__(
            message,
            {"tool": tool_name, "adapter": adapter_name, "existing_adapter": existing_adapter},
        )
        self.tool_name = tool_name
        self.adapter_name = adapter_name
        self.existing_adapter = existing_adapter


class AdapterConnectError(GatewayError):
    """Exception for adapter connection errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONNECT_ERROR", details)


class UnknownToolError(GatewayError):
    """A call named a tool that is not registered."""
    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", "UNKNOWN_TOOL", {"tool": tool_name})
        self.tool_name = tool_name


class ToolValidationError(GatewayError):
    """Call arguments violate the tool's input schema."""
    def __init__(self, tool_name: str, reason: str):
        super().__init__(
            f"Invalid arguments for {tool_name}: {reason}",
            "VALIDATION_ERROR",
            {"tool": tool_name, "reason": reason},
        )
        self.tool_name = tool_name
        self.reason = reason


class ToolExecutionError(GatewayError):
    """Exception for tool execution errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "TOOL_EXEC_ERROR", details)


class ToolTimeoutError(GatewayError):
    """A tool call exceeded its timeout."""
    def __init__(self, tool_name: str, timeout: float):
        super().__init__(
            f"Tool '{tool_name}' timed out after {timeout:g}s",
            "TOOL_TIMEOUT",
            {"tool": tool_name, "timeout": timeout},
        )
        self.tool_name = tool_name
        self.timeout = timeout
