"""Configuration models for the observability gateway configuration file."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GatewaySettings(BaseModel):
    """Runtime behaviour of the gateway core."""
    model_config = ConfigDict(validate_by_name=True)

    tool_timeout: Optional[float] = Field(default=30.0, gt=0, alias="toolTimeout")  # seconds, None disables
    connect_timeout: Optional[float] = Field(default=10.0, gt=0, alias="connectTimeout")  # seconds
    parallel_connect: bool = Field(default=False, alias="parallelConnect")
    duplicate_tools: Literal["error", "skip"] = Field(default="error", alias="duplicateTools")


class AdapterConfig(BaseModel):
    """Configuration for one backend adapter."""
    model_config = ConfigDict(validate_by_name=True)

    factory: str = Field(..., description="Import path of the adapter factory, 'module:attr'")
    enabled: bool = True
    description: Optional[str] = None
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("factory")
    @classmethod
    def validate_factory(cls, v: str) -> str:
        """Validate the factory is given as 'module:attr'."""
        module, _, attr = v.partition(":")
        if not module or not attr:
            raise ValueError(f"factory must look like 'package.module:attr', got '{v}'")
        return v


class GatewayConfig(BaseModel):
    """Complete configuration file."""
    model_config = ConfigDict(validate_by_name=True)

    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    adapters: Dict[str, AdapterConfig] = Field(default_factory=dict)

    @field_validator("adapters")
    @classmethod
    def validate_adapter_names(cls, v: Dict[str, AdapterConfig]) -> Dict[str, AdapterConfig]:
        """Validate adapter names are valid identifiers."""
        for name in v.keys():
            if not name.replace('_', '').replace('-', '').isalnum():
                raise ValueError(f'Adapter name "{name}" must be alphanumeric with underscores/hyphens only')
        return v

    @property
    def enabled_adapters(self) -> Dict[str, AdapterConfig]:
        return {name: cfg for name, cfg in self.adapters.items() if cfg.enabled}


DEFAULT_CONFIG = GatewayConfig()


class AdapterStatus(BaseModel):
    """Status information for a configured adapter."""
    name: str
    state: Literal["unconnected", "connecting", "connected", "failed", "disconnected"]
    tool_count: int = 0
    error_message: Optional[str] = None
    last_change: Optional[str] = None
