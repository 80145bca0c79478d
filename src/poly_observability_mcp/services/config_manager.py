"""Configuration manager: loads the gateway file and builds adapters from it."""

import importlib
import json
import logging
import os
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..adapters.base import Adapter
from ..models.config import DEFAULT_CONFIG, GatewayConfig
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads YAML or JSON configuration with ``${VAR}`` environment substitution."""

    def __init__(self, config_path: str = "config/gateway.yaml", environ: Optional[Dict[str, str]] = None):
        self.config_path = Path(config_path)
        self._environ = environ if environ is not None else os.environ

    def load_config(self) -> GatewayConfig:
        """Load and validate the configuration file.

        A missing file yields the default configuration with no adapters.

        Raises:
            ConfigurationError: If the file cannot be parsed or validated
        """
        if not self.config_path.exists():
            logger.info(f"Configuration file {self.config_path} not found, using defaults")
            return DEFAULT_CONFIG.model_copy(deep=True)

        raw_content = self.config_path.read_text(encoding="utf-8")
        substituted_content = self._substitute_env_vars(raw_content)

        try:
            if self.config_path.suffix.lower() in (".yaml", ".yml"):
                config_data = yaml.safe_load(substituted_content)
            else:
                config_data = json.loads(substituted_content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Configuration parsing failed: {e}")
            raise ConfigurationError(f"Invalid configuration format: {e}", {"path": str(self.config_path)}) from e

        try:
            config = GatewayConfig.model_validate(config_data or {})
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError(f"Invalid configuration: {e}", {"path": str(self.config_path)}) from e

        logger.info(f"Configuration loaded from {self.config_path}: {len(config.adapters)} adapter(s)")
        return config

    def _substitute_env_vars(self, content: str) -> str:
        """Replace ``${VAR}`` references; unknown variables are left untouched."""
        return Template(content).safe_substitute(self._environ)

    @staticmethod
    def resolve_factory(path: str) -> Any:
        module_name, _, attr = path.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationError(f"Cannot import adapter module '{module_name}': {e}") from e

        target: Any = module
        for part in attr.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as e:
                raise ConfigurationError(f"'{path}' does not name an adapter factory") from e
        if not callable(target):
            raise ConfigurationError(f"Adapter factory '{path}' is not callable")
        return target

    def build_adapters(self, config: GatewayConfig) -> List[Adapter]:
        """Instantiate every enabled adapter, in configuration order.

        Raises:
            ConfigurationError: If a factory cannot be imported, fails, or
                does not return an :class:`Adapter`
        """
        adapters: List[Adapter] = []
        for name, adapter_config in config.enabled_adapters.items():
            factory = self.resolve_factory(adapter_config.factory)
            try:
                adapter = factory(name=name, **adapter_config.options)
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to build adapter {name}: {e}", {"adapter": name}
                ) from e
            if not isinstance(adapter, Adapter):
                raise ConfigurationError(
                    f"Factory for {name} returned {type(adapter).__name__}, not an Adapter"
                )
            adapters.append(adapter)
            logger.debug(f"Built adapter {name} from {adapter_config.factory}")

        skipped = len(config.adapters) - len(adapters)
        if skipped:
            logger.info(f"Skipping {skipped} disabled adapter(s)")
        return adapters
