"""
Storage configuration loading and storage factory.

This module loads the storage configuration from YAML with environment
variable overrides and builds a VirtualStorage from it.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .adapters.base import AdapterFactory
from .adapters.filesystem import FILESYSTEM_PATH_ENV, FileSystemAdapterFactory
from .adapters.memory import MemoryAdapterFactory
from .builder import StorageBuilder
from .exceptions import StorageConfigurationError
from .strategy.base import AbstractStorageCallStrategy
from .strategy.call_all import CallAllStrategy
from .virtual_storage import VirtualStorage

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/storage.yaml")

ADAPTER_FACTORIES: Dict[str, Callable[[], AdapterFactory]] = {
    "filesystem": FileSystemAdapterFactory,
    "memory": MemoryAdapterFactory,
}

STRATEGIES: Dict[str, Callable[[], AbstractStorageCallStrategy]] = {
    "call_all": CallAllStrategy,
}


class AdapterSettings(BaseModel):
    """One adapter entry of the ``storage.adapters`` list."""
    model_config = ConfigDict(extra="allow")

    type: str = Field(
        ...,
        description="Adapter type (e.g., 'filesystem', 'memory')",
        min_length=1
    )

    def options(self) -> Dict[str, Any]:
        """Adapter specific settings passed to the adapter factory."""
        return dict(self.model_extra or {})


class StorageSettings(BaseModel):
    """The ``storage`` section of the configuration file."""

    strategy: str = Field(
        "call_all",
        description="Call strategy name"
    )

    adapters: List[AdapterSettings] = Field(
        default_factory=list,
        description="Adapters in registration order; empty means the default builtin adapter"
    )


def load_storage_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load storage configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to configuration file (default: config/storage.yaml)

    Returns:
        Configuration dictionary

    Raises:
        StorageConfigurationError: If configuration loading fails
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise StorageConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StorageConfigurationError(f"YAML parsing error: {e}") from e
    except OSError as e:
        raise StorageConfigurationError(f"Configuration loading failed: {e}") from e

    if not isinstance(config, dict) or not isinstance(config.get('storage'), dict):
        raise StorageConfigurationError("Invalid configuration: missing 'storage' section")

    return _apply_environment_overrides(config)


def _apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern: VSTORAGE_<SECTION>_<KEY>

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment overrides applied
    """
    storage = config['storage']

    strategy = os.getenv('VSTORAGE_STRATEGY')
    if strategy:
        storage['strategy'] = strategy
        logger.info(f"Storage strategy overridden by environment: {strategy}")

    fs_path = os.getenv(FILESYSTEM_PATH_ENV)
    if fs_path:
        adapters = storage.get('adapters') or []
        storage['adapters'] = adapters
        filesystem_entries = [a for a in adapters if isinstance(a, dict) and a.get('type') == 'filesystem']
        if not adapters:
            adapters.append({'type': 'filesystem', 'path': fs_path})
        for entry in filesystem_entries:
            entry.setdefault('path', fs_path)
        logger.info(f"Filesystem path overridden by environment: {fs_path}")

    return config


def parse_storage_settings(config: Dict[str, Any]) -> StorageSettings:
    """
    Validate the ``storage`` section of a configuration dictionary.

    Raises:
        StorageConfigurationError: If the section is missing or invalid
    """
    try:
        return StorageSettings.model_validate(config['storage'] or {})
    except KeyError as e:
        raise StorageConfigurationError(f"Missing required configuration key: {e}") from e
    except ValidationError as e:
        raise StorageConfigurationError(f"Invalid storage configuration: {e}") from e


def create_storage_strategy(name: str) -> AbstractStorageCallStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise StorageConfigurationError(f"Unknown storage strategy: {name}") from None


def create_storage(
    config: Dict[str, Any],
    storage_logger: Optional[logging.Logger] = None,
    builder: Optional[StorageBuilder] = None,
) -> VirtualStorage:
    """
    Create a virtual storage from configuration.

    Args:
        config: Storage configuration dictionary
        storage_logger: Logger injected into the strategy and logger-aware adapters
        builder: Builder to assemble with (default: a new StorageBuilder)

    Returns:
        VirtualStorage instance

    Raises:
        StorageConfigurationError: If the configuration names unknown adapters or strategies
    """
    settings = parse_storage_settings(config)
    builder = builder or StorageBuilder()

    builder.set_strategy(create_storage_strategy(settings.strategy))
    if storage_logger is not None:
        builder.set_logger(storage_logger)

    for adapter_settings in settings.adapters:
        factory_class = ADAPTER_FACTORIES.get(adapter_settings.type)
        if factory_class is None:
            raise StorageConfigurationError(f"Unknown storage adapter type: {adapter_settings.type}")
        builder.add_adapter(factory_class(), adapter_settings.options())

    logger.info(
        f"Creating virtual storage: strategy={settings.strategy}, "
        f"adapters={[a.type for a in settings.adapters] or 'default'}"
    )
    return builder.build()


def create_default_storage(config_path: Optional[Path] = None) -> VirtualStorage:
    """
    Create virtual storage with default configuration.

    This is the main entry point for creating a storage with configuration
    loaded from file and environment overrides.

    Args:
        config_path: Optional path to configuration file

    Returns:
        VirtualStorage instance ready for use

    Raises:
        StorageConfigurationError: If configuration or creation fails
    """
    load_dotenv()
    try:
        config = load_storage_config(config_path)
        return create_storage(config)
    except StorageConfigurationError as e:
        logger.error(f"Failed to create default storage: {e}")
        raise
