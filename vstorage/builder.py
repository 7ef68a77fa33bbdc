"""
Builder assembling a VirtualStorage from adapters, a call strategy and a logger.

Adapter references given to the builder are normalised into one of three
reference kinds (builtin name, adapter instance, adapter factory) and resolved
into concrete adapters before they reach the strategy.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .adapters.base import AdapterFactory, LoggerAwareAdapter, StorageAdapter
from .adapters.filesystem import FileSystemAdapter
from .adapters.registry import AdapterRegistry
from .exceptions import InvalidStorageAdapterError
from .log import get_default_logger
from .strategy.base import AbstractStorageCallStrategy
from .strategy.call_all import CallAllStrategy
from .virtual_storage import VirtualStorage

logger = logging.getLogger(__name__)

DEFAULT_BUILTIN_ADAPTER = FileSystemAdapter.NAME


@dataclass(frozen=True)
class NamedAdapter:
    """Reference to a builtin adapter by name."""
    name: str

    def resolve(self, registry: AdapterRegistry) -> StorageAdapter:
        return registry.get(self.name)


@dataclass(frozen=True)
class AdapterInstance:
    """Reference to an already constructed adapter."""
    adapter: StorageAdapter

    def resolve(self, registry: AdapterRegistry) -> StorageAdapter:
        return self.adapter


@dataclass(frozen=True)
class AdapterFactoryReference:
    """Reference to a factory called with the given configuration."""
    factory: AdapterFactory
    config: Dict[str, Any] = field(default_factory=dict)

    def resolve(self, registry: AdapterRegistry) -> StorageAdapter:
        adapter = self.factory.create(self.config)
        if not isinstance(adapter, StorageAdapter):
            raise InvalidStorageAdapterError(
                f"Factory {type(self.factory).__name__} returned an invalid adapter: {type(adapter).__name__}"
            )
        return adapter


AdapterReference = Union[NamedAdapter, AdapterInstance, AdapterFactoryReference]


def to_adapter_reference(adapter: Any, config: Optional[Dict[str, Any]] = None) -> AdapterReference:
    """
    Normalise a raw adapter argument into an adapter reference.

    Args:
        adapter: Builtin adapter name, adapter instance, adapter factory or reference
        config: Configuration passed to factories

    Returns:
        The matching adapter reference

    Raises:
        InvalidStorageAdapterError: If the argument matches no reference kind
    """
    if isinstance(adapter, (NamedAdapter, AdapterInstance, AdapterFactoryReference)):
        return adapter
    if isinstance(adapter, str):
        return NamedAdapter(adapter)
    if isinstance(adapter, StorageAdapter):
        return AdapterInstance(adapter)
    if isinstance(adapter, AdapterFactory):
        return AdapterFactoryReference(adapter, dict(config or {}))
    raise InvalidStorageAdapterError(f"Invalid storage adapter: {type(adapter).__name__}")


class StorageBuilder:
    """
    Fluent builder for VirtualStorage.

    Usage:
        storage = (
            StorageBuilder()
            .add_adapter("FileSystem")
            .add_adapter(MemoryAdapter())
            .add_adapter(FileSystemAdapterFactory(), {"path": "/var/data/backup"})
            .build()
        )
    """

    def __init__(self, registry: Optional[AdapterRegistry] = None):
        """
        Initialize the builder.

        Args:
            registry: Registry of builtin adapters (default: AdapterRegistry.with_builtins())
        """
        self._registry = registry
        self._strategy: Optional[AbstractStorageCallStrategy] = None
        self._logger: Optional[logging.Logger] = None
        self._adapters: List[StorageAdapter] = []
        # id(strategy) -> (strategy, number of adapters already registered on it)
        self._registered: Dict[int, Tuple[AbstractStorageCallStrategy, int]] = {}

    @property
    def registry(self) -> AdapterRegistry:
        if self._registry is None:
            self._registry = AdapterRegistry.with_builtins()
        return self._registry

    def set_strategy(self, strategy: AbstractStorageCallStrategy) -> "StorageBuilder":
        self._strategy = strategy
        return self

    def set_logger(self, logger: logging.Logger) -> "StorageBuilder":
        self._logger = logger
        return self

    def add_adapter(self, adapter: Any, config: Optional[Dict[str, Any]] = None) -> "StorageBuilder":
        """
        Resolve an adapter reference and queue the adapter for registration.

        Args:
            adapter: Builtin adapter name, StorageAdapter instance or AdapterFactory
            config: Configuration passed to the factory

        Returns:
            The builder

        Raises:
            StorageAdapterNotFoundError: If a builtin name is unknown
            InvalidStorageAdapterError: If the reference is of no supported kind
        """
        reference = to_adapter_reference(adapter, config)
        resolved = reference.resolve(self.registry)
        self._adapters.append(resolved)
        logger.debug(f"Added storage adapter {resolved.get_name()!r} ({type(reference).__name__})")
        return self

    def has_loaded_adapters(self) -> bool:
        return bool(self._adapters)

    def get_strategy(self) -> AbstractStorageCallStrategy:
        if self._strategy is None:
            return CallAllStrategy()
        return self._strategy

    def get_logger(self) -> logging.Logger:
        if self._logger is None:
            return get_default_logger()
        return self._logger

    def build(
        self,
        strategy: Optional[AbstractStorageCallStrategy] = None,
        storage_logger: Optional[logging.Logger] = None,
    ) -> VirtualStorage:
        """
        Assemble the virtual storage.

        The default builtin adapter is added when no adapter was given.
        Building again onto a strategy this builder already populated only
        registers the adapters added since the previous build.

        Args:
            strategy: Call strategy overriding the configured one
            storage_logger: Logger overriding the configured one

        Returns:
            VirtualStorage bound to the configured strategy
        """
        if not self.has_loaded_adapters():
            self.add_adapter(DEFAULT_BUILTIN_ADAPTER)

        if strategy is not None:
            self.set_strategy(strategy)
        if storage_logger is not None:
            self.set_logger(storage_logger)

        call_strategy = self.get_strategy()
        active_logger = self.get_logger()

        if self._logger is not None:
            for adapter in self._adapters:
                if isinstance(adapter, LoggerAwareAdapter):
                    adapter.set_logger(active_logger)

        _, registered = self._registered.get(id(call_strategy), (call_strategy, 0))
        call_strategy.add_adapters(self._adapters[registered:])
        self._registered[id(call_strategy)] = (call_strategy, len(self._adapters))
        call_strategy.set_logger(active_logger)

        logger.info(
            f"Built virtual storage with {call_strategy.get_strategy_name()} "
            f"over adapters {[a.get_name() for a in self._adapters]}"
        )
        return VirtualStorage(call_strategy)
