"""
Registry of builtin storage adapters.

The registry is an explicit object: the assembly layer receives one instance
and looks builtin adapters up by name through it.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .base import StorageAdapter
from .filesystem import FileSystemAdapter
from .memory import MemoryAdapter
from ..exceptions import StorageAdapterNotFoundError

logger = logging.getLogger(__name__)

AdapterConstructor = Callable[[], StorageAdapter]

BUILTIN_ADAPTERS: List[AdapterConstructor] = [FileSystemAdapter, MemoryAdapter]


class AdapterRegistry:
    """Maps adapter names to adapter instances."""

    def __init__(self, adapters: Optional[Iterable[StorageAdapter]] = None):
        self._adapters: Dict[str, StorageAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    @classmethod
    def with_builtins(
        cls,
        constructors: Optional[Iterable[AdapterConstructor]] = None,
    ) -> "AdapterRegistry":
        """
        Create a registry holding one instance of every builtin adapter.

        A builtin whose construction fails is skipped and logged.

        Args:
            constructors: Adapter constructors to use (default: BUILTIN_ADAPTERS)

        Returns:
            AdapterRegistry instance
        """
        registry = cls()
        for constructor in constructors if constructors is not None else BUILTIN_ADAPTERS:
            try:
                registry.register(constructor())
            except Exception as e:
                name = getattr(constructor, "__name__", repr(constructor))
                logger.info(f'Impossible start "{name}" client: {e}')
        return registry

    def register(self, adapter: StorageAdapter) -> None:
        self._adapters[adapter.get_name()] = adapter

    def get(self, name: str) -> StorageAdapter:
        """
        Look a builtin adapter up by name.

        Raises:
            StorageAdapterNotFoundError: If no adapter is registered under the name
        """
        try:
            return self._adapters[name]
        except KeyError:
            raise StorageAdapterNotFoundError(f'Builtin storage "{name}" not found') from None

    def names(self) -> List[str]:
        return list(self._adapters)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)
