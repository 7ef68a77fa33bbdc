"""
Virtual storage: one interface over several storage backends.

Operations are dispatched across the registered adapters by a call strategy.
"""

__version__ = "1.0.0"

from .adapters import (
    AdapterFactory,
    AdapterRegistry,
    FileSystemAdapter,
    FileSystemAdapterFactory,
    LoggerAwareAdapter,
    MemoryAdapter,
    MemoryAdapterFactory,
    StorageAdapter,
)
from .builder import StorageBuilder
from .exceptions import (
    AdapterError,
    InvalidPathError,
    InvalidStorageAdapterError,
    StorageAdapterNotFoundError,
    StorageConfigurationError,
    StorageError,
    StorageFileNotFoundError,
)
from .strategy import AbstractStorageCallStrategy, CallAllStrategy
from .virtual_storage import VirtualStorage

__all__ = [
    "VirtualStorage",
    "StorageBuilder",
    "AbstractStorageCallStrategy",
    "CallAllStrategy",
    "StorageAdapter",
    "LoggerAwareAdapter",
    "AdapterFactory",
    "AdapterRegistry",
    "FileSystemAdapter",
    "FileSystemAdapterFactory",
    "MemoryAdapter",
    "MemoryAdapterFactory",
    "StorageError",
    "StorageFileNotFoundError",
    "AdapterError",
    "InvalidPathError",
    "InvalidStorageAdapterError",
    "StorageAdapterNotFoundError",
    "StorageConfigurationError",
]
