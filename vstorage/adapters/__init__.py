"""
Storage adapters package.

This package contains the adapter contract, the builtin adapters and the
registry the builder resolves builtin names against.
"""

from .base import AdapterFactory, LoggerAwareAdapter, StorageAdapter
from .filesystem import FileSystemAdapter, FileSystemAdapterFactory
from .memory import MemoryAdapter, MemoryAdapterFactory
from .registry import AdapterRegistry

__all__ = [
    "StorageAdapter",
    "LoggerAwareAdapter",
    "AdapterFactory",
    "FileSystemAdapter",
    "FileSystemAdapterFactory",
    "MemoryAdapter",
    "MemoryAdapterFactory",
    "AdapterRegistry",
]
