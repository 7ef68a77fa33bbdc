"""
Abstract base classes for storage adapters.

This module defines the StorageAdapter interface that every storage backend
must follow, plus the optional capabilities the assembly layer checks for.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional, Union


class StorageAdapter(ABC):
    """
    Abstract base class for storage adapters.

    An adapter wraps one storage backend (filesystem, object store, remote
    service). Read methods return ``False`` when the backend does not hold
    the path; any backend error may be raised as is.
    """

    @abstractmethod
    def get_name(self) -> str:
        """
        Get the stable adapter name.

        Returns:
            Human-readable name used for logging and builtin lookup
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """
        Check whether a file exists.

        Args:
            path: Path to the file

        Returns:
            True if the file exists, False otherwise
        """
        pass

    @abstractmethod
    def get(self, path: str) -> Union[bytes, bool]:
        """
        Read a file.

        Args:
            path: Path to the file

        Returns:
            File contents, or False if the backend does not have it
        """
        pass

    @abstractmethod
    def get_stream(self, path: str) -> Union[BinaryIO, bool]:
        """
        Retrieve a read-stream for a path.

        Args:
            path: Path to the file

        Returns:
            Binary file-like object, or False if the backend does not have it
        """
        pass

    @abstractmethod
    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        """
        Create a file or update it if it exists, creating missing folders.

        Args:
            path: Path to the file
            contents: File contents

        Returns:
            True on success, False on failure
        """
        pass

    @abstractmethod
    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """
        Create or update a file from a readable stream.

        Args:
            path: Path to the file
            stream: Binary file-like object to copy from

        Returns:
            True on success, False on failure
        """
        pass

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        """
        Rename a file.

        Args:
            path: Path to the existing file
            new_path: New path of the file

        Returns:
            True on success, False on failure
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Delete a file.

        Args:
            path: Path to the file

        Returns:
            True on success, False on failure
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_name()!r}>"


class LoggerAwareAdapter(ABC):
    """Capability for adapters that accept the storage logger."""

    @abstractmethod
    def set_logger(self, logger: logging.Logger) -> None:
        pass


class AdapterFactory(ABC):
    """Builds an adapter from a configuration mapping."""

    @abstractmethod
    def create(self, config: Optional[Dict[str, Any]] = None) -> StorageAdapter:
        """
        Create a configured adapter.

        Args:
            config: Adapter-specific configuration

        Returns:
            StorageAdapter instance
        """
        pass
