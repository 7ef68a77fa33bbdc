"""
Abstract base class for call strategies.

A call strategy owns the ordered adapters of one virtual storage and decides
how every operation is dispatched across them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Tuple, Union

from ..adapters.base import StorageAdapter
from ..log import get_default_logger

# Attributes a LogRecord already carries; extra keys must not overwrite them
RESERVED_RECORD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class AbstractStorageCallStrategy(ABC):
    """
    Shared state and operation contract for call strategies.

    Adapters are kept in registration order and can only be appended.
    Implementations must route every adapter failure through ``log`` and must
    not let raw adapter exceptions escape to the caller.
    """

    def __init__(self):
        self._adapters: List[StorageAdapter] = []
        self._logger: Optional[logging.Logger] = None

    def add_adapters(self, adapters: Iterable[StorageAdapter]) -> None:
        """
        Append adapters to the registry, keeping their order.

        Args:
            adapters: Adapters to register; duplicates are kept
        """
        self._adapters.extend(adapters)

    def get_adapters(self) -> Tuple[StorageAdapter, ...]:
        return tuple(self._adapters)

    def set_logger(self, logger: logging.Logger) -> None:
        self._logger = logger

    def get_logger(self) -> logging.Logger:
        if self._logger is None:
            return get_default_logger()
        return self._logger

    def log(self, level: int, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log a message with structured context.

        The context entries are attached to the log record, keys clashing with
        LogRecord attributes prefixed with ``context_``. An ``exception`` entry
        is also passed as ``exc_info``.

        Args:
            level: Logging level (e.g., logging.ERROR)
            message: Log message
            context: Extra data such as the failing adapter and its exception
        """
        context = dict(context or {})
        exception = context.get("exception")
        exc_info = exception if isinstance(exception, BaseException) else None
        extra = {
            (f"context_{key}" if key in RESERVED_RECORD_KEYS else key): value
            for key, value in context.items()
        }
        self.get_logger().log(level, message, exc_info=exc_info, extra=extra)

    @abstractmethod
    def get_strategy_name(self) -> str:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file exists."""
        pass

    @abstractmethod
    def get(self, path: str) -> bytes:
        """
        Read a file.

        Raises:
            StorageFileNotFoundError: If no adapter has the file
            AdapterError: If adapters failed and none returned the file
        """
        pass

    @abstractmethod
    def get_stream(self, path: str) -> BinaryIO:
        """
        Retrieve a read-stream for a path.

        Raises:
            StorageFileNotFoundError: If no adapter has the file
            AdapterError: If adapters failed and none returned the file
        """
        pass

    @abstractmethod
    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        pass

    @abstractmethod
    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        pass

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        pass
