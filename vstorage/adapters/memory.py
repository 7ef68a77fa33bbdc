"""
In-memory storage adapter.

Files live in a dictionary owned by the adapter instance; nothing is shared
between instances.
"""

import io
import logging
from typing import Any, BinaryIO, Dict, Optional, Union

from .base import AdapterFactory, StorageAdapter

logger = logging.getLogger(__name__)


class MemoryAdapter(StorageAdapter):
    """Dictionary backed implementation of StorageAdapter."""

    NAME = "Memory"

    def __init__(self, name: Optional[str] = None):
        self._name = name or self.NAME
        self._files: Dict[str, bytes] = {}

    def get_name(self) -> str:
        return self._name

    @staticmethod
    def _key(path: str) -> str:
        return path.lstrip("/")

    def exists(self, path: str) -> bool:
        return self._key(path) in self._files

    def get(self, path: str) -> Union[bytes, bool]:
        return self._files.get(self._key(path), False)

    def get_stream(self, path: str) -> Union[BinaryIO, bool]:
        data = self._files.get(self._key(path))
        if data is None:
            return False
        return io.BytesIO(data)

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        data = contents.encode("utf-8") if isinstance(contents, str) else bytes(contents)
        self._files[self._key(path)] = data
        return True

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        return self.put(path, stream.read())

    def rename(self, path: str, new_path: str) -> bool:
        source, target = self._key(path), self._key(new_path)
        if source not in self._files or target in self._files:
            return False
        self._files[target] = self._files.pop(source)
        return True

    def delete(self, path: str) -> bool:
        return self._files.pop(self._key(path), None) is not None


class MemoryAdapterFactory(AdapterFactory):
    """Builds MemoryAdapter instances; accepts an optional ``name`` setting."""

    def create(self, config: Optional[Dict[str, Any]] = None) -> MemoryAdapter:
        config = config or {}
        adapter = MemoryAdapter(config.get("name"))
        logger.info(f"Creating memory storage adapter: name={adapter.get_name()}")
        return adapter
