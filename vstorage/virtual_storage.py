"""
Public entry point of the virtual storage.
"""

from typing import BinaryIO, Union

from .strategy.base import AbstractStorageCallStrategy


class VirtualStorage:
    """
    Storage facade forwarding every operation to its call strategy.

    Usage:
        storage = StorageBuilder().add_adapter("Memory").build()
        storage.put("reports/today.txt", "content")
        data = storage.get("reports/today.txt")
    """

    def __init__(self, strategy: AbstractStorageCallStrategy):
        self._strategy = strategy

    def get_strategy(self) -> AbstractStorageCallStrategy:
        return self._strategy

    def exists(self, path: str) -> bool:
        return self._strategy.exists(path)

    def get(self, path: str) -> bytes:
        return self._strategy.get(path)

    def get_stream(self, path: str) -> BinaryIO:
        return self._strategy.get_stream(path)

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        return self._strategy.put(path, contents)

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        return self._strategy.put_stream(path, stream)

    def rename(self, path: str, new_path: str) -> bool:
        return self._strategy.rename(path, new_path)

    def delete(self, path: str) -> bool:
        return self._strategy.delete(path)
