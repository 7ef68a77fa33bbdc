"""
Call-all strategy: replicate writes to every adapter, fall back on reads.
"""

import logging
import shutil
import tempfile
from typing import Any, BinaryIO, Union

from .base import AbstractStorageCallStrategy
from .outcome import AdapterCall, AdapterOutcome
from ..adapters.base import StorageAdapter
from ..exceptions import AdapterError, StorageError, StorageFileNotFoundError

SPOOL_MAX_SIZE = 8 * 1024 * 1024


class CallAllStrategy(AbstractStorageCallStrategy):
    """
    Dispatches write operations and ``exists`` to every adapter and reads to
    the first adapter that has the file.

    Writes succeed when at least one adapter succeeded. Reads raise
    StorageFileNotFoundError when no adapter has the file, or AdapterError
    wrapping the last adapter exception when at least one adapter failed.
    """

    def get_strategy_name(self) -> str:
        return "CallAllStrategy"

    def exists(self, path: str) -> bool:
        return self._run_all_and_log(lambda adapter: adapter.exists(path))

    def get(self, path: str) -> bytes:
        return self._run_one_and_log(lambda adapter: adapter.get(path), path)

    def get_stream(self, path: str) -> BinaryIO:
        return self._run_one_and_log(lambda adapter: adapter.get_stream(path), path)

    def rename(self, path: str, new_path: str) -> bool:
        return self._run_all_and_log(lambda adapter: adapter.rename(path, new_path))

    def delete(self, path: str) -> bool:
        return self._run_all_and_log(lambda adapter: adapter.delete(path))

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        return self._run_all_and_log(lambda adapter: adapter.put(path, contents))

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """
        Copy a stream to every adapter.

        Seekable streams are rewound to their starting offset before each
        adapter reads them. Other streams are read once into a spooled
        buffer, which is replayed to every adapter.
        """
        seekable = getattr(stream, "seekable", None)
        if seekable is not None and seekable():
            return self._replay_stream(path, stream, stream.tell())

        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as buffer:
            shutil.copyfileobj(stream, buffer)
            return self._replay_stream(path, buffer, 0)

    def _replay_stream(self, path: str, stream: BinaryIO, start: int) -> bool:
        def put_stream(adapter: StorageAdapter) -> bool:
            stream.seek(start)
            return adapter.put_stream(path, stream)

        return self._run_all_and_log(put_stream)

    def _run_all_and_log(self, fn: AdapterCall) -> bool:
        result = False
        for adapter in self.get_adapters():
            outcome = AdapterOutcome.capture(adapter, fn)
            if outcome.failed:
                self._log_adapter_exception(adapter, outcome.error)
            result = outcome.succeeded or result
        return result

    def _run_one_and_log(self, fn: AdapterCall, path: str) -> Any:
        failure: StorageError = StorageFileNotFoundError(path)
        for adapter in self.get_adapters():
            outcome = AdapterOutcome.capture(adapter, fn)
            if outcome.found:
                return outcome.value
            if outcome.failed:
                failure = AdapterError(path, outcome.error)
                self._log_adapter_exception(adapter, outcome.error)

        if isinstance(failure, AdapterError):
            raise failure from failure.cause
        raise failure

    def _log_adapter_exception(self, adapter: StorageAdapter, error: Exception) -> None:
        name = self._adapter_name(adapter)
        self.log(
            logging.ERROR,
            f'Adapter "{name}" fails.',
            {"adapter": name, "exception": error},
        )

    @staticmethod
    def _adapter_name(adapter: StorageAdapter) -> str:
        try:
            return adapter.get_name()
        except Exception:
            return type(adapter).__name__
