"""
Filesystem storage adapter implementation.

This module contains the FileSystemAdapter that stores files under a local
root directory, and the factory used to build it from configuration.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Union

from .base import AdapterFactory, LoggerAwareAdapter, StorageAdapter
from ..exceptions import InvalidPathError, StorageError

logger = logging.getLogger(__name__)

FILESYSTEM_PATH_ENV = "VSTORAGE_FILESYSTEM_PATH"


def default_root_path() -> Path:
    """Root used when none is configured: the env override or a temp folder."""
    env_path = os.getenv(FILESYSTEM_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path(tempfile.gettempdir()) / "vstorage"


class FileSystemAdapter(StorageAdapter, LoggerAwareAdapter):
    """
    Local filesystem implementation of StorageAdapter.

    Paths are interpreted relative to ``root_path``; a path resolving outside
    of the root is rejected with InvalidPathError.
    """

    NAME = "FileSystem"

    def __init__(self, root_path: Optional[Path] = None):
        """
        Initialize filesystem adapter.

        Args:
            root_path: Directory holding the stored files (default: see default_root_path)
        """
        self.root_path = Path(root_path) if root_path is not None else default_root_path()
        self._logger = logger

    def set_logger(self, logger: logging.Logger) -> None:
        self._logger = logger

    def get_name(self) -> str:
        return self.NAME

    def _resolve(self, path: str) -> Path:
        """Map a storage path onto a file below the root directory."""
        root = self.root_path.resolve()
        target = (root / path.lstrip("/")).resolve()
        if target != root and root not in target.parents:
            raise InvalidPathError(f"Path escapes storage root: {path}")
        if target == root:
            raise InvalidPathError(f"Path does not name a file: {path!r}")
        return target

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def get(self, path: str) -> Union[bytes, bool]:
        """
        Read a file.

        Args:
            path: Path to the file

        Returns:
            File contents as bytes, False if the file does not exist

        Raises:
            StorageError: If the file exists but cannot be read
        """
        target = self._resolve(path)
        if not target.is_file():
            self._logger.debug(f"File not found in {self.root_path}: {path}")
            return False
        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {str(e)}") from e

    def get_stream(self, path: str) -> Union[BinaryIO, bool]:
        target = self._resolve(path)
        if not target.is_file():
            self._logger.debug(f"File not found in {self.root_path}: {path}")
            return False
        try:
            return open(target, 'rb')
        except OSError as e:
            raise StorageError(f"Failed to open {path}: {str(e)}") from e

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        """
        Create a file or update it if it exists, creating missing folders.

        Args:
            path: Path to the file
            contents: Text (stored as UTF-8) or bytes

        Returns:
            True once the file is written

        Raises:
            StorageError: If the file cannot be written
        """
        target = self._resolve(path)
        data = contents.encode("utf-8") if isinstance(contents, str) else contents
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {str(e)}") from e
        self._logger.debug(f"Stored {len(data)} bytes at {target}")
        return True

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'wb') as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            raise StorageError(f"Failed to write stream to {path}: {str(e)}") from e
        return True

    def rename(self, path: str, new_path: str) -> bool:
        """
        Rename a file.

        Returns False when the source is missing or the target already exists.
        """
        source = self._resolve(path)
        target = self._resolve(new_path)
        if not source.is_file():
            return False
        if target.exists():
            self._logger.warning(f"Refusing to overwrite {new_path} while renaming {path}")
            return False
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            source.rename(target)
        except OSError as e:
            raise StorageError(f"Failed to rename {path} to {new_path}: {str(e)}") from e
        return True

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {str(e)}") from e
        return True


class FileSystemAdapterFactory(AdapterFactory):
    """Builds FileSystemAdapter instances from ``{"path": ...}`` configuration."""

    def create(self, config: Optional[Dict[str, Any]] = None) -> FileSystemAdapter:
        config = config or {}
        root_path = config.get("path")
        if root_path is not None:
            root_path = Path(root_path)
            if not root_path.is_absolute():
                # Make relative paths relative to the working directory
                root_path = Path.cwd() / root_path

        adapter = FileSystemAdapter(root_path)
        logger.info(f"Creating filesystem storage adapter: path={adapter.root_path}")
        return adapter
