"""
Exceptions raised by the virtual storage.

Dispatch failures (not-found, backend failure) are raised by call strategies
on read operations. Adapter resolution and configuration errors are raised
while the storage is being assembled.
"""


class StorageError(Exception):
    """Base exception for all storage-related errors."""
    pass


class StorageFileNotFoundError(StorageError):
    """Raised when no adapter holds the requested path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class AdapterError(StorageError):
    """Raised when adapters failed while reading a path and none succeeded."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Adapter failure for {path}: {cause}")


class InvalidPathError(StorageError):
    """Raised when a path cannot be mapped onto a backend."""
    pass


class InvalidStorageAdapterError(StorageError):
    """Raised when an adapter reference is neither a name, an adapter nor a factory."""
    pass


class StorageAdapterNotFoundError(StorageError):
    """Raised when a builtin adapter name is not registered."""
    pass


class StorageConfigurationError(StorageError):
    """Exception raised for storage configuration errors."""
    pass
