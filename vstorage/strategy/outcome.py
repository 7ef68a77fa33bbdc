"""
Result of invoking one operation on one adapter.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..adapters.base import StorageAdapter

AdapterCall = Callable[[StorageAdapter], Any]


@dataclass(frozen=True)
class AdapterOutcome:
    """Either the value an adapter returned or the error it raised."""

    adapter: StorageAdapter
    value: Any = None
    error: Optional[Exception] = None

    @classmethod
    def capture(cls, adapter: StorageAdapter, fn: AdapterCall) -> "AdapterOutcome":
        """Run ``fn`` against ``adapter`` and record how it finished."""
        try:
            return cls(adapter, value=fn(adapter))
        except Exception as e:
            return cls(adapter, error=e)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def succeeded(self) -> bool:
        """True for a truthy value returned without error (write-class success)."""
        return not self.failed and bool(self.value)

    @property
    def found(self) -> bool:
        """True when a read returned something other than the failure sentinel."""
        return not self.failed and self.value is not False and self.value is not None
