"""
Call strategies deciding how operations are dispatched across adapters.
"""

from .base import AbstractStorageCallStrategy
from .call_all import CallAllStrategy
from .outcome import AdapterOutcome

__all__ = [
    "AbstractStorageCallStrategy",
    "CallAllStrategy",
    "AdapterOutcome",
]
