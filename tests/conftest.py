"""
Shared fixtures for the virtual storage tests.
"""

from unittest.mock import Mock

import pytest

from vstorage.adapters.base import StorageAdapter


def make_adapter(name: str, **behaviour) -> Mock:
    """
    Create a mock adapter.

    Keyword arguments map adapter methods to either a return value or an
    exception to raise.
    """
    adapter = Mock(spec=StorageAdapter)
    adapter.get_name.return_value = name
    for method, result in behaviour.items():
        if isinstance(result, Exception):
            getattr(adapter, method).side_effect = result
        else:
            getattr(adapter, method).return_value = result
    return adapter


@pytest.fixture
def adapter_factory():
    """Factory fixture building mock adapters."""
    return make_adapter
