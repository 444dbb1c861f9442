"""Mock providers for testing."""

from .record_store import MockRecordStoreProvider
from .container import build_test_container

__all__ = [
    "MockRecordStoreProvider",
    "build_test_container",
]
