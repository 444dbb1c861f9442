"""Infrastructure providers."""

# Import bases
from .record_store import RecordStoreProvider

# Import implementations (needed for __subclasses__())
from .record_store import ProdRecordStoreProvider  # noqa: F401

__all__ = [
    "ProdRecordStoreProvider",
    "RecordStoreProvider",
]
