"""Record store infrastructure providers."""

from dishka import Scope, provide

from chorus.adapter.record_store.inmemory import InMemoryRecordStore
from chorus.domain.repository import RecordStore
from chorus.util.di.base import ProviderBase


class RecordStoreProvider(ProviderBase):
    """Record store component base."""

    __mock_component__ = "record_store"


class ProdRecordStoreProvider(RecordStoreProvider):
    """Production record store provider using the process-local store."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_record_store(self) -> RecordStore:
        """Provide record store adapter."""
        return InMemoryRecordStore()
