"""Mock record store providers for testing."""

from dishka import Scope, alias, provide

from chorus.adapter.record_store.inmemory import MockRecordStore
from chorus.domain.repository import RecordStore
from chorus.util.di.infrastructure.record_store import RecordStoreProvider


class MockRecordStoreProvider(RecordStoreProvider):
    """Mock record store provider with failure injection.

    The concrete MockRecordStore is exposed as well so tests can seed
    records, inject write failures and inspect recorded calls. Each test
    builds its own container, so every test gets a fresh store.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_record_store(self) -> MockRecordStore:
        """Provide mock record store."""
        return MockRecordStore()

    record_store = alias(source=MockRecordStore, provides=RecordStore)
