"""Unit tests for dependency injection wiring."""

import pytest

from chorus.adapter.record_store.inmemory import InMemoryRecordStore, MockRecordStore
from chorus.domain.repository import RecordStore
from chorus.util.di import ProdConfigProvider, RecordStoreProvider, get_provider
from chorus.util.di.infrastructure import ProdRecordStoreProvider
from tests.di import MockRecordStoreProvider, build_test_container
from tests.harness import create_env_fixture

# Integration-style fixture - production record store
integration_env = create_env_fixture(unmock={"record_store"})


class TestGetProvider:
    """Tests for provider selection."""

    def test_concrete_provider_returned_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_provider_selected_by_flag(self):
        assert get_provider(RecordStoreProvider) is ProdRecordStoreProvider
        assert (
            get_provider(RecordStoreProvider, use_mock=True) is MockRecordStoreProvider
        )

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError):
            build_test_container(unmock={"search"})


class TestContainer:
    """Tests for container resolution."""

    @pytest.mark.asyncio
    async def test_unmocked_record_store_is_in_memory(self, integration_env):
        store = await integration_env.get(RecordStore)

        assert isinstance(store, InMemoryRecordStore)
        assert not isinstance(store, MockRecordStore)

    @pytest.mark.asyncio
    async def test_record_store_is_shared(self):
        """APP-scoped components are shared across requests."""
        container = build_test_container()

        async with container() as first:
            store_a = await first.get(RecordStore)
        async with container() as second:
            store_b = await second.get(RecordStore)

        assert store_a is store_b
        assert isinstance(store_a, MockRecordStore)
        await container.close()
