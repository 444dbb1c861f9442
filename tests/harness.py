"""Test harness for unit and integration tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from chorus.application.session_manager import SessionManager
from chorus.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes every thread session opened during the test

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real in-memory record store
        integration_env = create_env_fixture(unmock={"record_store"})

        @pytest.mark.asyncio
        async def test_reply(unit_env):
            service = await unit_env.get(ReplyService)
            reply = await service.submit_reply(...)
            assert reply.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container
            # Stop session consumer tasks before the loop goes away
            session_manager = await request_container.get(SessionManager)
            await session_manager.close_all()

        await container.close()

    return _test_environment
