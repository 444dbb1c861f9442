"""Unit tests for ToggleLikeUseCase."""

import pytest

from chorus.adapter.record_store.inmemory import MockRecordStore
from chorus.application.usecase.thread import ToggleLikeRequest, ToggleLikeUseCase
from chorus.domain.error import NotFoundError
from tests.conftest import SCOPE, make_reply
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def like_request(viewer_id: str, reply_id: str) -> ToggleLikeRequest:
    return ToggleLikeRequest(scope_id=SCOPE, viewer_id=viewer_id, reply_id=reply_id)


class TestToggleLikeUseCase:
    """Tests for ToggleLikeUseCase."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        """Toggling twice returns to the original state."""
        # Arrange
        store = await unit_env.get(MockRecordStore)
        store.seed([make_reply("r", like_count=2)])
        use_case = await unit_env.get(ToggleLikeUseCase)

        # Act
        liked = await use_case.execute(like_request("viewer", "r"))
        unliked = await use_case.execute(like_request("viewer", "r"))

        # Assert
        assert (liked.liked, liked.like_count) == (True, 3)
        assert (unliked.liked, unliked.like_count) == (False, 2)

    @pytest.mark.asyncio
    async def test_separate_viewers(self, unit_env):
        # Arrange
        store = await unit_env.get(MockRecordStore)
        store.seed([make_reply("r")])
        use_case = await unit_env.get(ToggleLikeUseCase)

        # Act
        await use_case.execute(like_request("alice", "r"))
        response = await use_case.execute(like_request("bob", "r"))

        # Assert
        assert response.liked is True
        assert response.like_count == 2

    @pytest.mark.asyncio
    async def test_missing_reply(self, unit_env):
        use_case = await unit_env.get(ToggleLikeUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(like_request("viewer", "missing"))
