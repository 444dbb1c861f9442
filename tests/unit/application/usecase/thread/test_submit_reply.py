"""Unit tests for SubmitReplyUseCase."""

import pytest

from chorus.adapter.error import WriteFailure
from chorus.adapter.record_store.inmemory import MockRecordStore
from chorus.application.usecase.thread import (
    ChangeViewRequest,
    ChangeViewUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    SubmitReplyRequest,
    SubmitReplyUseCase,
)
from chorus.domain.error import NotFoundError, ValidationError
from chorus.domain.value import ViewAction
from tests.conftest import SCOPE, make_reply
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSubmitReplyUseCase:
    """Tests for SubmitReplyUseCase."""

    @pytest.mark.asyncio
    async def test_top_level_reply(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SubmitReplyUseCase)
        store = await unit_env.get(MockRecordStore)

        # Act
        response = await use_case.execute(
            SubmitReplyRequest(
                scope_id=SCOPE,
                viewer_id="viewer",
                viewer_display_name="Viewer",
                content="First!",
            )
        )

        # Assert
        assert response.parent_id is None
        assert response.scope_id == SCOPE
        stored = await store.get_reply(response.reply_id)
        assert stored.content == "First!"
        assert stored.author_display_name == "Viewer"

    @pytest.mark.asyncio
    async def test_reply_to_collapsed_thread_is_shown(self, unit_env):
        """Replying to a collapsed reply expands it so the reply is visible."""
        # Arrange
        store = await unit_env.get(MockRecordStore)
        store.seed([make_reply("r"), make_reply("n", parent_id="r", minutes=1)])
        change_view = await unit_env.get(ChangeViewUseCase)
        submit = await unit_env.get(SubmitReplyUseCase)
        get_thread = await unit_env.get(GetThreadUseCase)
        await change_view.execute(
            ChangeViewRequest(
                scope_id=SCOPE,
                viewer_id="viewer",
                action=ViewAction.TOGGLE_COLLAPSE,
                node_id="n",
            )
        )

        # Act
        response = await submit.execute(
            SubmitReplyRequest(
                scope_id=SCOPE, viewer_id="viewer", content="Hi", parent_id="n"
            )
        )
        thread = await get_thread.execute(
            GetThreadRequest(scope_id=SCOPE, viewer_id="viewer")
        )

        # Assert
        assert "n" in response.expanded
        n = thread.threads[0].root.children[0]
        assert n.is_collapsed is False
        assert [c.reply_id for c in n.children] == [response.reply_id]

    @pytest.mark.asyncio
    async def test_use_draft_target(self, unit_env):
        """With use_draft_target the parent comes from the view state."""
        # Arrange
        store = await unit_env.get(MockRecordStore)
        store.seed([make_reply("r"), make_reply("c", parent_id="r", minutes=1)])
        change_view = await unit_env.get(ChangeViewUseCase)
        submit = await unit_env.get(SubmitReplyUseCase)
        await change_view.execute(
            ChangeViewRequest(
                scope_id=SCOPE,
                viewer_id="viewer",
                action=ViewAction.SET_DRAFT_TARGET,
                node_id="c",
            )
        )

        # Act
        response = await submit.execute(
            SubmitReplyRequest(
                scope_id=SCOPE,
                viewer_id="viewer",
                content="Drafted",
                parent_id="r",
                use_draft_target=True,
            )
        )

        # Assert
        assert response.parent_id == "c"

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, unit_env):
        submit = await unit_env.get(SubmitReplyUseCase)
        store = await unit_env.get(MockRecordStore)

        with pytest.raises(ValidationError):
            await submit.execute(
                SubmitReplyRequest(scope_id=SCOPE, viewer_id="viewer", content="")
            )
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_unknown_parent_rejected(self, unit_env):
        submit = await unit_env.get(SubmitReplyUseCase)

        with pytest.raises(NotFoundError):
            await submit.execute(
                SubmitReplyRequest(
                    scope_id=SCOPE,
                    viewer_id="viewer",
                    content="Hello",
                    parent_id="missing",
                )
            )

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, unit_env):
        submit = await unit_env.get(SubmitReplyUseCase)
        store = await unit_env.get(MockRecordStore)
        store.fail("append")

        with pytest.raises(WriteFailure):
            await submit.execute(
                SubmitReplyRequest(scope_id=SCOPE, viewer_id="viewer", content="Hi")
            )
