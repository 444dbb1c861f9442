"""Test configuration and fixtures."""

from datetime import datetime, timedelta

from chorus.adapter.record_store.inmemory import MockRecordStore
from chorus.domain.model.reply import Reply
from chorus.domain.value import Author, DisplayName, ReplyId, ScopeId, UserId

SCOPE = ScopeId("scope-1")
BASE_TIME = datetime(2024, 3, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp a fixed number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_reply(
    reply_id: str,
    parent_id: str | None = None,
    minutes: int = 0,
    like_count: int = 0,
    scope_id: ScopeId = SCOPE,
    author_id: str = "user-author",
    content: str | None = None,
) -> Reply:
    """Helper function to build test replies.

    Timestamps are offsets from a fixed base time so ordering between
    replies is always explicit in the test.

    Args:
        reply_id: Reply id
        parent_id: Parent reply id (None for top-level)
        minutes: created_at offset from BASE_TIME
        like_count: Denormalized like count
        scope_id: Thread scope
        author_id: Author user id
        content: Reply text (defaults to a text naming the reply)

    Returns:
        Reply record
    """
    return Reply(
        id=ReplyId(reply_id),
        scope_id=scope_id,
        author_id=UserId(author_id),
        author_display_name="Author",
        content=content or f"Reply {reply_id}",
        parent_id=ReplyId(parent_id) if parent_id else None,
        created_at=at(minutes),
        like_count=like_count,
    )


def make_author(user_id: str = "user-viewer", display_name: str = "Viewer") -> Author:
    """Helper function to build a reply author."""
    return Author(id=UserId(user_id), display_name=DisplayName(display_name))


class BrokenStreamStore(MockRecordStore):
    """Record store whose stream dies as soon as it is consumed."""

    async def subscribe(self, scope_id: ScopeId):
        raise RuntimeError("stream down")
        yield
