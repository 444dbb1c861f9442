"""Reply entity.

Replies are the nodes of a threaded discussion. The same entity serves
comments under a post and messages under a conversation: a reply with no
parent is a top-level message, any other reply hangs under its parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from chorus.domain.model.common import DomainModel
from chorus.domain.value import ReplyId, ScopeId, UserId


class Reply(DomainModel):
    """Reply entity.

    Threading is managed through parent_id only. Depth and ordering are
    derived by the thread index, never stored.

    Everything except like_count is fixed at creation. like_count is a
    denormalized cache of the like markers and may briefly lag behind them.
    """

    id: ReplyId
    scope_id: ScopeId
    author_id: UserId
    author_display_name: str
    author_avatar_url: Optional[str] = None
    content: str = Field(min_length=1)
    parent_id: Optional[ReplyId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    like_count: int = Field(default=0, ge=0)
    is_system_authored: bool = False

    @property
    def is_top_level(self) -> bool:
        """Whether this reply starts a thread of its own."""
        return self.parent_id is None

    @property
    def sort_key(self) -> tuple[datetime, str]:
        """Sibling ordering key: oldest first, id breaks timestamp ties."""
        return (self.created_at, self.id)

    def with_like_count(self, like_count: int) -> "Reply":
        """Return a copy carrying a new like count (clamped at zero)."""
        return self.model_copy(update={"like_count": max(like_count, 0)})
