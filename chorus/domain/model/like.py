"""Like marker entity.

A like marker records that a user likes a reply. Its existence is the only
state; there is at most one marker per (reply, user) pair.
"""

from datetime import datetime

from pydantic import Field

from chorus.domain.model.common import DomainModel
from chorus.domain.value import ReplyId, UserId


class LikeMarker(DomainModel):
    """Like marker keyed by (reply_id, user_id)."""

    reply_id: ReplyId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> tuple[ReplyId, UserId]:
        return (self.reply_id, self.user_id)


class LikeToggle(DomainModel):
    """Outcome of toggling a like."""

    reply_id: ReplyId
    user_id: UserId
    liked: bool
    like_count: int = Field(ge=0)
