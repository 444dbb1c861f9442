"""Reply domain service."""

from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

import logfire

from chorus.adapter.error import WriteFailure
from chorus.domain.error import NotFoundError, ValidationError
from chorus.domain.model.like import LikeToggle
from chorus.domain.model.reply import Reply
from chorus.domain.repository import RecordStore
from chorus.domain.value import Author, ReplyId, ScopeId, UserId


class ReplyService:
    """Domain service for submitting replies and toggling likes."""

    def __init__(
        self,
        record_store: RecordStore,
        max_content_length: int = 10000,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize reply service.

        Args:
            record_store: Record store adapter
            max_content_length: Longest reply content accepted
            clock: Source of created_at timestamps
        """
        self.record_store = record_store
        self.max_content_length = max_content_length
        self.clock = clock

    def validate_content(self, content: str) -> None:
        """Reject content that must never reach the record store.

        Raises:
            ValidationError: If content is empty, whitespace-only or too long
        """
        if not content or not content.strip():
            raise ValidationError("Reply content must not be empty")
        if len(content) > self.max_content_length:
            raise ValidationError(
                f"Reply content must be at most {self.max_content_length} characters"
            )

    async def submit_reply(
        self,
        scope_id: ScopeId,
        author: Author,
        content: str,
        parent_id: Optional[ReplyId] = None,
    ) -> Reply:
        """Create a reply in a thread scope.

        Args:
            scope_id: Thread scope the reply belongs to
            author: Author of the reply
            content: Reply text
            parent_id: Reply being answered (None for top-level)

        Returns:
            The stored reply

        Raises:
            ValidationError: If content is rejected (nothing is written)
            WriteFailure: If the record store rejects the append
        """
        with logfire.span(
            "reply_service.submit_reply",
            scope_id=scope_id,
            author_id=author.id,
            parent_id=parent_id,
        ):
            try:
                self.validate_content(content)
            except ValidationError as e:
                logfire.warn("Reply rejected", scope_id=scope_id, reason=str(e))
                raise

            reply = Reply(
                id=ReplyId(str(uuid4())),
                scope_id=scope_id,
                author_id=author.id,
                author_display_name=author.display_name.root,
                author_avatar_url=author.avatar_url,
                content=content,
                parent_id=parent_id,
                created_at=self.clock(),
                like_count=0,
                is_system_authored=author.is_system,
            )

            try:
                saved = await self.record_store.append(scope_id, reply)
            except WriteFailure as e:
                logfire.error(
                    "Reply append failed",
                    scope_id=scope_id,
                    reply_id=reply.id,
                    error=str(e),
                )
                raise

            logfire.info(
                "Reply created",
                reply_id=saved.id,
                scope_id=scope_id,
                parent_id=parent_id,
            )
            return saved

    async def toggle_like(self, reply_id: ReplyId, user_id: UserId) -> LikeToggle:
        """Like a reply, or remove the like if the user already likes it.

        Marker existence is read before anything is written, inside the
        record store's transaction, so a retried call flips the state once
        per call and never double counts. The like count itself is only
        eventually consistent with the markers.

        Args:
            reply_id: Reply to like or unlike
            user_id: User toggling the like

        Returns:
            Whether the user likes the reply afterwards, and its like count

        Raises:
            NotFoundError: If the reply does not exist
            WriteFailure: If the record store rejects a write
        """
        with logfire.span(
            "reply_service.toggle_like", reply_id=reply_id, user_id=user_id
        ):
            try:
                async with self.record_store.transaction():
                    reply = await self.record_store.get_reply(reply_id)
                    if reply is None:
                        logfire.warn("Like on non-existent reply", reply_id=reply_id)
                        raise NotFoundError("Reply", reply_id)

                    liked = await self.record_store.has_like_marker(reply_id, user_id)
                    await self.record_store.set_like_marker(
                        reply_id, user_id, present=not liked
                    )
                    updated = await self.record_store.adjust_like_count(
                        reply_id, -1 if liked else 1
                    )
            except WriteFailure as e:
                logfire.error(
                    "Like toggle failed",
                    reply_id=reply_id,
                    user_id=user_id,
                    error=str(e),
                )
                raise

            logfire.info(
                "Like removed" if liked else "Like added",
                reply_id=reply_id,
                user_id=user_id,
                like_count=updated.like_count,
            )
            return LikeToggle(
                reply_id=reply_id,
                user_id=user_id,
                liked=not liked,
                like_count=updated.like_count,
            )
