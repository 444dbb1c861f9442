"""Record store interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import AsyncIterator, Literal, Optional

from chorus.domain.model.event import RecordEvent
from chorus.domain.model.reply import Reply
from chorus.domain.value import ReplyId, ScopeId, UserId


class RecordStore(ABC):
    """Record store for replies and like markers.

    Defines the contract the engine needs from whatever backend holds the
    replies. Implementations live in the adapter layer. Write methods raise
    WriteFailure when the backend rejects them.
    """

    @abstractmethod
    def subscribe(self, scope_id: ScopeId) -> AsyncIterator[RecordEvent]:
        """Stream changes to the replies of a thread scope.

        The stream starts with an upsert for every reply already in the
        scope, then delivers live changes. Events may arrive out of
        created_at order or in bursts. Cancelling the consuming task
        unsubscribes.

        Args:
            scope_id: The thread scope to follow

        Returns:
            Async iterator of record events
        """
        pass

    @abstractmethod
    async def append(self, scope_id: ScopeId, record: Reply) -> Reply:
        """Append a new reply to a scope.

        Args:
            scope_id: The thread scope
            record: The reply to store

        Returns:
            The stored reply

        Raises:
            WriteFailure: If the backend rejects the write
        """
        pass

    @abstractmethod
    async def get_reply(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def has_like_marker(self, reply_id: ReplyId, user_id: UserId) -> bool:
        """Check whether a user currently likes a reply.

        Args:
            reply_id: The reply's identifier
            user_id: The user's identifier

        Returns:
            True if a like marker exists
        """
        pass

    @abstractmethod
    async def set_like_marker(
        self, reply_id: ReplyId, user_id: UserId, present: bool
    ) -> None:
        """Create or delete the like marker for (reply, user).

        Setting a marker to the state it is already in is a no-op.

        Raises:
            WriteFailure: If the backend rejects the write
        """
        pass

    @abstractmethod
    async def adjust_like_count(
        self, reply_id: ReplyId, delta: Literal[-1, 1]
    ) -> Reply:
        """Add delta to the reply's denormalized like count (never below 0).

        Returns:
            The reply carrying its new like count

        Raises:
            WriteFailure: If the backend rejects the write
        """
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Group reads and writes so check-then-act runs atomically.

        If the block raises, none of the writes made inside it take effect.

        Usage:
            async with store.transaction():
                present = await store.has_like_marker(reply_id, user_id)
                await store.set_like_marker(reply_id, user_id, not present)
        """
        pass
