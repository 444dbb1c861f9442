"""In-memory record store adapter.

Process-local implementation of RecordStore. Replies and like markers live
in dictionaries and every change is fanned out to the subscribers of the
reply's scope through one asyncio.Queue per subscriber.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Literal, Optional

import logfire

from chorus.adapter.error import WriteFailure
from chorus.domain.model.event import RecordEvent
from chorus.domain.model.like import LikeMarker
from chorus.domain.model.reply import Reply
from chorus.domain.repository.record_store import RecordStore
from chorus.domain.value import ReplyId, ScopeId, UserId


class InMemoryRecordStore(RecordStore):
    """In-memory implementation of RecordStore."""

    def __init__(self) -> None:
        self._replies: dict[ReplyId, Reply] = {}
        self._markers: dict[tuple[ReplyId, UserId], LikeMarker] = {}
        self._subscribers: dict[ScopeId, list[asyncio.Queue[RecordEvent]]] = {}
        self._lock = asyncio.Lock()
        # Events held back until the open transaction commits
        self._pending: Optional[list[RecordEvent]] = None

    async def subscribe(self, scope_id: ScopeId) -> AsyncIterator[RecordEvent]:
        """Snapshot of the scope as upserts, then live events until cancelled."""
        queue: asyncio.Queue[RecordEvent] = asyncio.Queue()
        self._subscribers.setdefault(scope_id, []).append(queue)
        logfire.debug("Record stream subscribed", scope_id=scope_id)
        try:
            for reply in self.replies_in_scope(scope_id):
                yield RecordEvent.upsert(reply)
            while True:
                yield await queue.get()
        finally:
            self._subscribers[scope_id].remove(queue)
            if not self._subscribers[scope_id]:
                del self._subscribers[scope_id]
            logfire.debug("Record stream unsubscribed", scope_id=scope_id)

    def subscriber_count(self, scope_id: ScopeId) -> int:
        return len(self._subscribers.get(scope_id, []))

    def replies_in_scope(self, scope_id: ScopeId) -> list[Reply]:
        return [r for r in self._replies.values() if r.scope_id == scope_id]

    async def append(self, scope_id: ScopeId, record: Reply) -> Reply:
        """Store a new reply and publish it."""
        if record.scope_id != scope_id:
            raise WriteFailure("append", f"reply belongs to scope {record.scope_id}")
        if record.id in self._replies:
            raise WriteFailure("append", f"reply id {record.id} already exists")
        self._replies[record.id] = record
        self._publish(RecordEvent.upsert(record))
        return record

    async def get_reply(self, reply_id: ReplyId) -> Optional[Reply]:
        return self._replies.get(reply_id)

    async def has_like_marker(self, reply_id: ReplyId, user_id: UserId) -> bool:
        return (reply_id, user_id) in self._markers

    async def set_like_marker(
        self, reply_id: ReplyId, user_id: UserId, present: bool
    ) -> None:
        if reply_id not in self._replies:
            raise WriteFailure("set_like_marker", f"reply {reply_id} not found")
        if present:
            self._markers.setdefault(
                (reply_id, user_id), LikeMarker(reply_id=reply_id, user_id=user_id)
            )
        else:
            self._markers.pop((reply_id, user_id), None)

    async def adjust_like_count(
        self, reply_id: ReplyId, delta: Literal[-1, 1]
    ) -> Reply:
        reply = self._replies.get(reply_id)
        if reply is None:
            raise WriteFailure("adjust_like_count", f"reply {reply_id} not found")
        updated = reply.with_like_count(reply.like_count + delta)
        self._replies[reply_id] = updated
        self._publish(RecordEvent.upsert(updated))
        return updated

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Serialize check-then-act sequences against this store.

        If the block raises, replies and like markers are restored to what
        they were on entry and none of the events raised inside the block
        reach subscribers. Events are published only on commit.
        """
        async with self._lock:
            replies = dict(self._replies)
            markers = dict(self._markers)
            self._pending = []
            try:
                yield
            except BaseException:
                self._replies = replies
                self._markers = markers
                logfire.debug("Record store transaction rolled back")
                raise
            else:
                for event in self._pending:
                    self._fan_out(event)
            finally:
                self._pending = None

    def count_like_markers(self, reply_id: ReplyId) -> int:
        """True like count, for reconciling the denormalized counter."""
        return sum(1 for r_id, _ in self._markers if r_id == reply_id)

    def upsert(self, record: Reply) -> None:
        """Write a reply on behalf of another client and publish it."""
        self._replies[record.id] = record
        self._publish(RecordEvent.upsert(record))

    def seed(self, records: Iterable[Reply]) -> None:
        for record in records:
            self.upsert(record)

    def remove(self, reply_id: ReplyId) -> Optional[Reply]:
        """Delete a reply on behalf of a moderation collaborator."""
        record = self._replies.pop(reply_id, None)
        if record is not None:
            for key in [k for k in self._markers if k[0] == reply_id]:
                del self._markers[key]
            self._publish(RecordEvent.remove(record))
        return record

    def _publish(self, event: RecordEvent) -> None:
        if self._pending is not None:
            self._pending.append(event)
        else:
            self._fan_out(event)

    def _fan_out(self, event: RecordEvent) -> None:
        for queue in self._subscribers.get(event.record.scope_id, []):
            queue.put_nowait(event)


class MockRecordStore(InMemoryRecordStore):
    """In-memory record store with failure injection for testing.

    Every write-side call is recorded in ``calls`` as (operation, reply_id).
    Operations listed in ``failing`` raise WriteFailure before touching any
    state.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, ReplyId]] = []
        self.failing: set[str] = set()

    def fail(self, *operations: str) -> None:
        self.failing.update(operations)

    def recover(self) -> None:
        self.failing.clear()

    def _check(self, operation: str, reply_id: ReplyId) -> None:
        self.calls.append((operation, reply_id))
        if operation in self.failing:
            raise WriteFailure(operation, "injected failure")

    async def append(self, scope_id: ScopeId, record: Reply) -> Reply:
        self._check("append", record.id)
        return await super().append(scope_id, record)

    async def set_like_marker(
        self, reply_id: ReplyId, user_id: UserId, present: bool
    ) -> None:
        self._check("set_like_marker", reply_id)
        await super().set_like_marker(reply_id, user_id, present)

    async def adjust_like_count(
        self, reply_id: ReplyId, delta: Literal[-1, 1]
    ) -> Reply:
        self._check("adjust_like_count", reply_id)
        return await super().adjust_like_count(reply_id, delta)
