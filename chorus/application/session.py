"""Thread session.

A ThreadSession is one reader's live view of one thread scope. It owns the
thread index and the view state for that scope, follows the record store
stream, and exposes the action dispatchers the presentation layer calls.

Record store events and the results of the reader's own writes are funnelled
through a single update queue. Nothing is applied to the index until the
next render pass drains that queue, so every render reflects all updates
received so far and never a partial mix.
"""

import asyncio
from typing import Optional

import logfire

from chorus.application.error import SessionClosedError, StreamFailedError
from chorus.domain.error import NotFoundError
from chorus.domain.model.event import RecordEvent
from chorus.domain.model.like import LikeToggle
from chorus.domain.model.render import RenderModel, ScopeRenderModel
from chorus.domain.model.reply import Reply
from chorus.domain.model.view_state import ViewState
from chorus.domain.repository import RecordStore
from chorus.domain.service import (
    DEFAULT_VISIBLE_REPLIES,
    ReplyService,
    ThreadIndex,
    build_render_model,
    build_scope_model,
    reveal,
)
from chorus.domain.value import Author, RecordEventType, ReplyId, ScopeId


class ThreadSession:
    """Live view of one thread scope for one reader."""

    def __init__(
        self,
        scope_id: ScopeId,
        viewer: Author,
        record_store: RecordStore,
        reply_service: ReplyService,
        default_visible: int = DEFAULT_VISIBLE_REPLIES,
    ) -> None:
        self.scope_id = scope_id
        self.viewer = viewer
        self.record_store = record_store
        self.reply_service = reply_service
        self.default_visible = default_visible
        self.index = ThreadIndex()
        self.view_state = ViewState()
        self._updates: asyncio.Queue[RecordEvent] = asyncio.Queue()
        self._consumer: Optional[asyncio.Task[None]] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._consumer is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def open(self) -> "ThreadSession":
        """Subscribe to the scope and start receiving updates."""
        if self._closed:
            raise SessionClosedError(self.scope_id)
        if self._consumer is None:
            self._consumer = asyncio.create_task(
                self._consume(), name=f"thread-session:{self.scope_id}"
            )
            logfire.info(
                "Thread session opened",
                scope_id=self.scope_id,
                viewer_id=self.viewer.id,
            )
        return self

    async def close(self) -> None:
        """Unsubscribe and discard the view state.

        Writes already sent to the record store are not cancelled; their
        results are simply no longer applied to this session.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if self._consumer is not None:
                self._consumer.cancel()
                try:
                    await self._consumer
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    # Already logged by the consumer when the stream died
                    logfire.info(
                        "Closed session with failed record stream",
                        scope_id=self.scope_id,
                        error=str(e),
                    )
        finally:
            self.view_state = ViewState()
            self._updates = asyncio.Queue()
        logfire.info("Thread session closed", scope_id=self.scope_id)

    async def _consume(self) -> None:
        try:
            async for event in self.record_store.subscribe(self.scope_id):
                self._updates.put_nowait(event)
        except Exception as e:
            logfire.error(
                "Record stream failed", scope_id=self.scope_id, error=str(e)
            )
            raise

    async def sync(self) -> int:
        """Apply every update received so far to the index.

        Yields to the event loop once first so events the record store has
        already delivered reach the update queue.

        Returns:
            Number of updates applied

        Raises:
            SessionClosedError: If the session is closed
            StreamFailedError: If the record stream has died
        """
        self._ensure_open()
        await asyncio.sleep(0)
        self._ensure_stream_alive()
        applied = 0
        while not self._updates.empty():
            event = self._updates.get_nowait()
            self.index.apply(event)
            if event.type == RecordEventType.REMOVE:
                self.view_state = self.view_state.forget(event.record.id)
            applied += 1
        if applied:
            logfire.debug(
                "Thread updates applied", scope_id=self.scope_id, count=applied
            )
        return applied

    async def render(self) -> ScopeRenderModel:
        """Render pass over the whole scope."""
        await self.sync()
        focused_id = self.view_state.focused_node_id
        if focused_id is not None and focused_id not in self.index:
            logfire.warn(
                "Focused reply no longer exists, leaving drill-down",
                scope_id=self.scope_id,
                reply_id=focused_id,
            )
            self.view_state = self.view_state.unfocus()
        return build_scope_model(
            self.index, self.scope_id, self.view_state, self.default_visible
        )

    async def get_render_model(self, root_id: ReplyId) -> RenderModel:
        """Render pass over the thread rooted at root_id.

        Raises:
            NotFoundError: If root_id is not in the scope
        """
        await self.sync()
        return build_render_model(
            self.index, root_id, self.view_state, self.default_visible
        )

    async def reply(self, parent_id: Optional[ReplyId], content: str) -> Reply:
        """Submit a reply as the viewer.

        On success the parent is revealed so the new reply is immediately
        visible, even if the parent was collapsed or hidden, and the draft
        target is cleared.

        Raises:
            ValidationError: If content is rejected (nothing is written)
            NotFoundError: If parent_id is not in the scope
            WriteFailure: If the record store rejects the append
            SessionClosedError: If the session is closed
        """
        await self.sync()
        if parent_id is not None and parent_id not in self.index:
            logfire.warn(
                "Reply to unknown parent", scope_id=self.scope_id, parent_id=parent_id
            )
            raise NotFoundError("Reply", parent_id)

        reply = await self.reply_service.submit_reply(
            self.scope_id, self.viewer, content, parent_id
        )
        if self._closed:
            logfire.info(
                "Reply completed after session closed", scope_id=self.scope_id
            )
            return reply

        self._updates.put_nowait(RecordEvent.upsert(reply))
        await self.sync()
        if parent_id is not None:
            self.view_state = reveal(
                self.index, self.view_state, parent_id, self.default_visible
            )
        self.view_state = self.view_state.clear_draft_target()
        return reply

    async def reply_to_draft(self, content: str) -> Reply:
        """Submit a reply to the draft target, else the focused reply.

        With neither set the reply starts a new top-level thread.
        """
        state = self.view_state
        parent_id = state.draft_reply_target or state.focused_node_id
        return await self.reply(parent_id, content)

    async def like(self, reply_id: ReplyId) -> LikeToggle:
        """Toggle the viewer's like on a reply.

        Raises:
            NotFoundError: If the reply does not exist
            WriteFailure: If the record store rejects a write
            SessionClosedError: If the session is closed
        """
        self._ensure_open()
        result = await self.reply_service.toggle_like(reply_id, self.viewer.id)
        if self._closed:
            return result

        current = self.index.get(reply_id)
        if current is not None and current.like_count != result.like_count:
            self._updates.put_nowait(
                RecordEvent.upsert(current.with_like_count(result.like_count))
            )
        return result

    def toggle_expand(self, node_id: ReplyId) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.toggle_expand(node_id)
        return self.view_state

    def toggle_collapse(self, node_id: ReplyId) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.toggle_collapse(node_id)
        return self.view_state

    def focus(self, node_id: ReplyId) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.focus(node_id)
        return self.view_state

    def unfocus(self) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.unfocus()
        return self.view_state

    def set_draft_target(self, node_id: ReplyId) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.set_draft_target(node_id)
        return self.view_state

    def clear_draft_target(self) -> ViewState:
        self._ensure_open()
        self.view_state = self.view_state.clear_draft_target()
        return self.view_state

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(self.scope_id)

    def _ensure_stream_alive(self) -> None:
        consumer = self._consumer
        if consumer is None or not consumer.done() or consumer.cancelled():
            return
        error = consumer.exception()
        if error is not None:
            raise StreamFailedError(self.scope_id) from error
