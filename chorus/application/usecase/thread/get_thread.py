"""Get thread use case."""

from datetime import datetime

from pydantic import BaseModel

from chorus.domain.model.render import RenderModel, RenderNode
from chorus.domain.value import ReplyId

from ..base import ThreadUseCase, ViewerRequest


class RenderNodeItem(BaseModel):
    """Reply in a rendered thread.

    Recursive structure mirroring the domain render tree.
    """

    reply_id: str
    parent_id: str | None
    author_id: str
    author_display_name: str
    author_avatar_url: str | None
    content: str
    created_at: datetime
    like_count: int
    is_system_authored: bool
    liked_by_viewer: bool
    depth: int
    reply_count: int
    hidden_count: int
    is_expanded: bool
    is_collapsed: bool
    is_trending: bool
    is_trending_preview: bool
    is_focused: bool
    is_draft_target: bool
    children: list["RenderNodeItem"]

    @classmethod
    def from_domain(cls, node: RenderNode, liked: set[ReplyId]) -> "RenderNodeItem":
        """Convert a domain RenderNode to a response item.

        Args:
            node: Domain render node
            liked: Ids of replies the viewer likes

        Returns:
            Response item with children recursively converted
        """
        reply = node.reply
        return cls(
            reply_id=reply.id,
            parent_id=reply.parent_id,
            author_id=reply.author_id,
            author_display_name=reply.author_display_name,
            author_avatar_url=reply.author_avatar_url,
            content=reply.content,
            created_at=reply.created_at,
            like_count=reply.like_count,
            is_system_authored=reply.is_system_authored,
            liked_by_viewer=reply.id in liked,
            depth=node.depth,
            reply_count=node.reply_count,
            hidden_count=node.hidden_count,
            is_expanded=node.is_expanded,
            is_collapsed=node.is_collapsed,
            is_trending=node.is_trending,
            is_trending_preview=node.is_trending_preview,
            is_focused=node.is_focused,
            is_draft_target=node.is_draft_target,
            children=[cls.from_domain(child, liked) for child in node.children],
        )


class ThreadItem(BaseModel):
    """One rendered top-level thread."""

    root: RenderNodeItem
    trending_preview: RenderNodeItem | None
    hidden_counts: dict[str, int]

    @classmethod
    def from_domain(cls, model: RenderModel, liked: set[ReplyId]) -> "ThreadItem":
        return cls(
            root=RenderNodeItem.from_domain(model.root, liked),
            trending_preview=RenderNodeItem.from_domain(model.trending_preview, liked)
            if model.trending_preview is not None
            else None,
            hidden_counts=dict(model.hidden_counts),
        )


class GetThreadRequest(ViewerRequest):
    """Get thread request."""

    pass


class GetThreadResponse(BaseModel):
    """Get thread response.

    In drill-down view threads is empty and focused/ancestors are set.
    """

    scope_id: str
    threads: list[ThreadItem]
    ancestors: list[RenderNodeItem]
    focused: ThreadItem | None
    orphan_ids: list[str]
    total_replies: int


class GetThreadUseCase(ThreadUseCase):
    """Use case for rendering a thread scope for a viewer."""

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Get or open the viewer's session for the scope
        2. Run a render pass (applies every queued update first)
        3. Look up which rendered replies the viewer likes
        4. Convert the render model to response items

        Args:
            request: Get thread request

        Returns:
            Rendered thread scope with per-viewer like state
        """
        session = await self.open_session(request)
        model = await session.render()

        if model.focus is not None:
            models = [model.focus.focused]
            extra_nodes = list(model.focus.ancestors)
        else:
            models = list(model.threads)
            extra_nodes = []

        rendered: list[RenderNode] = list(extra_nodes)
        for thread in models:
            rendered.extend(thread.root.walk())
            if thread.trending_preview is not None:
                rendered.append(thread.trending_preview)

        liked: set[ReplyId] = set()
        for node in rendered:
            if await session.record_store.has_like_marker(node.id, session.viewer.id):
                liked.add(node.id)

        return GetThreadResponse(
            scope_id=request.scope_id,
            threads=[ThreadItem.from_domain(thread, liked) for thread in model.threads],
            ancestors=[RenderNodeItem.from_domain(node, liked) for node in extra_nodes],
            focused=ThreadItem.from_domain(model.focus.focused, liked)
            if model.focus is not None
            else None,
            orphan_ids=list(model.orphan_ids),
            total_replies=len(session.index),
        )
