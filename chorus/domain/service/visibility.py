"""Visibility calculator.

Turns a thread index plus a view state into the exact set of replies to
draw. Per node the rules are:

1. Collapsed: the node itself is drawn, nothing beneath it is, whatever
   flags its descendants carry.
2. Expanded (or the focused node in drill-down): every direct reply is
   drawn, each subject to these rules in turn.
3. Otherwise only the last ``default_visible`` direct replies by created_at
   are drawn and the rest are counted in hidden_count.

On top of that every top-level thread surfaces its trending reply. When the
trending reply is not effectively visible through rules 1-3 it is emitted
as a detached preview block directly under the top-level reply; when it is
visible it is only flagged in place.

Everything here is a pure function of (index, view state).
"""

from typing import Optional

from chorus.domain.error import NotFoundError
from chorus.domain.model.render import (
    FocusRenderModel,
    RenderModel,
    RenderNode,
    ScopeRenderModel,
    VisibleReplies,
)
from chorus.domain.model.reply import Reply
from chorus.domain.model.view_state import ViewState
from chorus.domain.service.thread_index import ThreadIndex
from chorus.domain.service.trending import trending_descendant
from chorus.domain.value import ReplyId, ScopeId

DEFAULT_VISIBLE_REPLIES = 2


def latest(replies: list[Reply], count: int) -> list[Reply]:
    """The last count replies of an oldest-first list."""
    return replies[-count:] if count > 0 else []


def shows_all_replies(node_id: ReplyId, view_state: ViewState) -> bool:
    """Expanded nodes and the drill-down target show every direct reply."""
    return view_state.is_expanded(node_id) or view_state.focused_node_id == node_id


def visible_replies(
    index: ThreadIndex,
    node_id: ReplyId,
    view_state: ViewState,
    default_visible: int = DEFAULT_VISIBLE_REPLIES,
) -> VisibleReplies:
    """Which direct replies of a node are drawn under the current view state.

    show_trending_preview is only ever set for top-level nodes outside
    drill-down view.

    Raises:
        NotFoundError: If node_id is not in the index
    """
    if node_id not in index:
        raise NotFoundError("Reply", node_id)

    if view_state.is_collapsed(node_id):
        return VisibleReplies(shown=[], hidden_count=0, show_trending_preview=False)

    shown, hidden_count = _window(index, node_id, view_state, default_visible)
    return VisibleReplies(
        shown=shown,
        hidden_count=hidden_count,
        show_trending_preview=_needs_trending_preview(
            index, node_id, view_state, default_visible
        ),
    )


def is_effectively_visible(
    index: ThreadIndex,
    root_id: ReplyId,
    target_id: ReplyId,
    view_state: ViewState,
    default_visible: int = DEFAULT_VISIBLE_REPLIES,
) -> bool:
    """Whether normal traversal from root_id reaches target_id.

    Walks the ancestor path of the target from the root downwards. Any
    collapsed node on the way (the root included) hides the target. At each
    node that does not show all its replies, the next node on the path must
    be among its last default_visible replies.
    """
    if target_id == root_id:
        return root_id in index
    path = index.ancestors(target_id)
    if not path or path[0].id != root_id:
        return False

    target = index.get(target_id)
    chain = [*path, target]
    for ancestor, next_node in zip(chain, chain[1:]):
        if view_state.is_collapsed(ancestor.id):
            return False
        if shows_all_replies(ancestor.id, view_state):
            continue
        window = latest(index.children(ancestor.id), default_visible)
        if next_node.id not in {reply.id for reply in window}:
            return False
    return True


def build_render_model(
    index: ThreadIndex,
    root_id: ReplyId,
    view_state: ViewState,
    default_visible: int = DEFAULT_VISIBLE_REPLIES,
    surface_trending: bool = True,
) -> RenderModel:
    """Render model for the thread rooted at root_id.

    Depths in the model are relative to root_id.

    Args:
        index: Thread index of the scope
        root_id: Reply to draw as the thread root
        view_state: Current view flags
        default_visible: Replies drawn per node in the default state
        surface_trending: Whether to look for a trending reply at all

    Returns:
        Nested render tree, detached trending preview and hidden counts

    Raises:
        NotFoundError: If root_id is not in the index
    """
    root = index.get(root_id)
    if root is None:
        raise NotFoundError("Reply", root_id)

    trending: Optional[Reply] = None
    preview: Optional[RenderNode] = None
    if surface_trending and view_state.focused_node_id is None:
        trending = trending_descendant(index, root_id)
        if trending is not None and _needs_trending_preview(
            index, root_id, view_state, default_visible, trending
        ):
            preview = _node(
                index,
                trending,
                view_state,
                depth=1,
                descendant_count=len(index.descendants(trending.id)),
                is_trending_preview=True,
            )

    inline_trending_id = (
        trending.id if trending is not None and preview is None else None
    )
    hidden_counts: dict[ReplyId, int] = {}
    root_node = _render_subtree(
        index,
        root,
        view_state,
        depth=0,
        default_visible=default_visible,
        trending_id=inline_trending_id,
        descendant_counts=index.descendant_counts(root_id),
        hidden_counts=hidden_counts,
    )
    return RenderModel(
        root=root_node,
        visible=root_node.children,
        trending_preview=preview,
        hidden_counts=hidden_counts,
    )


def build_scope_model(
    index: ThreadIndex,
    scope_id: ScopeId,
    view_state: ViewState,
    default_visible: int = DEFAULT_VISIBLE_REPLIES,
) -> ScopeRenderModel:
    """Render model for a whole thread scope.

    In drill-down view the focused reply is drawn as a thread root with
    every direct reply shown, preceded by its ancestor chain (each ancestor
    drawn on its own, without replies). Trending replies are not surfaced in
    drill-down view. A focus that does not resolve falls back to the normal
    view.
    """
    orphan_ids = sorted(index.orphans)
    focused_id = view_state.focused_node_id
    if focused_id is not None and focused_id in index:
        chain = index.ancestors(focused_id)
        counts = index.descendant_counts(chain[0].id) if chain else {}
        ancestors = [
            _node(
                index,
                ancestor,
                view_state,
                depth=0,
                descendant_count=counts[ancestor.id],
            )
            for ancestor in chain
        ]
        focused = build_render_model(
            index,
            focused_id,
            view_state,
            default_visible=default_visible,
            surface_trending=False,
        )
        return ScopeRenderModel(
            scope_id=scope_id,
            focus=FocusRenderModel(ancestors=ancestors, focused=focused),
            orphan_ids=orphan_ids,
        )

    if focused_id is not None:
        view_state = view_state.unfocus()
    threads = [
        build_render_model(index, root.id, view_state, default_visible)
        for root in index.roots()
    ]
    return ScopeRenderModel(scope_id=scope_id, threads=threads, orphan_ids=orphan_ids)


def reveal(
    index: ThreadIndex,
    view_state: ViewState,
    node_id: ReplyId,
    default_visible: int = DEFAULT_VISIBLE_REPLIES,
) -> ViewState:
    """Make a node and all of its replies visible.

    Clears collapse on the node and every ancestor, expands the node, and
    expands each ancestor whose default window would otherwise hide the
    next node on the path. Flags elsewhere in the tree are left alone.
    """
    if node_id not in index:
        return view_state

    path = index.ancestors(node_id)
    state = view_state.uncollapse([node_id, *(a.id for a in path)]).expand(node_id)
    chain = [*path, index.get(node_id)]
    for ancestor, next_node in zip(chain, chain[1:]):
        if shows_all_replies(ancestor.id, state):
            continue
        window = latest(index.children(ancestor.id), default_visible)
        if next_node.id not in {reply.id for reply in window}:
            state = state.expand(ancestor.id)
    return state


def _needs_trending_preview(
    index: ThreadIndex,
    node_id: ReplyId,
    view_state: ViewState,
    default_visible: int,
    trending: Optional[Reply] = None,
) -> bool:
    if view_state.focused_node_id is not None:
        return False
    if view_state.is_collapsed(node_id):
        return False
    if trending is None:
        trending = trending_descendant(index, node_id)
    if trending is None:
        return False
    return not is_effectively_visible(
        index, node_id, trending.id, view_state, default_visible
    )


def _window(
    index: ThreadIndex,
    node_id: ReplyId,
    view_state: ViewState,
    default_visible: int,
) -> tuple[list[Reply], int]:
    """Replies shown under a node that is not collapsed, and how many are held back."""
    children = index.children(node_id)
    if shows_all_replies(node_id, view_state):
        shown = children
    else:
        shown = latest(children, default_visible)
    return shown, len(children) - len(shown)


def _node(
    index: ThreadIndex,
    reply: Reply,
    view_state: ViewState,
    depth: int,
    descendant_count: int,
    is_trending_preview: bool = False,
) -> RenderNode:
    """A render node drawn without any of its replies."""
    return RenderNode(
        reply=reply,
        depth=depth,
        reply_count=len(index.children(reply.id)),
        descendant_count=descendant_count,
        is_expanded=view_state.is_expanded(reply.id),
        is_collapsed=view_state.is_collapsed(reply.id),
        is_trending=is_trending_preview,
        is_trending_preview=is_trending_preview,
        is_focused=view_state.focused_node_id == reply.id,
        is_draft_target=view_state.draft_reply_target == reply.id,
        is_orphan=index.is_orphan(reply.id),
    )


def _render_subtree(
    index: ThreadIndex,
    reply: Reply,
    view_state: ViewState,
    depth: int,
    default_visible: int,
    trending_id: Optional[ReplyId],
    descendant_counts: dict[ReplyId, int],
    hidden_counts: dict[ReplyId, int],
) -> RenderNode:
    if view_state.is_collapsed(reply.id):
        shown, hidden_count = [], 0
    else:
        shown, hidden_count = _window(index, reply.id, view_state, default_visible)
    if hidden_count > 0:
        hidden_counts[reply.id] = hidden_count

    children = [
        _render_subtree(
            index,
            child,
            view_state,
            depth=depth + 1,
            default_visible=default_visible,
            trending_id=trending_id,
            descendant_counts=descendant_counts,
            hidden_counts=hidden_counts,
        )
        for child in shown
    ]
    node = _node(
        index, reply, view_state, depth, descendant_counts.get(reply.id, 0)
    )
    return node.model_copy(
        update={
            "hidden_count": hidden_count,
            "is_trending": reply.id == trending_id,
            "children": children,
        }
    )
