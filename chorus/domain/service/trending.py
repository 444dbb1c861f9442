"""Trending selector.

Picks the single highest-ranked reply beneath each top-level reply. The
choice depends only on the records, never on view state: collapsing or
expanding a thread changes where the trending reply is drawn, not which
reply it is.
"""

from typing import Optional

from chorus.domain.model.reply import Reply
from chorus.domain.service.thread_index import ThreadIndex
from chorus.domain.value import ReplyId


def trending_rank(reply: Reply) -> tuple[int, object, str]:
    """Most likes first, then most recent; id keeps the order total."""
    return (reply.like_count, reply.created_at, reply.id)


def trending_descendant(index: ThreadIndex, root_id: ReplyId) -> Optional[Reply]:
    """Highest-ranked reply anywhere beneath a top-level reply.

    Args:
        index: Thread index of the scope
        root_id: Id of a top-level reply (orphans count as top-level)

    Returns:
        The reply maximizing (like_count, created_at), or None when root_id
        is not top-level or has no replies at all
    """
    if root_id not in index or index.depth(root_id) != 0:
        return None
    descendants = index.descendants(root_id)
    if not descendants:
        return None
    return max(descendants, key=trending_rank)


def trending_by_root(index: ThreadIndex) -> dict[ReplyId, Reply]:
    """Trending reply for every top-level reply that has one."""
    trending: dict[ReplyId, Reply] = {}
    for root in index.roots():
        reply = trending_descendant(index, root.id)
        if reply is not None:
            trending[root.id] = reply
    return trending
